"""Root application entry."""
import logging
import os
import tkinter as tk
from tkinter import messagebox

import db as db
from ui.calculator_window import open_calculator_window
from ui.settings_window import open_settings_window
from ui.theme import apply_theme

logger = logging.getLogger(__name__)

# Global shutdown flag
app_exiting = False


def configure_logging():
    level_name = os.environ.get('VAT_CALC_LOG_LEVEL', 'WARNING').upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def safe_shutdown(root):
    global app_exiting
    if app_exiting:
        return
    app_exiting = True
    try:
        root.destroy()
    except tk.TclError:
        pass


def main():
    configure_logging()
    db.init_db()
    root = tk.Tk()
    root.title("VAT Calculator")
    root.geometry("360x640")
    root.minsize(320, 560)
    apply_theme(root, theme=db.get_ui_theme(), scaling=db.get_ui_scaling())

    menubar = tk.Menu(root)
    file_menu = tk.Menu(menubar, tearoff=0)
    file_menu.add_command(label="Settings", command=lambda: open_settings_window(root))
    file_menu.add_separator()
    file_menu.add_command(label="Exit", command=lambda: safe_shutdown(root))
    menubar.add_cascade(label="File", menu=file_menu)
    help_menu = tk.Menu(menubar, tearoff=0)
    help_menu.add_command(label="About", command=lambda: messagebox.showinfo("About", "VAT Calculator\nNet / Gross / VAT amount"))
    menubar.add_cascade(label="Help", menu=help_menu)
    root.config(menu=menubar)

    open_calculator_window(root, separator=db.get_decimal_separator())
    logger.info("Calculator started")

    root.protocol("WM_DELETE_WINDOW", lambda: safe_shutdown(root))
    root.mainloop()


if __name__ == '__main__':  # pragma: no cover
    main()
