import tkinter as tk
from tkinter import ttk, messagebox
import db


THEMES = ['superhero', 'darkly', 'flatly', 'litera', 'cosmo']


def open_settings_window(root):
    win = tk.Toplevel(root)
    win.title('⚙️ Settings')
    win.geometry('380x260')
    win.transient(root)

    container = ttk.Frame(win, padding=16)
    container.pack(fill='both', expand=True)

    ttk.Label(container, text='Preferences', font=('', 11, 'bold')).pack(anchor='w', pady=(0, 8))

    form = ttk.Frame(container)
    form.pack(fill='x', pady=(0, 12))

    ttk.Label(form, text='Decimal separator:').grid(row=0, column=0, sticky='w', padx=(0, 8), pady=6)
    sep_var = tk.StringVar(value=db.get_decimal_separator())
    ttk.Combobox(form, textvariable=sep_var, values=[',', '.'], state='readonly', width=6).grid(row=0, column=1, sticky='w')

    ttk.Label(form, text='Theme:').grid(row=1, column=0, sticky='w', padx=(0, 8), pady=6)
    theme_var = tk.StringVar(value=db.get_ui_theme())
    ttk.Combobox(form, textvariable=theme_var, values=THEMES, state='readonly', width=12).grid(row=1, column=1, sticky='w')

    ttk.Label(form, text='UI scaling:').grid(row=2, column=0, sticky='w', padx=(0, 8), pady=6)
    scale_var = tk.StringVar(value=f"{db.get_ui_scaling():.2f}")
    ttk.Spinbox(form, textvariable=scale_var, from_=0.5, to=3.0, increment=0.05, width=8).grid(row=2, column=1, sticky='w')

    ttk.Label(container, text='Changes apply the next time the calculator starts.', foreground='#888').pack(anchor='w', pady=(4, 12))

    btns = ttk.Frame(container)
    btns.pack(fill='x')

    def on_save():
        try:
            scaling = float(scale_var.get())
        except ValueError:
            messagebox.showerror('Invalid', 'UI scaling must be a number', parent=win)
            return
        if not 0.5 <= scaling <= 3.0:
            messagebox.showerror('Invalid', 'UI scaling must be between 0.5 and 3.0', parent=win)
            return
        db.set_setting('decimal_separator', sep_var.get() or ',')
        db.set_setting('ui_theme', theme_var.get() or 'superhero')
        db.set_setting('ui_scaling', f"{scaling:.2f}")
        messagebox.showinfo('Saved', 'Settings saved.', parent=win)
        win.destroy()

    from .theme import themed_button
    themed_button(btns, text='Save', variant='primary', command=on_save).pack(side='right')
    themed_button(btns, text='Cancel', variant='secondary', command=win.destroy).pack(side='right', padx=(0, 8))
    return win
