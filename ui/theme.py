import tkinter as tk
from tkinter import ttk
from tkinter import font as tkfont
from typing import Union

import ttkbootstrap as tb

_THEME_APPLIED = False


COLORS = {
    'danger': '#dc3545',
    'key': '#e9ecef',
    'key_active': '#dfe3e7',
    'dot': '#17a2b8',
}

FONTS = {
    'caption': ('Arial', 9),
    'display': ('Arial', 18),
    'key': ('', 16, 'bold'),
}


def apply_theme(root: Union[tk.Tk, tk.Toplevel], theme: str = 'superhero', scaling: float = 1.25):
    global _THEME_APPLIED
    # Prevent re-initializing theme/styles on child windows (would affect global app styles)
    if _THEME_APPLIED:
        return
    try:
        # Initialize bootstrap style (sets theme globally)
        tb.Style(theme=theme)
    except Exception:
        # Unknown theme name: keep ttkbootstrap's default
        pass

    style = ttk.Style()

    try:
        root.tk.call('tk', 'scaling', scaling)
    except Exception:
        pass

    # Enlarge Tk named fonts (affects many widgets)
    try:
        for name, size in (
            ("TkDefaultFont", 11),
            ("TkTextFont", 11),
            ("TkMenuFont", 11),
        ):
            f = tkfont.nametofont(name)
            f.configure(size=size)
    except Exception:
        pass

    # Display rows: read-only entries, larger text, right aligned
    try:
        style.configure('Display.TEntry', padding=(8, 6), font=FONTS['display'])
        style.configure('Caption.TLabel', font=FONTS['caption'])
        style.configure('Dot.TLabel', font=('', 14, 'bold'), foreground=COLORS['dot'])
    except Exception:
        pass

    # Keypad buttons
    try:
        style.configure('Key.TButton', padding=(10, 12), font=FONTS['key'],
                        foreground='#212529', background=COLORS['key'])
        style.map('Key.TButton',
                  background=[('active', COLORS['key_active']), ('!disabled', COLORS['key'])])
        style.configure('Backspace.TButton', padding=(10, 12), font=FONTS['key'],
                        foreground='#ffffff', background=COLORS['danger'])
        style.map('Backspace.TButton',
                  background=[('active', '#b52a3a'), ('pressed', '#b52a3a')])
    except Exception:
        pass

    _THEME_APPLIED = True


def themed_button(parent, text: str, variant: str = 'primary', outline: bool = False, command=None, **kwargs):
    """Create a button with consistent look across the app.

    Returns a tb.Button with bootstyle like 'primary', 'secondary',
    'success', 'danger' and optional 'outline'.
    """
    boot = variant.lower()
    if outline:
        boot = f"{boot} outline"
    return tb.Button(parent, text=text, command=command, bootstyle=boot, **kwargs)
