import logging
import tkinter as tk
from tkinter import ttk
from typing import Dict, Optional

from core.converter import BACKSPACE_KEY, CLEAR_KEY, ConverterState, Field, TriFieldConverter
from core.vat_utils import VatRate
from .theme import themed_button

logger = logging.getLogger(__name__)

# Display order, top to bottom
FIELD_ORDER = (Field.GROSS, Field.NET, Field.VAT)
ACTIVE_DOT = '●'


class CalculatorView:
    """Tk view over a TriFieldConverter.

    The view never edits texts itself: every tap is forwarded to the
    converter and the widgets are redrawn from the snapshot it publishes.
    """

    def __init__(self, parent, converter: TriFieldConverter):
        self.converter = converter
        self.frame = ttk.Frame(parent, padding=16)
        self._vars: Dict[Field, tk.StringVar] = {}
        self._dots: Dict[Field, ttk.Label] = {}
        self._rate_buttons: Dict[VatRate, ttk.Button] = {}
        self._effective_var = tk.StringVar(value='')

        self._build_fields()
        self._build_rate_picker()
        self._build_keypad()

        self._unsubscribe = converter.subscribe(self.render)
        self.render(converter.snapshot())

    # ---------------- Layout ----------------
    def _build_fields(self):
        fields = ttk.Frame(self.frame)
        fields.pack(fill='x')
        fields.columnconfigure(0, weight=1)
        for row, field in enumerate(FIELD_ORDER):
            ttk.Label(fields, text=field.title, style='Caption.TLabel').grid(row=row * 2, column=0, sticky='w', pady=(6, 0))
            var = tk.StringVar(value='')
            entry = ttk.Entry(fields, textvariable=var, state='readonly', justify='right', style='Display.TEntry')
            entry.grid(row=row * 2 + 1, column=0, sticky='ew')
            dot = ttk.Label(fields, text='', width=2, style='Dot.TLabel')
            dot.grid(row=row * 2 + 1, column=1, padx=(6, 0))
            for widget in (entry, dot):
                widget.bind('<Button-1>', lambda e, f=field: self.converter.set_active(f))
            self._vars[field] = var
            self._dots[field] = dot

    def _build_rate_picker(self):
        picker = ttk.Frame(self.frame)
        picker.pack(fill='x', pady=(16, 8))
        for col, rate in enumerate(VatRate):
            picker.columnconfigure(col, weight=1)
            btn = themed_button(picker, text=rate.label, variant='secondary', outline=True,
                                command=lambda r=rate: self.converter.set_rate(r))
            btn.grid(row=0, column=col, sticky='ew', padx=3)
            self._rate_buttons[rate] = btn
        ttk.Label(picker, textvariable=self._effective_var, style='Caption.TLabel').grid(row=1, column=0, columnspan=len(self._rate_buttons), sticky='e', pady=(6, 0))

    def _build_keypad(self):
        keypad = ttk.Frame(self.frame)
        keypad.pack(fill='both', expand=True, pady=(8, 0))
        sep = self.converter.separator
        rows = (
            ('1', '2', '3'),
            ('4', '5', '6'),
            ('7', '8', '9'),
            (sep, '0', BACKSPACE_KEY),
        )
        for r, labels in enumerate(rows):
            keypad.rowconfigure(r, weight=1)
            for c, label in enumerate(labels):
                style = 'Backspace.TButton' if label == BACKSPACE_KEY else 'Key.TButton'
                ttk.Button(keypad, text=label, style=style,
                           command=lambda k=label: self.converter.press(k)).grid(row=r, column=c, sticky='nsew', padx=3, pady=3)
        for c in range(3):
            keypad.columnconfigure(c, weight=1)
        themed_button(keypad, text=CLEAR_KEY, variant='danger', outline=True,
                      command=self.converter.clear).grid(row=len(rows), column=0, columnspan=3, sticky='ew', padx=3, pady=(6, 3))

    # ---------------- Rendering ----------------
    def render(self, state: ConverterState):
        for field, var in self._vars.items():
            var.set(state.texts[field])
            self._dots[field].configure(text=ACTIVE_DOT if field is state.active else '')
        effective = self.converter.effective_rate()
        self._effective_var.set('' if effective is None else f"Effective rate: {effective * 100:.2f}%")
        for rate, btn in self._rate_buttons.items():
            try:
                if rate is state.rate:
                    btn.configure(bootstyle='primary')
                else:
                    btn.configure(bootstyle='secondary outline')
            except tk.TclError as e:
                logger.debug("Could not restyle rate button %s: %s", rate.label, e)

    # ---------------- Keyboard ----------------
    def bind_keys(self, win):
        def on_key(event):
            ch = event.char
            if ch and (ch.isdigit() or ch in (',', '.')):
                self.converter.press(ch)
                return 'break'
            return None

        def cycle_active(event):
            idx = FIELD_ORDER.index(self.converter.active)
            self.converter.set_active(FIELD_ORDER[(idx + 1) % len(FIELD_ORDER)])
            return 'break'

        win.bind('<Key>', on_key)
        win.bind('<BackSpace>', lambda e: self.converter.backspace())
        win.bind('<Escape>', lambda e: self.converter.clear())
        win.bind('<Delete>', lambda e: self.converter.clear())
        win.bind('<Tab>', cycle_active)

    def destroy(self):
        self._unsubscribe()
        self.frame.destroy()


def open_calculator_window(root, separator: Optional[str] = None) -> CalculatorView:
    """Build the calculator inside ``root`` with a fresh converter."""
    if separator is None:
        try:
            from db.settings import get_decimal_separator
            separator = get_decimal_separator()
        except Exception as e:
            logger.warning("Falling back to default separator: %s", e)
            separator = ','
    converter = TriFieldConverter(separator=separator)
    view = CalculatorView(root, converter)
    view.frame.pack(fill='both', expand=True)
    view.bind_keys(root)
    return view
