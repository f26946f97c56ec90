"""Tri-field converter: net, gross and VAT amount linked by one rate.

One field is active and receives keypad input; the other two are always
derived from the active field's value and the selected rate.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from core.vat_utils import (
    DEFAULT_RATE,
    VatRate,
    format_amount,
    gross_from_net,
    implied_rate,
    net_from_gross,
    net_from_vat,
    parse_amount,
)

logger = logging.getLogger(__name__)

DIGITS = '0123456789'
SEPARATORS = (',', '.')
BACKSPACE_KEY = '⌫'
CLEAR_KEY = 'C'


class Field(Enum):
    GROSS = 'gross'
    NET = 'net'
    VAT = 'vat'

    @property
    def title(self) -> str:
        return _TITLES[self]

    def others(self) -> Tuple['Field', 'Field']:
        return tuple(f for f in Field if f is not self)  # type: ignore[return-value]

    def derive(self, value: float, rate: float) -> Optional[Dict['Field', float]]:
        """Amounts of the two other fields given this field's value.

        Returns None when they are undefined (VAT amount at a zero rate).
        """
        if self is Field.GROSS:
            net = net_from_gross(value, rate)
            return {Field.NET: net, Field.VAT: value - net}
        if self is Field.NET:
            gross = gross_from_net(value, rate)
            return {Field.GROSS: gross, Field.VAT: gross - value}
        net = net_from_vat(value, rate)
        if net is None:
            return None
        return {Field.NET: net, Field.GROSS: gross_from_net(net, rate)}


_TITLES = {
    Field.GROSS: 'Gross',
    Field.NET: 'Net',
    Field.VAT: 'VAT amount',
}


@dataclass(frozen=True)
class ConverterState:
    texts: Dict[Field, str]
    rate: VatRate
    active: Field

    @property
    def net_text(self) -> str:
        return self.texts[Field.NET]

    @property
    def gross_text(self) -> str:
        return self.texts[Field.GROSS]

    @property
    def vat_text(self) -> str:
        return self.texts[Field.VAT]


Listener = Callable[[ConverterState], None]


class TriFieldConverter:
    """Holds the three field texts, the rate and the active field.

    Every mutation that changes the active text or the rate recomputes the
    two other fields and notifies subscribers.
    """

    def __init__(self, separator: str = ',', rate: VatRate = DEFAULT_RATE, active: Field = Field.GROSS):
        if separator not in SEPARATORS:
            raise ValueError(f"Unsupported decimal separator: {separator!r}")
        self.separator = separator
        self._texts: Dict[Field, str] = {f: '' for f in Field}
        self._rate = rate
        self._active = active
        self._listeners: List[Listener] = []

    # ---------------- State access ----------------
    @property
    def rate(self) -> VatRate:
        return self._rate

    @property
    def active(self) -> Field:
        return self._active

    @property
    def net_text(self) -> str:
        return self._texts[Field.NET]

    @property
    def gross_text(self) -> str:
        return self._texts[Field.GROSS]

    @property
    def vat_text(self) -> str:
        return self._texts[Field.VAT]

    def text(self, field: Field) -> str:
        return self._texts[field]

    def effective_rate(self) -> Optional[float]:
        """Rate implied by the current net and gross texts, or None if either is blank."""
        net = parse_amount(self._texts[Field.NET], self.separator)
        gross = parse_amount(self._texts[Field.GROSS], self.separator)
        if net is None or gross is None:
            return None
        return implied_rate(net, gross)

    def snapshot(self) -> ConverterState:
        return ConverterState(texts=dict(self._texts), rate=self._rate, active=self._active)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every state change; returns an unsubscribe."""
        self._listeners.append(listener)

        def _unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return _unsubscribe

    def _notify(self) -> None:
        state = self.snapshot()
        for listener in list(self._listeners):
            listener(state)

    # ---------------- Operations ----------------
    def set_rate(self, rate: VatRate) -> None:
        self._rate = rate
        self.recompute()

    def set_active(self, field: Field) -> None:
        # focus change alone never touches the texts
        self._active = field
        self._notify()

    def set_text(self, field: Field, text: str) -> None:
        """Overwrite a field's text; recomputes when it is the active field."""
        self._texts[field] = text
        if field is self._active:
            self.recompute()
        else:
            self._notify()

    def append_digit(self, digit: str) -> None:
        if len(digit) != 1 or digit not in DIGITS:
            raise ValueError(f"Not a digit: {digit!r}")
        self._texts[self._active] += digit
        self.recompute()

    def append_separator(self) -> None:
        current = self._texts[self._active]
        if any(sep in current for sep in SEPARATORS):
            return
        self._texts[self._active] = current + self.separator if current else '0' + self.separator
        self.recompute()

    def backspace(self) -> None:
        current = self._texts[self._active]
        if not current:
            return
        self._texts[self._active] = current[:-1]
        self.recompute()

    def clear(self) -> None:
        for field in Field:
            self._texts[field] = ''
        self._notify()

    def press(self, key: str) -> None:
        """Dispatch a keypad key label to the matching operation."""
        if len(key) == 1 and key in DIGITS:
            self.append_digit(key)
        elif key in SEPARATORS:
            self.append_separator()
        elif key == BACKSPACE_KEY:
            self.backspace()
        elif key == CLEAR_KEY:
            self.clear()
        else:
            logger.debug("Ignoring unknown key %r", key)

    def recompute(self) -> None:
        active = self._active
        value = parse_amount(self._texts[active], self.separator)
        derived = None if value is None else active.derive(value, self._rate.value)
        if derived is None:
            logger.debug("No valid %s value (%r); blanking dependent fields", active.value, self._texts[active])
            for field in active.others():
                self._texts[field] = ''
        else:
            for field, amount in derived.items():
                self._texts[field] = format_amount(amount)
            logger.debug("Recomputed from %s at %s: %s", active.value, self._rate.label, derived)
        self._notify()
