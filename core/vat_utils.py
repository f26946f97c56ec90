"""
VAT/KDV calculation utility.

Plain formulas linking net, gross and VAT amount for a rate expressed as a
fraction (0.23 for 23%), plus the display parsing/formatting used by the
calculator fields.
"""
import math
from enum import Enum
from typing import Optional


class VatRate(Enum):
    ZERO = 0.0
    FIVE = 0.05
    EIGHT = 0.08
    TWENTY_THREE = 0.23

    @property
    def label(self) -> str:
        return f"{round(self.value * 100)}%"


DEFAULT_RATE = VatRate.TWENTY_THREE


def net_from_gross(gross: float, rate: float) -> float:
    return gross / (1 + rate)


def gross_from_net(net: float, rate: float) -> float:
    return net * (1 + rate)


def net_from_vat(vat: float, rate: float) -> Optional[float]:
    """Net amount that carries ``vat`` at ``rate``; None when rate is 0."""
    if not rate:
        return None
    return vat / rate


def implied_rate(net: float, gross: float) -> Optional[float]:
    """Rate (as a fraction) that turns ``net`` into ``gross``."""
    if not net:
        return None
    return (gross - net) / net


def parse_amount(text: Optional[str], separator: str = ',') -> Optional[float]:
    """Parse a display string into a non-negative float.

    Returns None for empty, malformed, negative or non-finite text.
    """
    if not text:
        return None
    try:
        value = float(text.replace(separator, '.'))
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def format_amount(value: float) -> str:
    return f"{value:.2f}"
