"""Core calculation package for the VAT calculator.

Import concrete helpers explicitly from submodules (for example
``from core.converter import TriFieldConverter``).
"""

__all__ = []
