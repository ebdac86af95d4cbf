"""Unit conversion utilities for EasyEDA to KiCad measurements."""

from __future__ import annotations

# EasyEDA geometry is stored in units of 10 mil
EASYEDA_UNIT_MM = 0.254

# KiCad files are written with a fixed number of decimals
DECIMALS = 4


def easyeda_to_mm(value: float) -> float:
    """Convert EasyEDA source units to millimeters."""
    return value * EASYEDA_UNIT_MM


def fmt(value: float) -> str:
    """Format a millimeter value with exactly four decimals.

    Negative zero is written as ``0.0000``.
    """
    text = f"{value:.{DECIMALS}f}"
    if text.startswith("-") and float(text) == 0:
        return text[1:]
    return text
