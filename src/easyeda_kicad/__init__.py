"""Convert EasyEDA footprint and symbol geometry to KiCad library files."""

from __future__ import annotations

from easyeda_kicad.emit.footprint import emit_footprint
from easyeda_kicad.emit.symbol import emit_symbol
from easyeda_kicad.parsing.document import (
    parse_footprint,
    parse_footprint_result,
    parse_schematic,
    parse_schematic_result,
    unwrap_component,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "emit_footprint",
    "emit_symbol",
    "parse_footprint",
    "parse_footprint_result",
    "parse_schematic",
    "parse_schematic_result",
    "unwrap_component",
]
