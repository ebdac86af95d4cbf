"""Decoders for schematic symbol shape records.

Field positions per tag::

    P        ~show~?~number~x~y~rotation~id ... ^^ ... ^^M x y h 20 ...
    PL       ~"x1 y1 x2 y2 ..."~color~strokeWidth~...
    C/CIRCLE ~x~y~radius~...
    E        ~x~y~rx~ry~...
    R        ~x~y~rx~ry~width~height~...   (or ~x~y~width~height~...)
    T/TEXT   ~x~y~rotation~text~...
    A        path data, not decoded
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from easyeda_kicad.models.errors import RecordError
from easyeda_kicad.models.types import Pin, Point, Polyline, Rectangle, SymbolCircle, SymbolText
from easyeda_kicad.parsing.tokenizer import ShapeRecord, safe_float, split_numbers

PIN_SEGMENT_SEPARATOR = "^^"
DEFAULT_PIN_LENGTH = 10.0
DEFAULT_STROKE_WIDTH = 1.0
SYMBOL_TEXT_SIZE = 12.0

_PIN_LENGTH = re.compile(r"[hv]\s*([-\d.]+)")


def pin_length(raw: str) -> float:
    """Read the pin length from the ``h``/``v`` command of the pin path segment."""
    segments = raw.split(PIN_SEGMENT_SEPARATOR)
    if len(segments) > 2:
        match = _PIN_LENGTH.search(segments[2])
        if match:
            return abs(safe_float(match.group(1), DEFAULT_PIN_LENGTH))
    return DEFAULT_PIN_LENGTH


def decode_pin(record: ShapeRecord) -> Pin:
    # Only the first ^^ segment holds the positional pin fields.
    head = ShapeRecord(record.raw.split(PIN_SEGMENT_SEPARATOR)[0])
    number = head.text(3)
    return Pin(
        number=number,
        name=number,
        x=head.number(4),
        y=head.number(5),
        rotation=head.number(6),
        length=pin_length(record.raw),
    )


def decode_polyline(record: ShapeRecord) -> Polyline:
    coords = split_numbers(record.text(1))
    points = [Point(x=x, y=y) for x, y in zip(coords[0::2], coords[1::2])]
    if not points:
        raise RecordError(f"PL record has no points: {record.raw!r}")
    return Polyline(points=points, stroke_width=record.number(3, DEFAULT_STROKE_WIDTH))


def decode_circle(record: ShapeRecord) -> SymbolCircle:
    return SymbolCircle(x=record.number(1), y=record.number(2), radius=record.number(3))


def decode_ellipse(record: ShapeRecord) -> SymbolCircle:
    """Ellipses are approximated by a circle of the mean radius."""
    return SymbolCircle(
        x=record.number(1),
        y=record.number(2),
        radius=(record.number(3) + record.number(4)) / 2,
    )


def decode_rect(record: ShapeRecord) -> Optional[Rectangle]:
    """Decode an R record, guessing which field pair holds the size.

    Newer exports write ``rx~ry~width~height``, older ones ``width~height``.
    An empty field 3, or a 5/6 pair larger than the 3/4 pair, means the
    corner-radius layout.
    """
    v3, v4, v5, v6 = (record.number(i) for i in (3, 4, 5, 6))
    if record.text(3) == "" or (v5 > v3 and v6 > v4):
        rx, ry, width, height = v3, v4, v5, v6
    else:
        width, height, rx, ry = v3, v4, 0.0, 0.0

    if not (width > 0 and height > 0):
        return None
    return Rectangle(
        x=record.number(1), y=record.number(2),
        width=width, height=height, rx=rx, ry=ry,
    )


def decode_text(record: ShapeRecord) -> SymbolText:
    return SymbolText(
        text=record.text(4),
        x=record.number(1),
        y=record.number(2),
        size=SYMBOL_TEXT_SIZE,
    )


def decode_arc(record: ShapeRecord) -> None:
    """Symbol arcs are SVG path data; they are not rendered."""
    return None


SCHEMATIC_DECODERS: dict[str, Callable[[ShapeRecord], object]] = {
    "P": decode_pin,
    "PL": decode_polyline,
    "C": decode_circle,
    "CIRCLE": decode_circle,
    "E": decode_ellipse,
    "R": decode_rect,
    "T": decode_text,
    "TEXT": decode_text,
    "A": decode_arc,
}
