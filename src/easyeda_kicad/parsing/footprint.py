"""Decoders for footprint shape records.

Field positions per tag::

    PAD     ~shape~x~y~width~height~layer~net~number~hole~points~rotation
    TRACK   ~width~layer~[net]~"x1 y1 x2 y2 ..."   (legacy: ~x1~y1~x2~y2)
    CIRCLE  ~x~y~radius~width~layer
    ARC     ~width~x~y~startX~startY~angle~layer
    TEXT    ~text~x~y~?~size~layer
    SVGNODE ~{json with attrs.uuid}
"""

from __future__ import annotations

import json
from typing import Callable, Optional

from easyeda_kicad.models.errors import RecordError
from easyeda_kicad.models.types import Arc, Circle, Line, Pad, PadShape, PadType, Text
from easyeda_kicad.parsing.tokenizer import FIELD_DELIMITER, ShapeRecord, split_numbers

THROUGH_HOLE_LAYER = "11"
DRILL_RATIO = 0.6
DEFAULT_TEXT_SIZE = 12.0

_PAD_SHAPES = {shape.value: shape for shape in PadShape}


def decode_pad(record: ShapeRecord) -> Pad:
    """Decode a PAD record.

    Layer ``11`` is the multi-layer plane, so those pads are through-hole.
    The source carries no usable drill size; through-hole pads get
    ``0.6 * width``.
    """
    width = record.number(4)
    pad_type = PadType.THROUGH_HOLE if record.text(6, "1") == THROUGH_HOLE_LAYER else PadType.SMD
    return Pad(
        number=record.text(8),
        type=pad_type,
        shape=_PAD_SHAPES.get(record.text(1, "RECT").lower(), PadShape.RECT),
        x=record.number(2),
        y=record.number(3),
        width=width,
        height=record.number(5),
        drill=width * DRILL_RATIO if pad_type == PadType.THROUGH_HOLE else None,
        rotation=record.number(11),
    )


def _packed_points(record: ShapeRecord) -> list[float]:
    # Newer exports put the point list in field 4 after an empty net field;
    # some drop the net field entirely and it lands in field 3.
    for index in (4, 3):
        coords = split_numbers(record.text(index))
        if len(coords) >= 4:
            return coords
    return []


def decode_track(record: ShapeRecord) -> list[Line]:
    """Decode a TRACK record into one line per consecutive point pair."""
    width = record.number(1)
    layer = record.text(2, "1")

    coords = _packed_points(record)
    if coords:
        points = list(zip(coords[0::2], coords[1::2]))
        return [
            Line(x1=x1, y1=y1, x2=x2, y2=y2, width=width, layer=layer)
            for (x1, y1), (x2, y2) in zip(points, points[1:])
        ]

    if len(record) >= 6 and all(record.is_numeric(i) for i in range(2, 6)):
        return [Line(
            x1=record.number(2),
            y1=record.number(3),
            x2=record.number(4),
            y2=record.number(5),
            width=width,
            layer=layer,
        )]

    raise RecordError(f"TRACK record has no coordinates: {record.raw!r}")


def decode_circle(record: ShapeRecord) -> Circle:
    return Circle(
        x=record.number(1),
        y=record.number(2),
        radius=record.number(3),
        width=record.number(4),
        layer=record.text(5, "1"),
    )


def decode_arc(record: ShapeRecord) -> Arc:
    return Arc(
        width=record.number(1),
        x=record.number(2),
        y=record.number(3),
        start_x=record.number(4),
        start_y=record.number(5),
        angle=record.number(6),
        layer=record.text(7, "1"),
    )


def decode_text(record: ShapeRecord) -> Text:
    return Text(
        text=record.text(1),
        x=record.number(2),
        y=record.number(3),
        size=record.number(5, DEFAULT_TEXT_SIZE),
        layer=record.text(6, "1"),
    )


def decode_svgnode(record: ShapeRecord) -> Optional[str]:
    """Extract the 3D model uuid from an SVGNODE record, if it has one."""
    # JSON payloads may themselves contain the delimiter.
    payload = FIELD_DELIMITER.join(record.fields[1:])
    if not payload:
        return None
    try:
        node = json.loads(payload)
    except (ValueError, RecursionError) as e:
        raise RecordError(f"SVGNODE payload is not JSON: {e}") from e
    attrs = node.get("attrs") if isinstance(node, dict) else None
    if isinstance(attrs, dict) and attrs.get("uuid"):
        return str(attrs["uuid"])
    return None


FOOTPRINT_DECODERS: dict[str, Callable[[ShapeRecord], object]] = {
    "PAD": decode_pad,
    "TRACK": decode_track,
    "CIRCLE": decode_circle,
    "ARC": decode_arc,
    "TEXT": decode_text,
    "SVGNODE": decode_svgnode,
}
