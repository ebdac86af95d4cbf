"""Write a parsed footprint as a KiCad ``.kicad_mod`` footprint.

Geometry is re-origined on the centre of the footprint bounding box and
converted from EasyEDA units to millimetres. Non-finite entities are
dropped before anything is measured or written.
"""

from __future__ import annotations

import math

from easyeda_kicad.bounds import finite_footprint, resolve_footprint_bounds
from easyeda_kicad.emit.layers import SMD_PAD_LAYERS, THT_PAD_LAYERS, kicad_layer
from easyeda_kicad.logging_config import get_logger
from easyeda_kicad.models.types import Arc, Circle, Line, Pad, PadShape, PadType, ParsedFootprint, Text
from easyeda_kicad.utils.sexp import is_balanced, quote
from easyeda_kicad.utils.units import easyeda_to_mm, fmt
from easyeda_kicad.utils.validation import DEFAULT_FOOTPRINT_NAME, sanitize_name

logger = get_logger("emit.footprint")

FORMAT_VERSION = "20221018"
GENERATOR = "easyeda2kicad"

# Gap between the bounding box and the reference / value labels
LABEL_MARGIN_MM = 1.0
LABEL_FONT = "(effects (font (size 1.0000 1.0000) (thickness 0.1500)))"
TEXT_THICKNESS_RATIO = 0.15

_PAD_SHAPES = {
    PadShape.CIRCLE: "circle",
    PadShape.ELLIPSE: "circle",
    PadShape.OVAL: "oval",
}


class _Frame:
    """Converts source coordinates to millimetres relative to an origin."""

    def __init__(self, origin_x: float, origin_y: float) -> None:
        self.origin_x = origin_x
        self.origin_y = origin_y

    def xy(self, x: float, y: float) -> str:
        return f"{fmt(easyeda_to_mm(x - self.origin_x))} {fmt(easyeda_to_mm(y - self.origin_y))}"

    @staticmethod
    def size(value: float) -> str:
        return fmt(easyeda_to_mm(value))


def _stroke(width: str) -> str:
    return f"(stroke (width {width}) (type solid))"


def _line(line: Line, frame: _Frame) -> str:
    return (
        f"  (fp_line (start {frame.xy(line.x1, line.y1)}) (end {frame.xy(line.x2, line.y2)}) "
        f"{_stroke(frame.size(line.width))} (layer {quote(kicad_layer(line.layer))}))"
    )


def _circle(circle: Circle, frame: _Frame) -> str:
    return (
        f"  (fp_circle (center {frame.xy(circle.x, circle.y)}) "
        f"(end {frame.xy(circle.x + circle.radius, circle.y)}) "
        f"{_stroke(frame.size(circle.width))} (fill none) (layer {quote(kicad_layer(circle.layer))}))"
    )


def _rotate(cx: float, cy: float, px: float, py: float, degrees: float) -> tuple[float, float]:
    a = math.radians(degrees)
    dx, dy = px - cx, py - cy
    return (cx + dx * math.cos(a) - dy * math.sin(a), cy + dx * math.sin(a) + dy * math.cos(a))


def _arc(arc: Arc, frame: _Frame) -> str:
    # Start point is rotated about the centre by half and full sweep.
    mid = _rotate(arc.x, arc.y, arc.start_x, arc.start_y, arc.angle / 2)
    end = _rotate(arc.x, arc.y, arc.start_x, arc.start_y, arc.angle)
    return (
        f"  (fp_arc (start {frame.xy(arc.start_x, arc.start_y)}) (mid {frame.xy(*mid)}) "
        f"(end {frame.xy(*end)}) {_stroke(frame.size(arc.width))} (layer {quote(kicad_layer(arc.layer))}))"
    )


def _pad(pad: Pad, frame: _Frame) -> str:
    shape = _PAD_SHAPES.get(pad.shape, "rect")
    at = frame.xy(pad.x, pad.y)
    if pad.rotation:
        at = f"{at} {fmt(pad.rotation)}"

    parts = [
        f"(pad {quote(sanitize_name(pad.number))}",
        "thru_hole" if pad.type == PadType.THROUGH_HOLE else "smd",
        shape,
        f"(at {at})",
        f"(size {frame.size(pad.width)} {frame.size(pad.height)})",
    ]
    if pad.type == PadType.THROUGH_HOLE:
        drill = pad.drill if pad.drill is not None else 0.0
        parts.append(f"(drill {frame.size(drill)})")
        layers = THT_PAD_LAYERS
    else:
        layers = SMD_PAD_LAYERS
    parts.append(f"(layers {' '.join(quote(layer) for layer in layers)}))")
    return "  " + " ".join(parts)


def _text(text: Text, frame: _Frame) -> str:
    size = easyeda_to_mm(text.size)
    return (
        f"  (fp_text user {quote(text.text)} (at {frame.xy(text.x, text.y)}) "
        f"(layer {quote(kicad_layer(text.layer))})\n"
        f"    (effects (font (size {fmt(size)} {fmt(size)}) (thickness {fmt(size * TEXT_THICKNESS_RATIO)})))\n"
        f"  )"
    )


def emit_footprint(doc: ParsedFootprint) -> str:
    """Serialize a footprint document as KiCad footprint text.

    Output order: header, attribute, reference and value labels, then
    lines, circles, arcs, pads and free texts. All numbers carry four
    decimals. Never raises on malformed geometry.

    Args:
        doc: Parsed footprint, in EasyEDA source units.

    Returns:
        The ``.kicad_mod`` file content.
    """
    doc = finite_footprint(doc)
    box = resolve_footprint_bounds(doc)
    frame = _Frame(*box.center)

    name = sanitize_name(doc.name, DEFAULT_FOOTPRINT_NAME)
    label_offset = easyeda_to_mm(box.height) / 2 + LABEL_MARGIN_MM

    out = [
        f"(footprint {quote(name)} (version {FORMAT_VERSION}) (generator {GENERATOR})",
        '  (layer "F.Cu")',
        f"  (attr {'through_hole' if doc.is_through_hole else 'smd'})",
        f'  (fp_text reference "REF**" (at {fmt(0)} {fmt(-label_offset)}) (layer "F.SilkS")',
        f"    {LABEL_FONT}",
        "  )",
        f'  (fp_text value {quote(name)} (at {fmt(0)} {fmt(label_offset)}) (layer "F.Fab")',
        f"    {LABEL_FONT}",
        "  )",
    ]
    out.extend(_line(line, frame) for line in doc.lines)
    out.extend(_circle(circle, frame) for circle in doc.circles)
    out.extend(_arc(arc, frame) for arc in doc.arcs)
    out.extend(_pad(pad, frame) for pad in doc.pads)
    out.extend(_text(text, frame) for text in doc.texts)
    out.append(")")

    content = "\n".join(out) + "\n"
    if not is_balanced(content):
        logger.warning("Footprint %r produced unbalanced output", name)
    return content
