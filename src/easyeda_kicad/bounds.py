"""Bounding boxes and non-finite filtering for parsed documents.

Emitted coordinates are relative to the centre of these boxes, never the
raw record coordinates.
"""

from __future__ import annotations

from typing import Iterable, Optional

from easyeda_kicad.models.types import BoundingBox, ParsedFootprint, ParsedSchematic

EMPTY_FOOTPRINT_BOX = BoundingBox(min_x=0, min_y=0, max_x=0, max_y=0)
EMPTY_SCHEMATIC_BOX = BoundingBox(min_x=0, min_y=0, max_x=100, max_y=100)

Extent = tuple[float, float, float, float]


def _union(extents: Iterable[Extent]) -> Optional[BoundingBox]:
    box: Optional[list[float]] = None
    for min_x, min_y, max_x, max_y in extents:
        if box is None:
            box = [min_x, min_y, max_x, max_y]
            continue
        box[0] = min(box[0], min_x)
        box[1] = min(box[1], min_y)
        box[2] = max(box[2], max_x)
        box[3] = max(box[3], max_y)
    if box is None:
        return None
    return BoundingBox(min_x=box[0], min_y=box[1], max_x=box[2], max_y=box[3])


def _footprint_extents(doc: ParsedFootprint) -> Iterable[Extent]:
    for pad in doc.pads:
        if pad.is_finite():
            hw, hh = pad.width / 2, pad.height / 2
            yield (pad.x - hw, pad.y - hh, pad.x + hw, pad.y + hh)
    for line in doc.lines:
        if line.is_finite():
            yield (min(line.x1, line.x2), min(line.y1, line.y2),
                   max(line.x1, line.x2), max(line.y1, line.y2))
    for circle in doc.circles:
        if circle.is_finite():
            r = circle.radius
            yield (circle.x - r, circle.y - r, circle.x + r, circle.y + r)


def _schematic_extents(doc: ParsedSchematic) -> Iterable[Extent]:
    for pin in doc.pins:
        if pin.is_finite():
            yield (pin.x, pin.y, pin.x, pin.y)
    for polyline in doc.polylines:
        if polyline.is_finite():
            for p in polyline.points:
                yield (p.x, p.y, p.x, p.y)
    for circle in doc.circles:
        if circle.is_finite():
            r = circle.radius
            yield (circle.x - r, circle.y - r, circle.x + r, circle.y + r)
    for rect in doc.rectangles:
        if rect.is_finite():
            yield (rect.x, rect.y, rect.x + rect.width, rect.y + rect.height)


def footprint_bounds(doc: ParsedFootprint) -> Optional[BoundingBox]:
    """Box over finite pads (half extents), lines and circles (radius), or None."""
    return _union(_footprint_extents(doc))


def schematic_bounds(doc: ParsedSchematic) -> Optional[BoundingBox]:
    """Box over finite pins, polyline points, circles and rectangles, or None."""
    return _union(_schematic_extents(doc))


def resolve_footprint_bounds(doc: ParsedFootprint) -> BoundingBox:
    """Footprint box, falling back to the zero box when nothing is finite."""
    return footprint_bounds(doc) or EMPTY_FOOTPRINT_BOX


def resolve_schematic_bounds(doc: ParsedSchematic) -> BoundingBox:
    """Symbol box, falling back to ``(0, 0, 100, 100)`` when nothing is finite."""
    return schematic_bounds(doc) or EMPTY_SCHEMATIC_BOX


def finite_footprint(doc: ParsedFootprint) -> ParsedFootprint:
    """Copy of *doc* with every entity holding a non-finite value removed."""
    return doc.model_copy(update={
        "pads": [p for p in doc.pads if p.is_finite()],
        "lines": [line for line in doc.lines if line.is_finite()],
        "circles": [c for c in doc.circles if c.is_finite()],
        "arcs": [a for a in doc.arcs if a.is_finite()],
        "texts": [t for t in doc.texts if t.is_finite()],
    })


def finite_schematic(doc: ParsedSchematic) -> ParsedSchematic:
    """Copy of *doc* with every entity holding a non-finite value removed."""
    return doc.model_copy(update={
        "pins": [p for p in doc.pins if p.is_finite()],
        "polylines": [p for p in doc.polylines if p.is_finite()],
        "circles": [c for c in doc.circles if c.is_finite()],
        "rectangles": [r for r in doc.rectangles if r.is_finite()],
        "texts": [t for t in doc.texts if t.is_finite()],
    })
