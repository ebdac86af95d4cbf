"""Pydantic models for decoded EasyEDA geometry and parse results.

All coordinates and dimensions are in EasyEDA source units (10 mil per
unit) exactly as they appear in the shape records. Conversion to
millimetres happens only at emission time.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# --- Enums ---

class LayerName(str, Enum):
    F_CU = "F.Cu"
    B_CU = "B.Cu"
    F_SILKSCREEN = "F.SilkS"
    B_SILKSCREEN = "B.SilkS"
    F_MASK = "F.Mask"
    B_MASK = "B.Mask"
    F_PASTE = "F.Paste"
    B_PASTE = "B.Paste"
    F_FAB = "F.Fab"
    B_FAB = "B.Fab"
    EDGE_CUTS = "Edge.Cuts"
    DWGS_USER = "Dwgs.User"
    CMTS_USER = "Cmts.User"


class PadType(str, Enum):
    SMD = "smd"
    THROUGH_HOLE = "through-hole"


class PadShape(str, Enum):
    RECT = "rect"
    CIRCLE = "circle"
    OVAL = "oval"
    ELLIPSE = "ellipse"


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


# --- Footprint entities ---

class Pad(BaseModel):
    number: str = Field(default="", description="Pad number / name")
    type: PadType = Field(default=PadType.SMD)
    shape: PadShape = Field(default=PadShape.RECT)
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    drill: Optional[float] = Field(default=None, description="Drill diameter, through-hole pads only")
    rotation: float = Field(default=0.0, description="Rotation in degrees")

    def is_finite(self) -> bool:
        values = [self.x, self.y, self.width, self.height, self.rotation]
        if self.drill is not None:
            values.append(self.drill)
        return _finite(*values)


class Line(BaseModel):
    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    width: float = 0.0
    layer: str = "1"

    def is_finite(self) -> bool:
        return _finite(self.x1, self.y1, self.x2, self.y2, self.width)


class Circle(BaseModel):
    x: float = 0.0
    y: float = 0.0
    radius: float = 0.0
    width: float = 0.0
    layer: str = "1"

    def is_finite(self) -> bool:
        return _finite(self.x, self.y, self.radius, self.width)


class Arc(BaseModel):
    x: float = Field(default=0.0, description="Centre X")
    y: float = Field(default=0.0, description="Centre Y")
    start_x: float = 0.0
    start_y: float = 0.0
    angle: float = Field(default=0.0, description="Signed sweep in degrees")
    width: float = 0.0
    layer: str = "1"

    def is_finite(self) -> bool:
        return _finite(self.x, self.y, self.start_x, self.start_y, self.angle, self.width)


class Text(BaseModel):
    text: str = ""
    x: float = 0.0
    y: float = 0.0
    size: float = 12.0
    layer: str = "1"

    def is_finite(self) -> bool:
        return _finite(self.x, self.y, self.size)


class ParsedFootprint(BaseModel):
    name: str = ""
    pads: list[Pad] = Field(default_factory=list)
    lines: list[Line] = Field(default_factory=list)
    circles: list[Circle] = Field(default_factory=list)
    arcs: list[Arc] = Field(default_factory=list)
    texts: list[Text] = Field(default_factory=list)
    model_uuid: Optional[str] = Field(default=None, description="3D model uuid from the SVGNODE record")

    @property
    def is_through_hole(self) -> bool:
        return any(p.type == PadType.THROUGH_HOLE for p in self.pads)


# --- Symbol entities ---

class Point(BaseModel):
    x: float = 0.0
    y: float = 0.0


class Pin(BaseModel):
    number: str = ""
    name: str = ""
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    length: float = 10.0

    def is_finite(self) -> bool:
        return _finite(self.x, self.y, self.rotation, self.length)


class Polyline(BaseModel):
    points: list[Point] = Field(default_factory=list)
    stroke_width: float = 1.0

    def is_finite(self) -> bool:
        return self.points != [] and _finite(
            self.stroke_width, *(c for p in self.points for c in (p.x, p.y))
        )


class SymbolCircle(BaseModel):
    x: float = 0.0
    y: float = 0.0
    radius: float = 0.0

    def is_finite(self) -> bool:
        return _finite(self.x, self.y, self.radius)


class Rectangle(BaseModel):
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    rx: float = 0.0
    ry: float = 0.0

    def is_finite(self) -> bool:
        return _finite(self.x, self.y, self.width, self.height, self.rx, self.ry)


class SymbolText(BaseModel):
    text: str = ""
    x: float = 0.0
    y: float = 0.0
    size: float = 12.0

    def is_finite(self) -> bool:
        return _finite(self.x, self.y, self.size)


class ParsedSchematic(BaseModel):
    name: str = ""
    pins: list[Pin] = Field(default_factory=list)
    polylines: list[Polyline] = Field(default_factory=list)
    circles: list[SymbolCircle] = Field(default_factory=list)
    rectangles: list[Rectangle] = Field(default_factory=list)
    texts: list[SymbolText] = Field(default_factory=list)


# --- Derived geometry ---

class BoundingBox(BaseModel):
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)


# --- Parse results ---

class FootprintParseResult(BaseModel):
    document: ParsedFootprint = Field(default_factory=ParsedFootprint)
    diagnostics: list[str] = Field(default_factory=list)
    skipped: int = Field(default=0, description="Records dropped as malformed")

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class SchematicParseResult(BaseModel):
    document: ParsedSchematic = Field(default_factory=ParsedSchematic)
    diagnostics: list[str] = Field(default_factory=list)
    skipped: int = Field(default=0, description="Records dropped as malformed")

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class ComponentData(BaseModel):
    """Pieces of a vendor component API response relevant to conversion."""

    title: str = ""
    description: str = ""
    lcsc_id: str = ""
    symbol_data: Optional[dict] = None
    footprint_data: Optional[dict] = None
