"""Write a parsed schematic symbol as a KiCad ``.kicad_sym`` library.

Uses the same centring and unit rules as footprints, with the Y axis
flipped because KiCad symbol coordinates grow upwards.
"""

from __future__ import annotations

from easyeda_kicad.bounds import finite_schematic, resolve_schematic_bounds
from easyeda_kicad.logging_config import get_logger
from easyeda_kicad.models.types import ParsedSchematic, Pin, Polyline, Rectangle, SymbolCircle, SymbolText
from easyeda_kicad.utils.sexp import is_balanced, quote
from easyeda_kicad.utils.units import easyeda_to_mm, fmt
from easyeda_kicad.utils.validation import DEFAULT_SYMBOL_NAME, sanitize_name

logger = get_logger("emit.symbol")

FORMAT_VERSION = "20220914"
GENERATOR = "easyeda2kicad"

LABEL_MARGIN_MM = 1.0
FONT = "(font (size 1.2700 1.2700))"
OUTLINE_STROKE = 1.0  # source units

# In source coordinates (y down), keyed by snapped EasyEDA rotation:
# unit vector from the connection end towards the body
PIN_DIRECTIONS = {0: (-1, 0), 90: (0, 1), 180: (1, 0), 270: (0, -1)}
# (gap beyond the connection end, gap beyond the body end), source units
PIN_LABEL_GAPS = {0: (4, 4), 90: (4, 12), 180: (4, 4), 270: (12, 4)}

# Keyed by KiCad pin angle: justification of the label outside the
# connection end / inside the body end
OUTSIDE_JUSTIFY = {0: "right", 90: "top", 180: "left", 270: "bottom"}
INSIDE_JUSTIFY = {0: "left", 90: "bottom", 180: "right", 270: "top"}


def pin_quadrant(rotation: float) -> int:
    """Snap an EasyEDA pin rotation to 0, 90, 180 or 270."""
    return int(round(rotation / 90.0)) % 4 * 90


def pin_angle(rotation: float) -> int:
    """KiCad pin orientation for an EasyEDA pin rotation.

    Rotations off the four quadrants snap to the nearest one.
    """
    return (180 + pin_quadrant(rotation)) % 360


class _Frame:
    def __init__(self, origin_x: float, origin_y: float) -> None:
        self.origin_x = origin_x
        self.origin_y = origin_y

    def x(self, value: float) -> float:
        return easyeda_to_mm(value - self.origin_x)

    def y(self, value: float) -> float:
        return -easyeda_to_mm(value - self.origin_y)

    def xy(self, x: float, y: float) -> str:
        return f"{fmt(self.x(x))} {fmt(self.y(y))}"


def _stroke(width: float) -> str:
    return f"(stroke (width {fmt(easyeda_to_mm(width))}) (type default))"


def _polyline(polyline: Polyline, frame: _Frame) -> list[str]:
    pts = " ".join(f"(xy {frame.xy(p.x, p.y)})" for p in polyline.points)
    return [
        "      (polyline",
        f"        (pts {pts})",
        f"        {_stroke(polyline.stroke_width)}",
        "        (fill (type none))",
        "      )",
    ]


def _circle(circle: SymbolCircle, frame: _Frame) -> list[str]:
    return [
        f"      (circle (center {frame.xy(circle.x, circle.y)}) (radius {fmt(easyeda_to_mm(circle.radius))})",
        f"        {_stroke(OUTLINE_STROKE)}",
        "        (fill (type none))",
        "      )",
    ]


def _rectangle(rect: Rectangle, frame: _Frame) -> list[str]:
    return [
        f"      (rectangle (start {frame.xy(rect.x, rect.y)}) "
        f"(end {frame.xy(rect.x + rect.width, rect.y + rect.height)})",
        f"        {_stroke(OUTLINE_STROKE)}",
        "        (fill (type background))",
        "      )",
    ]


def _text(text: SymbolText, frame: _Frame) -> list[str]:
    size = fmt(easyeda_to_mm(text.size))
    return [
        f"      (text {quote(text.text)} (at {frame.xy(text.x, text.y)} 0)",
        f"        (effects (font (size {size} {size})))",
        "      )",
    ]


def _label(text: str, x: float, y: float, justify: str) -> list[str]:
    return [
        f"      (text {quote(text)} (at {fmt(x)} {fmt(y)} 0)",
        f"        (effects {FONT} (justify {justify}))",
        "      )",
    ]


def _pin(pin: Pin, frame: _Frame) -> list[str]:
    quadrant = pin_quadrant(pin.rotation)
    angle = pin_angle(pin.rotation)
    dx, dy = PIN_DIRECTIONS[quadrant]
    near, far = PIN_LABEL_GAPS[quadrant]
    reach = pin.length + far

    out = [
        f"      (pin passive line (at {frame.xy(pin.x, pin.y)} {angle}) "
        f"(length {fmt(easyeda_to_mm(pin.length))})",
        f"        (name {quote(pin.name)} (effects {FONT}))",
        f"        (number {quote(pin.number)} (effects {FONT}))",
        "      )",
    ]
    # Number just beyond the connection end, name just inside the body end.
    out += _label(
        pin.number,
        frame.x(pin.x - dx * near),
        frame.y(pin.y - dy * near),
        OUTSIDE_JUSTIFY[angle],
    )
    out += _label(
        pin.name,
        frame.x(pin.x + dx * reach),
        frame.y(pin.y + dy * reach),
        INSIDE_JUSTIFY[angle],
    )
    return out


def _property(key: str, value: str, prop_id: int, y: float, hidden: bool = False) -> list[str]:
    effects = f"(effects {FONT} hide)" if hidden else f"(effects {FONT})"
    return [
        f"    (property {quote(key)} {quote(value)} (id {prop_id}) (at {fmt(0)} {fmt(y)} 0)",
        f"      {effects}",
        "    )",
    ]


def emit_symbol(doc: ParsedSchematic, reference: str = "U", description: str = "") -> str:
    """Serialize a symbol document as a single-symbol KiCad library.

    Outline geometry goes into unit ``<name>_0_1`` (shared by all units),
    pins and their labels into ``<name>_1_1``. KiCad's own pin name and
    number rendering is hidden in favour of the explicit labels.

    Args:
        doc: Parsed symbol, in EasyEDA source units.
        reference: Reference designator prefix for the symbol.
        description: Part description, kept as a hidden
            ``ki_description`` property when non-empty.

    Returns:
        The ``.kicad_sym`` file content.
    """
    doc = finite_schematic(doc)
    box = resolve_schematic_bounds(doc)
    frame = _Frame(*box.center)

    name = sanitize_name(doc.name, DEFAULT_SYMBOL_NAME)
    label_offset = easyeda_to_mm(box.height) / 2 + LABEL_MARGIN_MM

    out = [
        f"(kicad_symbol_lib (version {FORMAT_VERSION}) (generator {GENERATOR})",
        f"  (symbol {quote(name)} (pin_numbers hide) (pin_names hide) (in_bom yes) (on_board yes)",
    ]
    out += _property("Reference", reference, 0, label_offset)
    out += _property("Value", name, 1, -label_offset)
    out += _property("Footprint", "", 2, 0, hidden=True)
    out += _property("Datasheet", "", 3, 0, hidden=True)
    if description:
        out += _property("ki_description", description, 4, 0, hidden=True)

    out.append(f"    (symbol {quote(f'{name}_0_1')}")
    for polyline in doc.polylines:
        out += _polyline(polyline, frame)
    for circle in doc.circles:
        out += _circle(circle, frame)
    for rect in doc.rectangles:
        out += _rectangle(rect, frame)
    for text in doc.texts:
        out += _text(text, frame)
    out.append("    )")

    out.append(f"    (symbol {quote(f'{name}_1_1')}")
    for pin in doc.pins:
        out += _pin(pin, frame)
    out.append("    )")

    out.append("  )")
    out.append(")")

    content = "\n".join(out) + "\n"
    if not is_balanced(content):
        logger.warning("Symbol %r produced unbalanced output", name)
    return content
