"""Build footprint and symbol documents from EasyEDA ``dataStr`` payloads.

These are the entry points for turning vendor geometry into typed
documents. They are total: bad JSON, a missing ``shape`` array or a
malformed record never raises. Failures are logged and reported in the
result's ``diagnostics``, and the document keeps whatever did decode.
"""

from __future__ import annotations

import json
from collections import Counter
from typing import Any, Callable, Iterator, Optional, Union

from easyeda_kicad.logging_config import get_logger
from easyeda_kicad.models.errors import DocumentError, RecordError
from easyeda_kicad.models.types import (
    Arc,
    Circle,
    ComponentData,
    FootprintParseResult,
    Line,
    Pad,
    ParsedFootprint,
    ParsedSchematic,
    Pin,
    Polyline,
    Rectangle,
    SchematicParseResult,
    SymbolCircle,
    SymbolText,
    Text,
)
from easyeda_kicad.parsing.footprint import FOOTPRINT_DECODERS
from easyeda_kicad.parsing.schematic import SCHEMATIC_DECODERS
from easyeda_kicad.parsing.tokenizer import ShapeRecord, tokenize

logger = get_logger("parsing.document")

RawDocument = Union[str, bytes, dict, None]

SYMBOL_DOC_TYPE = "2"


def load_document(raw: RawDocument) -> dict[str, Any]:
    """Return the ``dataStr`` object, parsing it first if it is JSON text.

    Raises:
        DocumentError: If the text is not JSON or not a JSON object.
    """
    data: Any = raw
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            # ValueError covers JSONDecodeError, bad UTF-8 bytes and
            # integers past the interpreter's digit limit.
            raise DocumentError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DocumentError(
            f"Expected a JSON object, got {type(data).__name__}",
            details={"type": type(data).__name__},
        )
    return data


def _shape_records(data: dict[str, Any]) -> Iterator[Optional[ShapeRecord]]:
    shapes = data.get("shape")
    if not isinstance(shapes, list):
        raise DocumentError("Document has no 'shape' array")
    for entry in shapes:
        yield tokenize(entry)


def _c_para(data: dict[str, Any]) -> dict[str, Any]:
    head = data.get("head")
    c_para = head.get("c_para") if isinstance(head, dict) else None
    return c_para if isinstance(c_para, dict) else {}


def _decode_all(
    data: dict[str, Any],
    decoders: dict[str, Callable[[ShapeRecord], object]],
    diagnostics: list[str],
) -> tuple[list[object], int]:
    """Run the matching decoder over every record, skipping bad ones.

    Returns the decoded values in record order and the skipped count.
    Unknown tags and foreign entries are ignored without a diagnostic;
    they are only counted in the debug log.
    """
    decoded: list[object] = []
    skipped = 0
    foreign = 0
    unknown: Counter[str] = Counter()
    for index, record in enumerate(_shape_records(data)):
        if record is None:
            foreign += 1
            continue
        decoder = decoders.get(record.tag)
        if decoder is None:
            unknown[record.tag] += 1
            continue
        try:
            decoded.append(decoder(record))
        except (RecordError, ValueError, TypeError, IndexError, RecursionError) as e:
            skipped += 1
            form = "wrapped " if record.wrapped else ""
            diagnostics.append(f"shape[{index}] {form}{record.tag}: {e}")
            logger.debug("Skipping shape[%d] %r: %s", index, record.raw[:200], e)

    if unknown:
        logger.debug(
            "Ignored unsupported records: %s",
            ", ".join(f"{tag} x{count}" for tag, count in sorted(unknown.items())),
        )
    if foreign:
        logger.debug("Ignored %d shape entries that are not records", foreign)
    return decoded, skipped


def parse_footprint_result(raw: RawDocument) -> FootprintParseResult:
    """Parse a footprint ``dataStr`` into a document plus diagnostics."""
    footprint = ParsedFootprint()
    diagnostics: list[str] = []
    skipped = 0

    try:
        data = load_document(raw)
        package = _c_para(data).get("package")
        if package:
            footprint.name = str(package)

        decoded, skipped = _decode_all(data, FOOTPRINT_DECODERS, diagnostics)
        if skipped:
            logger.info("Footprint %r: skipped %d malformed record(s)", footprint.name, skipped)
    except DocumentError as e:
        logger.warning("Error parsing footprint: %s", e)
        diagnostics.append(str(e))
        return FootprintParseResult(document=footprint, diagnostics=diagnostics)

    for value in decoded:
        if isinstance(value, Pad):
            footprint.pads.append(value)
        elif isinstance(value, list):
            footprint.lines.extend(v for v in value if isinstance(v, Line))
        elif isinstance(value, Circle):
            footprint.circles.append(value)
        elif isinstance(value, Arc):
            footprint.arcs.append(value)
        elif isinstance(value, Text):
            footprint.texts.append(value)
        elif isinstance(value, str) and footprint.model_uuid is None:
            footprint.model_uuid = value

    logger.debug(
        "Parsed footprint %r: %d pads, %d lines, %d circles, %d arcs, %d texts",
        footprint.name, len(footprint.pads), len(footprint.lines),
        len(footprint.circles), len(footprint.arcs), len(footprint.texts),
    )
    return FootprintParseResult(document=footprint, diagnostics=diagnostics, skipped=skipped)


def parse_schematic_result(raw: RawDocument) -> SchematicParseResult:
    """Parse a symbol ``dataStr`` into a document plus diagnostics."""
    schematic = ParsedSchematic()
    diagnostics: list[str] = []
    skipped = 0

    try:
        data = load_document(raw)
        c_para = _c_para(data)
        schematic.name = str(c_para.get("name") or c_para.get("package") or "")

        decoded, skipped = _decode_all(data, SCHEMATIC_DECODERS, diagnostics)
        if skipped:
            logger.info("Symbol %r: skipped %d malformed record(s)", schematic.name, skipped)
    except DocumentError as e:
        logger.warning("Error parsing schematic: %s", e)
        diagnostics.append(str(e))
        return SchematicParseResult(document=schematic, diagnostics=diagnostics)

    for value in decoded:
        if isinstance(value, Pin):
            schematic.pins.append(value)
        elif isinstance(value, Polyline):
            schematic.polylines.append(value)
        elif isinstance(value, SymbolCircle):
            schematic.circles.append(value)
        elif isinstance(value, Rectangle):
            schematic.rectangles.append(value)
        elif isinstance(value, SymbolText):
            schematic.texts.append(value)

    logger.debug(
        "Parsed schematic %r: %d pins, %d polylines, %d circles, %d rectangles, %d texts",
        schematic.name, len(schematic.pins), len(schematic.polylines),
        len(schematic.circles), len(schematic.rectangles), len(schematic.texts),
    )
    return SchematicParseResult(document=schematic, diagnostics=diagnostics, skipped=skipped)


def parse_footprint(raw: RawDocument) -> ParsedFootprint:
    """Parse a footprint ``dataStr`` (object or JSON text). Never raises."""
    return parse_footprint_result(raw).document


def parse_schematic(raw: RawDocument) -> ParsedSchematic:
    """Parse a symbol ``dataStr`` (object or JSON text). Never raises."""
    return parse_schematic_result(raw).document


def _as_data_str(value: Any) -> Optional[dict]:
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except (ValueError, RecursionError):
            return None
    return value if isinstance(value, dict) else None


def unwrap_component(payload: RawDocument, lcsc_id: str = "") -> ComponentData:
    """Pull title, symbol and footprint ``dataStr`` out of a component API response.

    Accepts ``{"result": {...}}``, ``{"data": {...}}`` or the bare result
    object. A bare ``dataStr`` (one with a ``shape`` array) is returned as
    the symbol when its ``head.docType`` is ``"2"`` and as the footprint
    otherwise. Missing parts come back as None; this never raises.
    """
    try:
        data = load_document(payload)
    except DocumentError as e:
        logger.warning("Error reading component payload: %s", e)
        return ComponentData(lcsc_id=lcsc_id)

    if "shape" in data:
        head = data.get("head") if isinstance(data.get("head"), dict) else {}
        if str(head.get("docType", "")) == SYMBOL_DOC_TYPE:
            return ComponentData(lcsc_id=lcsc_id, symbol_data=data)
        return ComponentData(lcsc_id=lcsc_id, footprint_data=data)

    if isinstance(data.get("data"), dict):
        # Already-split shape: {"data": {"schematicStr": ..., "footprintStr": ...}}
        result = data["data"]
        symbol = result.get("schematicStr")
        footprint = result.get("footprintStr", result.get("dataStr"))
    else:
        result = data["result"] if isinstance(data.get("result"), dict) else data
        package_detail = result.get("packageDetail")
        symbol = result.get("dataStr")
        footprint = package_detail.get("dataStr") if isinstance(package_detail, dict) else None

    return ComponentData(
        title=str(result.get("title") or ""),
        description=str(result.get("description") or ""),
        lcsc_id=lcsc_id or str(data.get("lcscId") or ""),
        symbol_data=_as_data_str(symbol),
        footprint_data=_as_data_str(footprint),
    )
