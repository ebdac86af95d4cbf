"""Conversion tools - 5 tools for parsing EasyEDA data and emitting KiCad files."""

from __future__ import annotations

import json

from fastmcp import FastMCP

from easyeda_kicad.config import ConverterConfig
from easyeda_kicad.emit.footprint import emit_footprint
from easyeda_kicad.emit.layers import DEFAULT_LAYER, LAYER_MAP
from easyeda_kicad.emit.symbol import emit_symbol
from easyeda_kicad.logging_config import get_logger
from easyeda_kicad.models.errors import ValidationError
from easyeda_kicad.parsing.document import parse_footprint_result, parse_schematic_result
from easyeda_kicad.utils.output import write_output
from easyeda_kicad.utils.validation import (
    KICAD_FOOTPRINT_EXT,
    KICAD_SYMBOL_LIB_EXT,
    output_basename,
)

logger = get_logger("tools.convert")


def register_tools(mcp: FastMCP, config: ConverterConfig) -> None:
    """Register conversion tools on the MCP server."""

    @mcp.tool()
    def parse_footprint_data(data_str: str) -> str:
        """Parse an EasyEDA footprint dataStr into its decoded geometry.

        Args:
            data_str: The footprint dataStr JSON (the object with 'head' and 'shape').

        Returns:
            JSON with the decoded pads, lines, circles, arcs and texts plus
            any diagnostics for records that were skipped.
        """
        result = parse_footprint_result(data_str)
        return json.dumps({
            "status": "success",
            "ok": result.ok,
            "skipped": result.skipped,
            "diagnostics": result.diagnostics,
            "footprint": result.document.model_dump(mode="json"),
        }, indent=2)

    @mcp.tool()
    def parse_symbol_data(data_str: str) -> str:
        """Parse an EasyEDA symbol dataStr into its decoded geometry.

        Args:
            data_str: The symbol dataStr JSON (the object with 'head' and 'shape').

        Returns:
            JSON with the decoded pins, polylines, circles, rectangles and texts
            plus any diagnostics for records that were skipped.
        """
        result = parse_schematic_result(data_str)
        return json.dumps({
            "status": "success",
            "ok": result.ok,
            "skipped": result.skipped,
            "diagnostics": result.diagnostics,
            "symbol": result.document.model_dump(mode="json"),
        }, indent=2)

    @mcp.tool()
    def convert_footprint(
        data_str: str, title: str = "", lcsc_id: str = "", write: bool = False,
    ) -> str:
        """Convert an EasyEDA footprint dataStr into a KiCad .kicad_mod footprint.

        Args:
            data_str: The footprint dataStr JSON.
            title: Component title, used for the output file name.
            lcsc_id: LCSC part number (e.g. 'C2040'), used for the output file name.
            write: Also write the file into the configured output directory.

        Returns:
            JSON with the footprint name, file name and the .kicad_mod content.
        """
        result = parse_footprint_result(data_str)
        content = emit_footprint(result.document)
        stem = output_basename(result.document.name, title, lcsc_id)
        response = {
            "status": "success",
            "name": result.document.name,
            "file_name": f"{stem}{KICAD_FOOTPRINT_EXT}",
            "pad_count": len(result.document.pads),
            "model_uuid": result.document.model_uuid,
            "diagnostics": result.diagnostics,
            "content": content,
        }
        if write:
            try:
                path = write_output(
                    config.get_output_dir(), stem, KICAD_FOOTPRINT_EXT, content, config.overwrite,
                )
            except ValidationError as e:
                return json.dumps({"status": "error", "message": f"Footprint write failed: {e}"})
            response["path"] = str(path)
        return json.dumps(response, indent=2)

    @mcp.tool()
    def convert_symbol(
        data_str: str, title: str = "", lcsc_id: str = "", description: str = "",
        write: bool = False,
    ) -> str:
        """Convert an EasyEDA symbol dataStr into a KiCad .kicad_sym library.

        Args:
            data_str: The symbol dataStr JSON.
            title: Component title, used for the output file name.
            lcsc_id: LCSC part number (e.g. 'C2040'), used for the output file name.
            description: Part description, stored as the ki_description property.
            write: Also write the file into the configured output directory.

        Returns:
            JSON with the symbol name, file name and the .kicad_sym content.
        """
        result = parse_schematic_result(data_str)
        content = emit_symbol(result.document, description=description)
        stem = output_basename(result.document.name, title, lcsc_id)
        response = {
            "status": "success",
            "name": result.document.name,
            "file_name": f"{stem}{KICAD_SYMBOL_LIB_EXT}",
            "pin_count": len(result.document.pins),
            "diagnostics": result.diagnostics,
            "content": content,
        }
        if write:
            try:
                path = write_output(
                    config.get_output_dir(), stem, KICAD_SYMBOL_LIB_EXT, content, config.overwrite,
                )
            except ValidationError as e:
                return json.dumps({"status": "error", "message": f"Symbol write failed: {e}"})
            response["path"] = str(path)
        return json.dumps(response, indent=2)

    @mcp.tool()
    def list_layer_mappings() -> str:
        """List how EasyEDA layer ids map onto KiCad layer names.

        Returns:
            JSON with the id -> layer table and the fallback layer.
        """
        return json.dumps({
            "status": "success",
            "layers": {layer_id: layer.value for layer_id, layer in LAYER_MAP.items()},
            "default": DEFAULT_LAYER.value,
        }, indent=2)
