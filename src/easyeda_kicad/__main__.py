"""CLI entry point: python -m easyeda_kicad"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

from easyeda_kicad import __version__
from easyeda_kicad.config import ConverterConfig, LogLevel, TransportType
from easyeda_kicad.emit.footprint import emit_footprint
from easyeda_kicad.emit.symbol import emit_symbol
from easyeda_kicad.logging_config import get_logger, setup_logging
from easyeda_kicad.models.errors import InvalidFileFormatError, ValidationError
from easyeda_kicad.parsing.document import (
    parse_footprint_result,
    parse_schematic_result,
    unwrap_component,
)
from easyeda_kicad.utils.output import write_output
from easyeda_kicad.utils.validation import (
    KICAD_FOOTPRINT_EXT,
    KICAD_SYMBOL_LIB_EXT,
    output_basename,
    validate_input_path,
    validate_kind,
    validate_writable_path,
)

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="EasyEDA to KiCad - convert LCSC/EasyEDA footprints and symbols to KiCad libraries",
    )
    parser.add_argument(
        "--version", action="version", version=f"easyeda-kicad {__version__}",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    convert = commands.add_parser("convert", help="Convert a saved EasyEDA JSON file")
    convert.add_argument("input", help="JSON file: a bare dataStr or a component API response")
    convert.add_argument(
        "--kind",
        choices=["footprint", "symbol", "both"],
        default="both",
        help="What to convert (default: both)",
    )
    convert.add_argument("--output-dir", default=None, help="Output directory (default: .)")
    convert.add_argument("--title", default="", help="Component title for file naming")
    convert.add_argument("--lcsc-id", default="", help="LCSC part number for file naming")
    convert.add_argument(
        "--overwrite", action="store_true", help="Replace existing output files",
    )

    serve = commands.add_parser("serve", help="Run the MCP server")
    serve.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=None,
        help="MCP transport (default: stdio)",
    )
    serve.add_argument("--sse-host", default=None, help="SSE server host (default: 127.0.0.1)")
    serve.add_argument("--sse-port", type=int, default=None, help="SSE server port (default: 8765)")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Build config from CLI args + env vars
    overrides = {}
    if args.log_level:
        overrides["log_level"] = LogLevel(args.log_level)
    if args.command == "convert":
        if args.output_dir:
            overrides["output_dir"] = args.output_dir
        if args.overwrite:
            overrides["overwrite"] = True
    else:
        if args.transport:
            overrides["transport"] = TransportType(args.transport)
        if args.sse_host:
            overrides["sse_host"] = args.sse_host
        if args.sse_port:
            overrides["sse_port"] = args.sse_port

    config = ConverterConfig(**overrides)

    if args.command == "serve":
        _serve(config)
        return 0

    setup_logging(level=config.log_level.value, log_file=config.log_file)
    try:
        written = _convert(config, args.input, args.kind, args.title, args.lcsc_id)
    except ValidationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if not written:
        print("error: no footprint or symbol data found in input", file=sys.stderr)
        return 1
    for path in written:
        print(path)
    return 0


def _convert(config: ConverterConfig, input_path: str, kind: str, title: str, lcsc_id: str) -> list[str]:
    """Convert one input file, returning the paths written.

    Every target is checked before anything is written, so a refused
    symbol file does not leave a lone footprint behind.
    """
    kind = validate_kind(kind)
    source = validate_input_path(input_path, ".json")
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidFileFormatError(f"Cannot read file: {e}")
    component = unwrap_component(text, lcsc_id=lcsc_id)
    title = title or component.title
    out_dir = config.get_output_dir()
    outputs: list[tuple[str, str, str]] = []

    if kind in ("footprint", "both") and component.footprint_data is not None:
        fp_result = parse_footprint_result(component.footprint_data)
        for message in fp_result.diagnostics:
            logger.warning("footprint: %s", message)
        stem = output_basename(fp_result.document.name, title, component.lcsc_id)
        outputs.append((stem, KICAD_FOOTPRINT_EXT, emit_footprint(fp_result.document)))

    if kind in ("symbol", "both") and component.symbol_data is not None:
        sym_result = parse_schematic_result(component.symbol_data)
        for message in sym_result.diagnostics:
            logger.warning("symbol: %s", message)
        stem = output_basename(sym_result.document.name, title, component.lcsc_id)
        content = emit_symbol(sym_result.document, description=component.description)
        outputs.append((stem, KICAD_SYMBOL_LIB_EXT, content))

    for stem, extension, _ in outputs:
        validate_writable_path(out_dir / f"{stem}{extension}", overwrite=config.overwrite)

    return [
        str(write_output(out_dir, stem, extension, content, config.overwrite))
        for stem, extension, content in outputs
    ]


def _serve(config: ConverterConfig) -> None:
    from easyeda_kicad.server import create_server
    mcp = create_server(config)

    if config.transport == TransportType.SSE:
        mcp.run(transport="sse", host=config.sse_host, port=config.sse_port)
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    sys.exit(main())
