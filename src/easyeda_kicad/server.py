"""FastMCP server creation and tool registration."""

from __future__ import annotations

from fastmcp import FastMCP

from easyeda_kicad import __version__
from easyeda_kicad.config import ConverterConfig
from easyeda_kicad.logging_config import get_logger, setup_logging
from easyeda_kicad.tools import convert

logger = get_logger("server")


def create_server(config: ConverterConfig | None = None) -> FastMCP:
    """Create and configure the converter MCP server.

    Args:
        config: Server configuration. Uses defaults/env vars if not provided.

    Returns:
        Configured FastMCP server instance ready to run.
    """
    if config is None:
        config = ConverterConfig()

    setup_logging(level=config.log_level.value, log_file=config.log_file)
    logger.info("EasyEDA to KiCad converter v%s starting", __version__)

    mcp = FastMCP(
        "EasyEDA to KiCad Converter",
        version=__version__,
    )

    convert.register_tools(mcp, config)

    logger.info("Server ready, writing converted files to %s", config.output_dir)
    return mcp
