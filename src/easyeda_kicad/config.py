"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class TransportType(str, Enum):
    STDIO = "stdio"
    SSE = "sse"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ConverterConfig(BaseSettings):
    """Configuration for the converter CLI and MCP server, loaded from environment variables."""

    model_config = {"env_prefix": "EASYEDA_KICAD_", "env_file": ".env", "extra": "ignore"}

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional path to a log file in addition to stderr",
    )
    output_dir: Path = Field(
        default=Path("."),
        description="Directory that converted .kicad_mod/.kicad_sym files are written to",
    )
    overwrite: bool = Field(
        default=False,
        description="Replace existing output files instead of refusing to write",
    )
    transport: TransportType = Field(
        default=TransportType.STDIO,
        description="MCP transport: stdio or sse",
    )
    sse_host: str = Field(default="127.0.0.1", description="SSE server host")
    sse_port: int = Field(default=8765, description="SSE server port")

    def get_output_dir(self) -> Path:
        """Resolve the output directory, creating it if needed."""
        out = Path(self.output_dir).expanduser().resolve()
        out.mkdir(parents=True, exist_ok=True)
        return out
