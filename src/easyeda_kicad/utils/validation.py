"""Name sanitisation and input validation utilities."""

from __future__ import annotations

import re
from pathlib import Path

from easyeda_kicad.models.errors import InvalidKindError, InvalidPathError

# Anything outside this set is replaced in library and pad names
UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")

DEFAULT_FOOTPRINT_NAME = "EasyEDA_Footprint"
DEFAULT_SYMBOL_NAME = "EasyEDA_Symbol"

KICAD_FOOTPRINT_EXT = ".kicad_mod"
KICAD_SYMBOL_LIB_EXT = ".kicad_sym"

CONVERSION_KINDS = ("footprint", "symbol", "both")


def sanitize_name(name: str, default: str = "") -> str:
    """Replace characters outside ``[A-Za-z0-9_-]`` with ``_``.

    Args:
        name: Raw name, e.g. a package like 'SOT-23-5 (L2.9)'.
        default: Returned when the sanitised name is empty.

    Returns:
        The sanitised name, or *default*.
    """
    cleaned = UNSAFE_NAME_CHARS.sub("_", name or "")
    return cleaned or default


def output_basename(package: str = "", title: str = "", lcsc_id: str = "") -> str:
    """Build the file stem used for converted library files.

    ``{package}_{title}_{lcsc_id}`` with empty parts left out, so a
    component without a package name becomes ``{title}_{lcsc_id}``.
    """
    parts = (sanitize_name(package), sanitize_name(title), sanitize_name(lcsc_id))
    return "_".join(p for p in parts if p) or DEFAULT_FOOTPRINT_NAME


def validate_input_path(path: str, expected_ext: str | None = None) -> Path:
    """Validate a path to an existing input file.

    Raises:
        InvalidPathError: If the path is empty, missing or has the wrong extension.
    """
    if not path:
        raise InvalidPathError("File path cannot be empty")

    p = Path(path).expanduser().resolve()

    if not p.is_file():
        raise InvalidPathError(f"File not found: {p}")

    if expected_ext and p.suffix != expected_ext:
        raise InvalidPathError(
            f"Expected {expected_ext} file, got '{p.suffix}': {p}"
        )

    return p


def validate_writable_path(path: Path, overwrite: bool = False) -> Path:
    """Validate a path that will be written to (file may not exist yet).

    Raises:
        InvalidPathError: If the parent directory doesn't exist, or the file
            exists and *overwrite* is False.
    """
    p = Path(path).expanduser().resolve()

    if not p.parent.exists():
        raise InvalidPathError(f"Parent directory does not exist: {p.parent}")

    if p.exists() and not overwrite:
        raise InvalidPathError(f"Refusing to overwrite existing file: {p}")

    return p


def validate_kind(kind: str) -> str:
    """Validate a conversion kind: 'footprint', 'symbol' or 'both'."""
    normalized = (kind or "").strip().lower()
    if normalized not in CONVERSION_KINDS:
        raise InvalidKindError(
            f"Unknown conversion kind: '{kind}'. Valid kinds: {', '.join(CONVERSION_KINDS)}"
        )
    return normalized
