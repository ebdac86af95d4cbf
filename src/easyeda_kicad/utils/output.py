"""Writing converted library files to disk."""

from __future__ import annotations

from pathlib import Path

from easyeda_kicad.logging_config import get_logger
from easyeda_kicad.utils.validation import validate_writable_path

logger = get_logger("output")


def write_output(
    output_dir: Path,
    stem: str,
    extension: str,
    content: str,
    overwrite: bool = False,
) -> Path:
    """Write *content* to ``output_dir/stem+extension``.

    Raises:
        InvalidPathError: If the directory is missing, or the file exists
            and *overwrite* is False.
    """
    target = validate_writable_path(Path(output_dir) / f"{stem}{extension}", overwrite=overwrite)
    target.write_text(content, encoding="utf-8")
    logger.info("Wrote %s (%d bytes)", target, len(content))
    return target
