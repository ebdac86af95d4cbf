"""Shape record tokenizer for the EasyEDA tilde-delimited geometry format.

A shape entry in a ``dataStr.shape`` array is either a bare string such as
``"PAD~RECT~0~0~10~5~1~~1"`` or an object carrying that string under the
``gge`` key. Both forms are resolved once here; everything downstream only
sees a :class:`ShapeRecord`.
"""

from __future__ import annotations

import re
from typing import Any, NamedTuple, Optional

FIELD_DELIMITER = "~"
WRAPPED_FIELD = "gge"

# Leading numeric prefix, mirroring how the vendor tooling reads numbers:
# "12.5mil" -> 12.5, "abc" -> no match. "Infinity" is accepted so that
# non-finite geometry reaches the model and is filtered there.
_NUMBER_PREFIX = re.compile(
    r"^\s*([+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"
)


class ShapeEntry(NamedTuple):
    """One resolved shape entry: its record text and whether it came wrapped."""

    text: str
    wrapped: bool = False


def resolve_entry(entry: Any) -> Optional[ShapeEntry]:
    """Resolve a raw ``shape`` array item, or return None for foreign entries."""
    if isinstance(entry, str):
        return ShapeEntry(entry)
    if isinstance(entry, dict):
        text = entry.get(WRAPPED_FIELD)
        if isinstance(text, str) and text:
            return ShapeEntry(text, wrapped=True)
    return None


def safe_float(value: Optional[str], default: float = 0.0) -> float:
    """Parse a numeric field, returning *default* when missing or non-numeric."""
    if not value:
        return default
    match = _NUMBER_PREFIX.match(value)
    if match is None:
        return default
    return float(match.group(1).replace("Infinity", "inf"))


def split_numbers(value: Optional[str]) -> list[float]:
    """Split a whitespace-separated coordinate list, defaulting bad items to 0."""
    if not value or not value.strip():
        return []
    return [safe_float(token) for token in value.split()]


class ShapeRecord:
    """Ordered fields of one shape record; field 0 is the tag.

    Positional access never raises: out-of-range fields read as ``""``.
    """

    __slots__ = ("fields", "raw", "wrapped")

    def __init__(self, raw: str, wrapped: bool = False) -> None:
        self.raw = raw
        self.wrapped = wrapped
        self.fields = raw.split(FIELD_DELIMITER)

    @property
    def tag(self) -> str:
        return self.fields[0]

    def __len__(self) -> int:
        return len(self.fields)

    def text(self, index: int, default: str = "") -> str:
        if index < len(self.fields) and self.fields[index]:
            return self.fields[index]
        return default

    def number(self, index: int, default: float = 0.0) -> float:
        return safe_float(self.text(index), default)

    def is_numeric(self, index: int) -> bool:
        return _NUMBER_PREFIX.match(self.text(index)) is not None

    def __repr__(self) -> str:
        return f"ShapeRecord({self.raw!r})"


def tokenize(entry: Any) -> Optional[ShapeRecord]:
    """Turn a ``shape`` array item into a record, or None if it is not one."""
    resolved = resolve_entry(entry)
    if resolved is None:
        return None
    return ShapeRecord(resolved.text, wrapped=resolved.wrapped)
