"""Custom exception hierarchy for the EasyEDA to KiCad converter."""

from __future__ import annotations


class EasyEDAKiCadError(Exception):
    """Base exception for all converter errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class ParseError(EasyEDAKiCadError):
    """Error while reading vendor geometry data."""


class DocumentError(ParseError):
    """The document as a whole is unreadable (bad JSON, no shape array)."""


class RecordError(ParseError):
    """A single shape record is truncated or carries no usable geometry."""


class ValidationError(EasyEDAKiCadError):
    """Input validation failed."""


class InvalidPathError(ValidationError):
    """File path is invalid or inaccessible."""


class InvalidKindError(ValidationError):
    """Requested conversion kind is not footprint, symbol or both."""


class InvalidFileFormatError(ValidationError):
    """Input file could not be read as UTF-8 text."""
