"""Shared exception types for pkg-segments.

Every failure the core can report stems from malformed or inconsistent input
data, so none of these are retried. Each exception carries an ``error_code``
for the CLI and a ``context`` dictionary with the offending names and values.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class PkgSegmentsError(RuntimeError):
    """Base exception for pkg-segments errors."""

    def __init__(
        self,
        message: str,
        *,
        error_code: str = "pkg_segments_error",
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.context = context or {}


class FormatError(PkgSegmentsError):
    """Malformed package key text or UUID string."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, error_code="FORMAT_ERROR", context=context)


class MissingFieldError(PkgSegmentsError):
    """A consumed table lacks a required field or has it in the wrong shape."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, error_code="MISSING_FIELD", context=context)


class ResolutionError(PkgSegmentsError):
    """A dependency reference could not be resolved to exactly one manifest entry.

    Raised through one of its subclasses; catch this type to handle both
    ambiguous and missing references.
    """

    def __init__(
        self,
        message: str,
        *,
        error_code: str = "RESOLUTION_ERROR",
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, error_code=error_code, context=context)


class AmbiguousKeyError(ResolutionError):
    """An unqualified reference matches more than one manifest entry."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, error_code="AMBIGUOUS_KEY", context=context)


class MissingEntryError(ResolutionError):
    """A reference matches no manifest entry."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, error_code="MISSING_ENTRY", context=context)


class SegmentConfigError(PkgSegmentsError):
    """The segment list file is invalid."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, error_code="SEGMENT_CONFIG_ERROR", context=context)


class StorageError(PkgSegmentsError):
    """A TOML document could not be read or written."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, error_code="STORAGE_ERROR", context=context)
