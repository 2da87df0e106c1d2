"""Error types raised by the classifier.

Every error derives from :class:`ArowError` and from the builtin exception
that best describes the failure, so callers can catch either.
"""

from __future__ import annotations


class ArowError(Exception):
    """Base class for all classifier errors."""


class InvalidArgument(ArowError, ValueError):
    """Bad constructor or reconfiguration parameters."""


class InvalidLabel(ArowError, ValueError):
    """Label outside of {+1, -1}."""


class IndexOutOfRange(ArowError, IndexError):
    """Feature index outside of the declared dimension."""


class DimensionMismatch(ArowError, ValueError):
    """Two models with different dimensions were combined."""


class ArowIOError(ArowError, OSError):
    """A model file could not be opened, read or written."""


class CorruptData(ArowError, ValueError):
    """A persisted model is structurally invalid."""


class TruncatedData(ArowIOError, CorruptData):
    """A persisted model ends before its declared payload."""
