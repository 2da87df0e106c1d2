"""Binary persistence for :class:`ClassifierState`.

Layout, native byte order, no padding, no version tag::

    dimension : size_t (native word)
    r         : float64
    mean      : float64 * dimension
    cov       : float64 * dimension

The format is raw host memory, so files are only portable between hosts that
share word size and byte order.
"""

from __future__ import annotations

import logging
import math
import os
import struct

import numpy as np

from .errors import ArowIOError, CorruptData, InvalidArgument, TruncatedData
from .state import ClassifierState

logger = logging.getLogger(__name__)

_DIMENSION = struct.Struct("N")
_PARAM = struct.Struct("d")
_DOUBLE_SIZE = np.dtype(np.float64).itemsize
HEADER_SIZE = _DIMENSION.size + _PARAM.size


def dumps(state: ClassifierState) -> bytes:
    """Serialize ``state`` to bytes."""

    return b"".join(
        (
            _DIMENSION.pack(state.dimension),
            _PARAM.pack(state.r),
            np.ascontiguousarray(state.mean, dtype=np.float64).tobytes(),
            np.ascontiguousarray(state.cov, dtype=np.float64).tobytes(),
        )
    )


def loads(data: bytes) -> ClassifierState:
    """Deserialize a state, re-validating every invariant.

    Raises:
        TruncatedData: If ``data`` is shorter than its header declares.
        CorruptData: If the dimension is zero, ``r`` is not positive, the
            buffers hold invalid values. Bytes after the payload are ignored.
    """

    view = memoryview(data)
    if len(view) < HEADER_SIZE:
        raise TruncatedData(f"model data has {len(view)} bytes, header needs {HEADER_SIZE}")

    (dimension,) = _DIMENSION.unpack_from(view, 0)
    (r,) = _PARAM.unpack_from(view, _DIMENSION.size)
    if dimension == 0:
        raise CorruptData("declared dimension is zero")
    if not math.isfinite(r) or r <= 0:
        raise CorruptData(f"declared r must be positive, got {r!r}")

    expected = HEADER_SIZE + 2 * dimension * _DOUBLE_SIZE
    if len(view) < expected:
        raise TruncatedData(f"model data has {len(view)} bytes, dimension {dimension} needs {expected}")
    if len(view) > expected:
        logger.warning("trailing_bytes_ignored", extra={"dimension": dimension, "trailing": len(view) - expected})

    mean = np.frombuffer(view, dtype=np.float64, count=dimension, offset=HEADER_SIZE)
    cov = np.frombuffer(view, dtype=np.float64, count=dimension, offset=HEADER_SIZE + dimension * _DOUBLE_SIZE)
    try:
        return ClassifierState.from_buffers(dimension, mean, cov, r)
    except InvalidArgument as exc:
        raise CorruptData(str(exc)) from exc


def save(state: ClassifierState, path: str | os.PathLike[str]) -> None:
    """Create or overwrite ``path`` with the serialized state.

    Raises:
        ArowIOError: If the file cannot be written.
    """

    payload = dumps(state)
    try:
        with open(path, "wb") as handle:
            handle.write(payload)
    except OSError as exc:
        raise ArowIOError(f"cannot write model to {os.fspath(path)}: {exc}") from exc
    logger.info("model_saved", extra={"path": os.fspath(path), "dimension": state.dimension, "bytes": len(payload)})


def load(path: str | os.PathLike[str]) -> ClassifierState:
    """Read a state written by :func:`save`.

    Raises:
        ArowIOError: If the file cannot be opened or read, or is truncated.
        CorruptData: If the contents violate the model invariants.
    """

    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise ArowIOError(f"cannot read model from {os.fspath(path)}: {exc}") from exc
    state = loads(data)
    logger.info("model_loaded", extra={"path": os.fspath(path), "dimension": state.dimension})
    return state
