"""Online confidence-weighted linear classification with AROW."""

from .arow import ArowClassifier, UpdateResult, fit, predict, update, update_with_info
from .codec import dumps, load, loads, save
from .combine import merge, merge_all, merge_into
from .config import ArowSettings, LoggingConfig, ModelConfig
from .errors import (
    ArowError,
    ArowIOError,
    CorruptData,
    DimensionMismatch,
    IndexOutOfRange,
    InvalidArgument,
    InvalidLabel,
    TruncatedData,
)
from .logging_utils import JsonFormatter, configure_logging
from .scoring import SparseFeatureVector, confidence, margin
from .state import DEFAULT_R, ClassifierState
from .stats import TrainingStats

__all__ = [
    "ArowClassifier",
    "ArowError",
    "ArowIOError",
    "ArowSettings",
    "ClassifierState",
    "CorruptData",
    "DEFAULT_R",
    "DimensionMismatch",
    "IndexOutOfRange",
    "InvalidArgument",
    "InvalidLabel",
    "JsonFormatter",
    "LoggingConfig",
    "ModelConfig",
    "SparseFeatureVector",
    "TrainingStats",
    "TruncatedData",
    "UpdateResult",
    "configure_logging",
    "confidence",
    "dumps",
    "fit",
    "load",
    "loads",
    "margin",
    "merge",
    "merge_all",
    "merge_into",
    "predict",
    "save",
    "update",
    "update_with_info",
]
