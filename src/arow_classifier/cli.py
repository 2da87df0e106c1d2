"""Command line tools for creating, merging and inspecting model files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

from . import codec, combine
from .config import ArowSettings
from .errors import ArowError
from .logging_utils import configure_logging
from .state import ClassifierState

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="arow-model", description="Manage AROW model files")
    parser.add_argument("--config", help="Path to TOML configuration file")
    commands = parser.add_subparsers(dest="command", required=True)

    init = commands.add_parser("init", help="Write a freshly initialized model")
    init.add_argument("output", help="Destination model file")
    init.add_argument("--dimension", type=int, help="Number of features")
    init.add_argument("--r", type=float, help="Regularization hyperparameter")

    merge = commands.add_parser("merge", help="Average two models into a new file")
    merge.add_argument("first", help="Model whose r is kept")
    merge.add_argument("second", help="Model averaged into the first")
    merge.add_argument("output", help="Destination model file")

    info = commands.add_parser("info", help="Print a JSON summary of a model")
    info.add_argument("model", help="Model file to inspect")
    return parser


def summarize(state: ClassifierState) -> dict[str, float | int]:
    """Return headline numbers describing ``state``."""

    return {
        "dimension": state.dimension,
        "r": state.r,
        "nonzero_weights": int((state.mean != 0).sum()),
        "mean_min": float(state.mean.min()),
        "mean_max": float(state.mean.max()),
        "cov_min": float(state.cov.min()),
        "cov_max": float(state.cov.max()),
    }


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = ArowSettings.from_toml(args.config) if args.config else ArowSettings()
    configure_logging(settings.logging)

    try:
        if args.command == "init":
            dimension = args.dimension if args.dimension is not None else settings.model.dimension
            r = args.r if args.r is not None else settings.model.r
            codec.save(ClassifierState(dimension, r), args.output)
        elif args.command == "merge":
            merged = combine.merge(codec.load(args.first), codec.load(args.second))
            codec.save(merged, args.output)
        else:
            print(json.dumps(summarize(codec.load(args.model)), indent=2))
    except ArowError as exc:
        logger.error("command_failed", extra={"command": args.command, "error": str(exc)})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
