"""Application entry point."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from instanced.runtime.bootstrap import run
from instanced.runtime.config import ShapeKind, load_render_config
from instanced.runtime.errors import EnvironmentUnsupportedError, report_failure
from instanced.runtime.logging import setup_logging, shutdown_logging

logger = logging.getLogger("instanced.main")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="instanced-shapes",
        description="Render randomly colored, scaled and placed shapes with one instanced draw call.",
    )
    parser.add_argument("--count", type=int, default=None, help="Number of instances (default: 100).")
    parser.add_argument(
        "--shape",
        choices=[kind.value for kind in ShapeKind],
        default=None,
        help="Mesh drawn for every instance.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible scenes.")
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the renderer; returns a process exit code."""
    args = _parse_args(argv)
    setup_logging()
    config = load_render_config().with_overrides(
        instance_count=args.count,
        shape=ShapeKind(args.shape) if args.shape is not None else None,
        seed=args.seed,
    )
    if config.instance_count <= 0:
        logger.error("instance count must be positive (got %d)", config.instance_count)
        return 2
    logger.info(
        "starting shape=%s instances=%d seed=%s",
        config.shape.value,
        config.instance_count,
        config.seed,
    )
    try:
        run(config)
    except EnvironmentUnsupportedError as exc:
        report_failure(logger, exc)
        return 1
    finally:
        shutdown_logging()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
