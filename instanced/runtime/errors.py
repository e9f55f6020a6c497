"""Shared runtime exception types and policy helpers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TypeAlias

# Explicitly bounded fallback set for backend compatibility paths.
RecoverableRuntimeErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_RUNTIME_ERRORS: RecoverableRuntimeErrors = (
    RuntimeError,
    OSError,
    ValueError,
    TypeError,
    AttributeError,
    ImportError,
)


class InstancedError(Exception):
    """Base class for renderer-owned failures."""


class EnvironmentUnsupportedError(InstancedError, RuntimeError):
    """GPU capability, adapter, device or surface is unavailable; fatal for the session."""

    def __init__(self, message: str, *, details: Mapping[str, object] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, object] = dict(details or {})


class InstanceCountError(InstancedError, ValueError):
    """Instance count outside the supported range."""


class MeshParameterError(InstancedError, ValueError):
    """Mesh generator received parameters it cannot turn into a mesh."""


class StaticBufferRewriteError(InstancedError, RuntimeError):
    """The write-once static instance buffer was written a second time."""


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Emit structured observability for tolerated recoverable exceptions."""
    logger.log(level, message, exc_info=True)


def report_failure(logger: logging.Logger, exc: EnvironmentUnsupportedError) -> None:
    """Surface a fatal environment failure to the user exactly once."""
    logger.error("%s details=%r", exc, exc.details)


__all__ = [
    "EnvironmentUnsupportedError",
    "InstanceCountError",
    "InstancedError",
    "MeshParameterError",
    "RECOVERABLE_RUNTIME_ERRORS",
    "StaticBufferRewriteError",
    "log_recoverable",
    "report_failure",
]
