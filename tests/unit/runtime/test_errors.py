from __future__ import annotations

import logging

from instanced.runtime.errors import (
    EnvironmentUnsupportedError,
    InstanceCountError,
    MeshParameterError,
    StaticBufferRewriteError,
    log_recoverable,
    report_failure,
)


def test_error_hierarchy_matches_builtin_categories() -> None:
    assert issubclass(EnvironmentUnsupportedError, RuntimeError)
    assert issubclass(InstanceCountError, ValueError)
    assert issubclass(MeshParameterError, ValueError)
    assert issubclass(StaticBufferRewriteError, RuntimeError)


def test_report_failure_logs_details_once(caplog) -> None:
    logger = logging.getLogger("instanced.test.errors")
    exc = EnvironmentUnsupportedError("no adapter", details={"selected_backend": "vulkan"})

    with caplog.at_level(logging.ERROR, logger="instanced.test.errors"):
        report_failure(logger, exc)

    (record,) = caplog.records
    assert "no adapter" in record.getMessage()
    assert "vulkan" in record.getMessage()


def test_log_recoverable_attaches_traceback(caplog) -> None:
    logger = logging.getLogger("instanced.test.errors")

    with caplog.at_level(logging.DEBUG, logger="instanced.test.errors"):
        try:
            raise OSError("resize failed")
        except OSError:
            log_recoverable(logger, "canvas_set_physical_size_failed")

    (record,) = caplog.records
    assert record.exc_info is not None
    assert record.levelno == logging.DEBUG
