"""Instanced 2D shape renderer on wgpu."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from instanced.runtime.config import RenderConfig

__version__ = "0.1.0"


def run(config: "RenderConfig | None" = None) -> None:
    """Open a window and render instanced shapes until it closes."""
    from instanced.runtime.bootstrap import run as runtime_run

    runtime_run(config)


__all__ = ["__version__", "run"]
