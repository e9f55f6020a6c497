"""Window and presentation surface contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class SurfaceResizeEvent:
    """Observed content-box size in physical pixels, before clamping."""

    width: float
    height: float
    dpi_scale: float = 1.0


class PresentationSurface(Protocol):
    """Configured surface the renderer draws into."""

    @property
    def format(self) -> str:
        """Texture format the surface was configured with."""

    def pixel_size(self) -> tuple[int, int]:
        """Current pixel buffer size (width, height)."""

    def set_pixel_size(self, width: int, height: int) -> None:
        """Apply a new pixel buffer size."""

    def current_view(self) -> object:
        """Return a view of the current frame's render target."""


class WindowPort(Protocol):
    """Host window/event-loop ownership contract."""

    def set_resize_listener(self, listener: Callable[[SurfaceResizeEvent], None]) -> None:
        """Replace the resize listener."""

    def set_draw_callback(self, callback: Callable[[], None]) -> None:
        """Replace the draw callback invoked by the backend when a frame is due."""

    def request_draw(self) -> None:
        """Ask the backend to schedule one draw callback."""

    def get_context(self) -> object:
        """Return the backend's wgpu canvas context."""

    def run_loop(self) -> None:
        """Run the OS/backend event loop."""

    def close(self) -> None:
        """Close window and release backend resources."""


__all__ = ["PresentationSurface", "SurfaceResizeEvent", "WindowPort"]
