"""Public contracts shared between the renderer and its hosts."""

from instanced.api.logging import LoggingConfig
from instanced.api.window import PresentationSurface, SurfaceResizeEvent, WindowPort

__all__ = ["LoggingConfig", "PresentationSurface", "SurfaceResizeEvent", "WindowPort"]
