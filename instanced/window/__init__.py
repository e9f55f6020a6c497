"""Window subsystem runtime adapters."""

from instanced.window.rendercanvas_glfw import (
    CanvasSurface,
    RenderCanvasWindow,
    configure_canvas_surface,
    create_rendercanvas_window,
)

__all__ = ["CanvasSurface", "RenderCanvasWindow", "configure_canvas_surface", "create_rendercanvas_window"]
