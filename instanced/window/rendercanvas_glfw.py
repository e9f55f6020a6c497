"""Rendercanvas/GLFW-backed window and presentation surface."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from instanced.api.window import SurfaceResizeEvent
from instanced.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, EnvironmentUnsupportedError, log_recoverable

_LOG = logging.getLogger("instanced.window")

DEFAULT_SURFACE_FORMAT = "bgra8unorm"


def run_backend_loop(rc_auto: Any) -> None:
    """Run rendercanvas backend loop."""
    loop = getattr(rc_auto, "loop", None)
    if loop is not None and hasattr(loop, "run"):
        loop.run()
        return
    run_func = getattr(rc_auto, "run", None)
    if callable(run_func):
        run_func()
        return
    raise RuntimeError("rendercanvas.auto did not expose a runnable loop.")


def stop_backend_loop(rc_auto: Any) -> None:
    """Stop rendercanvas backend loop when supported."""
    loop = getattr(rc_auto, "loop", None)
    if loop is not None and hasattr(loop, "stop"):
        loop.stop()


@dataclass(slots=True)
class RenderCanvasWindow:
    """Window adapter over a rendercanvas canvas.

    Resize events are normalized to physical pixels and forwarded to the single
    resize listener, followed by a draw request.
    """

    canvas: Any
    _rc_auto: Any | None = field(default=None, repr=False)
    _resize_listener: Callable[[SurfaceResizeEvent], None] | None = field(default=None, repr=False)
    _draw_callback: Callable[[], None] | None = field(default=None, repr=False)
    _context: Any | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        add_handler = getattr(self.canvas, "add_event_handler", None)
        if callable(add_handler):
            add_handler(self._on_resize, "resize")

    def set_resize_listener(self, listener: Callable[[SurfaceResizeEvent], None]) -> None:
        self._resize_listener = listener

    def set_draw_callback(self, callback: Callable[[], None]) -> None:
        self._draw_callback = callback
        request_draw = getattr(self.canvas, "request_draw", None)
        if callable(request_draw):
            request_draw(self._on_draw)

    def request_draw(self) -> None:
        request_draw = getattr(self.canvas, "request_draw", None)
        if callable(request_draw):
            request_draw()

    def get_context(self) -> Any:
        if self._context is None:
            get_context = getattr(self.canvas, "get_context", None)
            if not callable(get_context):
                raise EnvironmentUnsupportedError(
                    "could not obtain a WebGPU context for the canvas",
                    details={"canvas_type": type(self.canvas).__name__},
                )
            self._context = get_context("wgpu")
        return self._context

    def physical_size(self) -> tuple[int, int]:
        getter = getattr(self.canvas, "get_physical_size", None)
        if callable(getter):
            width, height = getter()
            return int(width), int(height)
        return (1, 1)

    def run_loop(self) -> None:
        if self._rc_auto is None:
            return
        run_backend_loop(self._rc_auto)

    def stop_loop(self) -> None:
        if self._rc_auto is None:
            return
        stop_backend_loop(self._rc_auto)

    def close(self) -> None:
        self.stop_loop()
        closer = getattr(self.canvas, "close", None)
        if callable(closer):
            closer()

    def _on_draw(self) -> None:
        if self._draw_callback is not None:
            self._draw_callback()

    def _on_resize(self, event: object) -> None:
        width, height = _resize_dimensions(event)
        if width is None or height is None:
            return
        ratio_raw = _event_value(event, "pixel_ratio", 1.0)
        dpi_scale = float(ratio_raw) if isinstance(ratio_raw, (int, float)) and ratio_raw > 0 else 1.0
        resize = SurfaceResizeEvent(width=width * dpi_scale, height=height * dpi_scale, dpi_scale=dpi_scale)
        if self._resize_listener is not None:
            self._resize_listener(resize)
        self.request_draw()


@dataclass(slots=True)
class CanvasSurface:
    """Presentation surface over a configured wgpu canvas context.

    The context's texture follows the canvas physical size, so a pixel size that
    differs from it is applied by resizing the canvas in logical units.
    """

    context: Any
    format: str = DEFAULT_SURFACE_FORMAT
    canvas: Any | None = None
    _width: int = 1
    _height: int = 1

    def pixel_size(self) -> tuple[int, int]:
        return self._width, self._height

    def set_pixel_size(self, width: int, height: int) -> None:
        self._width = max(1, int(width))
        self._height = max(1, int(height))
        try:
            self._apply_size()
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, "canvas_set_size_failed")

    def _apply_size(self) -> None:
        set_physical_size = getattr(self.context, "set_physical_size", None)
        if callable(set_physical_size):
            set_physical_size(self._width, self._height)
            return
        canvas = self.canvas
        set_logical_size = getattr(canvas, "set_logical_size", None)
        if not callable(set_logical_size):
            return
        get_physical_size = getattr(canvas, "get_physical_size", None)
        if callable(get_physical_size):
            current = tuple(int(v) for v in get_physical_size())
            if current == (self._width, self._height):
                return
        ratio = _pixel_ratio(canvas)
        set_logical_size(self._width / ratio, self._height / ratio)
        _LOG.debug(
            "canvas_resized physical=(%d,%d) pixel_ratio=%.3f",
            self._width,
            self._height,
            ratio,
        )

    def current_view(self) -> object:
        return self.context.get_current_texture().create_view()


def configure_canvas_surface(
    window: RenderCanvasWindow,
    *,
    device: object,
    adapter: object,
) -> CanvasSurface:
    """Configure the window's canvas context for ``device`` with the preferred format."""
    context = window.get_context()
    if context is None:
        raise EnvironmentUnsupportedError("could not obtain a WebGPU canvas context")
    get_preferred_format = getattr(context, "get_preferred_format", None)
    surface_format = DEFAULT_SURFACE_FORMAT
    if callable(get_preferred_format):
        surface_format = str(get_preferred_format(adapter))
    context.configure(device=device, format=surface_format)
    width, height = window.physical_size()
    surface = CanvasSurface(context=context, format=surface_format, canvas=window.canvas)
    surface.set_pixel_size(width, height)
    _LOG.info("canvas_configured format=%s size=(%d,%d)", surface_format, width, height)
    return surface


def create_rendercanvas_window(
    *,
    width: int = 640,
    height: int = 480,
    title: str = "Instanced Shapes",
) -> RenderCanvasWindow:
    """Create a window adapter over a new on-demand rendercanvas canvas."""
    try:
        import rendercanvas.auto as rc_auto
    except ImportError as exc:
        raise EnvironmentUnsupportedError(
            "Render canvas backend unavailable. Install a desktop backend such as glfw.",
            details={"exception_message": str(exc)},
        ) from exc
    canvas_cls = getattr(rc_auto, "RenderCanvas", None)
    if canvas_cls is None:
        raise EnvironmentUnsupportedError("rendercanvas.auto did not expose RenderCanvas.")
    try:
        canvas = canvas_cls(size=(int(width), int(height)), title=title, update_mode="ondemand")
    except TypeError:
        canvas = canvas_cls(size=(int(width), int(height)), title=title)
    return RenderCanvasWindow(canvas=canvas, _rc_auto=rc_auto)


def _resize_dimensions(event: object) -> tuple[float | None, float | None]:
    width = _event_value(event, "width")
    height = _event_value(event, "height")
    if isinstance(width, (int, float)) and isinstance(height, (int, float)):
        return float(width), float(height)
    size = _event_value(event, "size")
    if isinstance(size, (tuple, list)) and len(size) >= 2:
        w, h = size[0], size[1]
        if isinstance(w, (int, float)) and isinstance(h, (int, float)):
            return float(w), float(h)
    return None, None


def _event_value(event: object, key: str, default: object | None = None) -> object | None:
    if isinstance(event, dict):
        return event.get(key, default)
    return getattr(event, key, default)


def _pixel_ratio(canvas: Any) -> float:
    getter = getattr(canvas, "get_pixel_ratio", None)
    ratio = getter() if callable(getter) else 1.0
    if isinstance(ratio, (int, float)) and ratio > 0:
        return float(ratio)
    return 1.0


__all__ = [
    "CanvasSurface",
    "RenderCanvasWindow",
    "configure_canvas_surface",
    "create_rendercanvas_window",
    "run_backend_loop",
    "stop_backend_loop",
]
