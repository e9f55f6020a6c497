"""Session bootstrap: device acquisition, one-time setup and resize wiring."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from instanced.api.window import PresentationSurface, SurfaceResizeEvent, WindowPort
from instanced.rendering.context import RenderContext
from instanced.rendering.setup import build_render_context
from instanced.rendering.viewport import ViewportReactor
from instanced.runtime.config import RenderConfig, load_render_config
from instanced.runtime.device import (
    DeviceLifecycle,
    adapter_summary,
    load_wgpu,
    request_adapter,
    request_device,
)
from instanced.runtime.logging import setup_logging
from instanced.window.rendercanvas_glfw import configure_canvas_surface, create_rendercanvas_window

_LOG = logging.getLogger("instanced.runtime.bootstrap")

SurfaceFactory = Callable[..., PresentationSurface]


@dataclass(slots=True)
class Session:
    """One bootstrapped device plus the render state built on it."""

    window: WindowPort
    adapter: object
    device: object
    lifecycle: DeviceLifecycle
    context: RenderContext
    reactor: ViewportReactor


def main(
    device: object,
    *,
    adapter: object,
    window: WindowPort,
    config: RenderConfig,
    wgpu_mod: object | None = None,
    surface_factory: SurfaceFactory = configure_canvas_surface,
) -> tuple[RenderContext, ViewportReactor]:
    """One-time setup on ``device`` and registration with the window's resize events."""
    surface = surface_factory(window, device=device, adapter=adapter)
    context = build_render_context(device, surface, config, wgpu_mod=wgpu_mod)
    reactor = ViewportReactor(context)
    window.set_resize_listener(reactor.notify)
    window.set_draw_callback(reactor.on_draw)
    width, height = surface.pixel_size()
    reactor.notify(SurfaceResizeEvent(width=float(width), height=float(height)))
    window.request_draw()
    return context, reactor


def start(
    config: RenderConfig | None = None,
    *,
    window: WindowPort | None = None,
    wgpu_mod: object | None = None,
    surface_factory: SurfaceFactory | None = None,
    on_session: Callable[[Session], None] | None = None,
) -> Session:
    """Acquire adapter and device, watch for device loss, and build the render state.

    Unintentional device loss re-runs this function on the same window; every
    session it creates, including restarts, is reported to ``on_session``.
    """
    setup_logging()
    resolved = config or load_render_config()
    factory = surface_factory if surface_factory is not None else configure_canvas_surface
    gpu_mod = wgpu_mod if wgpu_mod is not None else load_wgpu()
    host = window
    if host is None:
        host = create_rendercanvas_window(
            width=resolved.window.width,
            height=resolved.window.height,
            title=resolved.window.title,
        )
    adapter, selected_backend = request_adapter(gpu_mod, resolved.wgpu_backends)
    device = request_device(adapter)
    _LOG.info(
        "gpu_device_ready backend=%s adapter=%r",
        selected_backend,
        adapter_summary(adapter),
    )

    def _restart() -> None:
        start(
            resolved,
            window=host,
            wgpu_mod=gpu_mod,
            surface_factory=factory,
            on_session=on_session,
        )

    lifecycle = DeviceLifecycle(device=device, on_unintentional_loss=_restart)
    lifecycle.watch()
    context, reactor = main(
        device,
        adapter=adapter,
        window=host,
        config=resolved,
        wgpu_mod=gpu_mod,
        surface_factory=factory,
    )
    session = Session(
        window=host,
        adapter=adapter,
        device=device,
        lifecycle=lifecycle,
        context=context,
        reactor=reactor,
    )
    if on_session is not None:
        on_session(session)
    return session


def run(config: RenderConfig | None = None) -> None:
    """Start a session and run the window event loop until it closes."""
    sessions: list[Session] = []
    start(config, on_session=sessions.append)
    try:
        sessions[-1].window.run_loop()
    finally:
        sessions[-1].lifecycle.destroy()


__all__ = ["Session", "main", "run", "start"]
