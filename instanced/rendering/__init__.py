"""Instanced rendering pipeline: setup, per-frame draw and resize handling."""

from instanced.rendering.context import RenderContext
from instanced.rendering.frame import render_frame
from instanced.rendering.setup import build_render_context
from instanced.rendering.viewport import ViewportReactor

__all__ = ["RenderContext", "ViewportReactor", "build_render_context", "render_frame"]
