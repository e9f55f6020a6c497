"""Per-frame encode and submit: one instanced draw for every instance."""

from __future__ import annotations

import logging

from instanced.rendering.context import RenderContext
from instanced.runtime.config import trace_frames_enabled

_LOG = logging.getLogger("instanced.rendering.frame")


def render_frame(context: RenderContext) -> None:
    """Refresh per-instance scales and draw all instances with a single draw call."""
    if context.frame_in_flight:
        raise RuntimeError("render_frame supports only one frame in flight")
    context.frame_in_flight = True
    try:
        view = context.surface.current_view()
        aspect = context.aspect_ratio()
        context.store.upload_dynamic(context.queue, context.dynamic_buffer, aspect)

        encoder = context.device.create_command_encoder(label="instanced frame encoder")
        render_pass = encoder.begin_render_pass(
            label="instanced canvas render pass",
            color_attachments=[context.color_attachment.attachment(view)],
        )
        render_pass.set_pipeline(context.pipeline)
        render_pass.set_bind_group(0, context.bind_group, [], 0, 0)
        render_pass.draw(context.vertex_count, context.instance_count)
        render_pass.end()
        context.queue.submit([encoder.finish()])
        context.frame_index += 1
    finally:
        context.frame_in_flight = False
    _LOG.log(
        logging.INFO if trace_frames_enabled() else logging.DEBUG,
        "frame_submitted frame=%d instances=%d vertices=%d aspect=%.4f",
        context.frame_index,
        context.instance_count,
        context.vertex_count,
        aspect,
    )


__all__ = ["render_frame"]
