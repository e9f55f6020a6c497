"""Resize handling: clamp to device limits, resize the surface, re-render once."""

from __future__ import annotations

import logging
import math
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field

from instanced.api.window import SurfaceResizeEvent
from instanced.rendering.context import RenderContext
from instanced.rendering.frame import render_frame

_LOG = logging.getLogger("instanced.rendering.viewport")


def clamp_dimension(value: float, max_dimension: int) -> int:
    """Clamp one observed dimension to ``[1, max_dimension]``."""
    if not math.isfinite(value):
        return 1
    return max(1, min(int(value), int(max_dimension)))


def clamp_size(width: float, height: float, max_dimension: int) -> tuple[int, int]:
    return clamp_dimension(width, max_dimension), clamp_dimension(height, max_dimension)


@dataclass(slots=True)
class ViewportReactor:
    """Single consumer of surface resize notifications.

    Pending notifications are held in a depth-1 mailbox; only the latest size
    survives until the next drain.
    """

    context: RenderContext
    render: Callable[[RenderContext], None] = render_frame
    _pending: deque[SurfaceResizeEvent] = field(init=False, default_factory=lambda: deque(maxlen=1))
    _handled: int = field(init=False, default=0)
    _coalesced: int = field(init=False, default=0)

    @property
    def handled_count(self) -> int:
        return self._handled

    @property
    def coalesced_count(self) -> int:
        return self._coalesced

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def notify(self, event: SurfaceResizeEvent) -> None:
        """Queue a resize; replaces any notification not yet drained."""
        if self._pending:
            self._coalesced += 1
        self._pending.append(event)

    def drain(self) -> bool:
        """Handle the pending notification, if any. Returns whether a frame was rendered."""
        if not self._pending:
            return False
        self.handle(self._pending.popleft())
        return True

    def on_draw(self) -> None:
        """Draw callback: apply a pending resize, otherwise redraw at the current size."""
        if not self.drain():
            self.render(self.context)

    def handle(self, event: SurfaceResizeEvent) -> tuple[int, int]:
        """Clamp, apply to the surface and trigger exactly one render."""
        limit = self.context.max_texture_dimension_2d
        width, height = clamp_size(event.width, event.height, limit)
        self.context.surface.set_pixel_size(width, height)
        self._handled += 1
        _LOG.debug(
            "viewport_resized observed=(%s,%s) applied=(%d,%d) limit=%d",
            event.width,
            event.height,
            width,
            height,
            limit,
        )
        self.render(self.context)
        return width, height


__all__ = ["ViewportReactor", "clamp_dimension", "clamp_size"]
