"""Caller-owned render state passed into the frame renderer and resize handler."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from instanced.api.window import PresentationSurface
from instanced.instances.store import InstanceStore
from instanced.rendering.descriptors import ColorAttachmentSpec
from instanced.runtime.config import ShapeKind

# WebGPU default for maxTextureDimension2D
DEFAULT_MAX_TEXTURE_DIMENSION_2D = 8192

_MAX_TEXTURE_DIMENSION_KEYS: tuple[str, ...] = (
    "max-texture-dimension-2d",
    "max_texture_dimension_2d",
    "maxTextureDimension2D",
)


@dataclass(slots=True)
class RenderContext:
    """Everything one surface needs to render; no module-level globals."""

    device: object
    queue: object
    surface: PresentationSurface
    shape: ShapeKind
    store: InstanceStore
    pipeline: object
    bind_group: object
    static_buffer: object
    dynamic_buffer: object
    vertex_buffer: object | None
    vertex_count: int
    color_attachment: ColorAttachmentSpec = field(default_factory=ColorAttachmentSpec)
    max_texture_dimension_2d: int = DEFAULT_MAX_TEXTURE_DIMENSION_2D
    frame_index: int = field(init=False, default=0)
    frame_in_flight: bool = field(init=False, default=False)

    @property
    def instance_count(self) -> int:
        return self.store.count

    def aspect_ratio(self) -> float:
        width, height = self.surface.pixel_size()
        return float(max(1, int(width))) / float(max(1, int(height)))


def resolve_max_texture_dimension_2d(device: object) -> int:
    """Read ``maxTextureDimension2D`` from ``device.limits`` across wgpu key spellings."""
    limits = getattr(device, "limits", None)
    if isinstance(limits, Mapping):
        for key in _MAX_TEXTURE_DIMENSION_KEYS:
            value = limits.get(key)
            if isinstance(value, int) and value > 0:
                return value
    else:
        for key in _MAX_TEXTURE_DIMENSION_KEYS:
            value = getattr(limits, key.replace("-", "_"), None)
            if isinstance(value, int) and value > 0:
                return value
    return DEFAULT_MAX_TEXTURE_DIMENSION_2D


__all__ = ["DEFAULT_MAX_TEXTURE_DIMENSION_2D", "RenderContext", "resolve_max_texture_dimension_2d"]
