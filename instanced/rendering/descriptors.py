"""Typed descriptor structs translated into wgpu descriptor mappings.

Every recognized field is declared here; nothing reaches the device as an
ad-hoc dict built at the call site.
"""

from __future__ import annotations

from dataclasses import dataclass

# WebGPU flag values, used when the wgpu module does not expose the enum.
_BUFFER_USAGE_FALLBACK: dict[str, int] = {
    "MAP_READ": 0x0001,
    "MAP_WRITE": 0x0002,
    "COPY_SRC": 0x0004,
    "COPY_DST": 0x0008,
    "INDEX": 0x0010,
    "VERTEX": 0x0020,
    "UNIFORM": 0x0040,
    "STORAGE": 0x0080,
}
_SHADER_STAGE_FALLBACK: dict[str, int] = {
    "VERTEX": 0x1,
    "FRAGMENT": 0x2,
    "COMPUTE": 0x4,
}


def resolve_flags(wgpu_mod: object | None, enum_name: str, names: tuple[str, ...]) -> int:
    """OR together named flags from ``wgpu.<enum_name>``."""
    fallback = _BUFFER_USAGE_FALLBACK if enum_name == "BufferUsage" else _SHADER_STAGE_FALLBACK
    enum = getattr(wgpu_mod, enum_name, None) if wgpu_mod is not None else None
    value = 0
    for name in names:
        key = name.upper()
        if key not in fallback:
            raise ValueError(f"unknown {enum_name} flag: {name!r}")
        value |= int(getattr(enum, key, fallback[key]))
    return value


@dataclass(frozen=True, slots=True)
class BufferSpec:
    """GPU buffer: debug label, byte size and usage flags."""

    label: str
    size: int
    usage: tuple[str, ...] = ("STORAGE", "COPY_DST")

    def __post_init__(self) -> None:
        if int(self.size) < 0:
            raise ValueError(f"buffer size must be >= 0 (got {self.size})")

    def descriptor(self, wgpu_mod: object | None = None) -> dict[str, object]:
        return {
            "label": self.label,
            "size": int(self.size),
            "usage": resolve_flags(wgpu_mod, "BufferUsage", self.usage),
        }


@dataclass(frozen=True, slots=True)
class StorageBindingSpec:
    """One read-only storage buffer slot in bind group 0."""

    binding: int
    label: str
    visibility: tuple[str, ...] = ("VERTEX",)
    read_only: bool = True

    def layout_entry(self, wgpu_mod: object | None = None) -> dict[str, object]:
        return {
            "binding": int(self.binding),
            "visibility": resolve_flags(wgpu_mod, "ShaderStage", self.visibility),
            "buffer": {"type": "read-only-storage" if self.read_only else "storage"},
        }

    def bind_group_entry(self, buffer: object) -> dict[str, object]:
        return {"binding": int(self.binding), "resource": {"buffer": buffer}}


@dataclass(frozen=True, slots=True)
class ColorTargetSpec:
    format: str


@dataclass(frozen=True, slots=True)
class PipelineSpec:
    """Single vertex+fragment pipeline compiled from one shader module."""

    label: str
    vertex_entry: str = "vs"
    fragment_entry: str = "fs"
    topology: str = "triangle-list"
    front_face: str = "ccw"
    cull_mode: str = "none"

    def descriptor(
        self,
        *,
        module: object,
        layout: object,
        targets: tuple[ColorTargetSpec, ...],
    ) -> dict[str, object]:
        return {
            "label": self.label,
            "layout": layout,
            "vertex": {
                "module": module,
                "entry_point": self.vertex_entry,
                "buffers": [],
            },
            "fragment": {
                "module": module,
                "entry_point": self.fragment_entry,
                "targets": [{"format": target.format} for target in targets],
            },
            "primitive": {
                "topology": self.topology,
                "front_face": self.front_face,
                "cull_mode": self.cull_mode,
            },
        }


@dataclass(frozen=True, slots=True)
class ColorAttachmentSpec:
    """Clear-and-store color attachment; the view is bound per frame."""

    clear_value: tuple[float, float, float, float] = (0.3, 0.3, 0.3, 1.0)
    load_op: str = "clear"
    store_op: str = "store"

    def attachment(self, view: object) -> dict[str, object]:
        return {
            "view": view,
            "resolve_target": None,
            "clear_value": tuple(float(c) for c in self.clear_value),
            "load_op": self.load_op,
            "store_op": self.store_op,
        }


STATIC_BINDING = StorageBindingSpec(binding=0, label="static storage for objects")
DYNAMIC_BINDING = StorageBindingSpec(binding=1, label="changing storage for objects")
VERTEX_BINDING = StorageBindingSpec(binding=2, label="storage buffer vertices")


__all__ = [
    "BufferSpec",
    "ColorAttachmentSpec",
    "ColorTargetSpec",
    "DYNAMIC_BINDING",
    "PipelineSpec",
    "STATIC_BINDING",
    "StorageBindingSpec",
    "VERTEX_BINDING",
    "resolve_flags",
]
