"""Packed per-instance record layout shared by CPU writers and WGSL structs."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from instanced.runtime.errors import InstanceCountError

FLOAT32_SIZE = 4
ALIGNMENT = 16

COLOR_SIZE = 4 * FLOAT32_SIZE
OFFSET_SIZE = 2 * FLOAT32_SIZE
SCALE_SIZE = 2 * FLOAT32_SIZE

# byte offsets inside one record
COLOR_OFFSET = 0
OFFSET_OFFSET = COLOR_OFFSET + COLOR_SIZE
SCALE_OFFSET = 0


def round_up(value: int, alignment: int = ALIGNMENT) -> int:
    """Round ``value`` up to the next multiple of ``alignment``."""
    if alignment <= 0:
        raise ValueError(f"alignment must be positive (got {alignment})")
    return ((int(value) + alignment - 1) // alignment) * alignment


STATIC_STRIDE = round_up(COLOR_SIZE + OFFSET_SIZE)
STATIC_PADDING = STATIC_STRIDE - (COLOR_SIZE + OFFSET_SIZE)
DYNAMIC_STRIDE = SCALE_SIZE

STATIC_RECORD_DTYPE = np.dtype(
    {
        "names": ["color", "offset"],
        "formats": [("<f4", (4,)), ("<f4", (2,))],
        "offsets": [COLOR_OFFSET, OFFSET_OFFSET],
        "itemsize": STATIC_STRIDE,
    }
)
DYNAMIC_RECORD_DTYPE = np.dtype(
    {
        "names": ["scale"],
        "formats": [("<f4", (2,))],
        "offsets": [SCALE_OFFSET],
        "itemsize": DYNAMIC_STRIDE,
    }
)

STATIC_STRUCT_WGSL = """
struct StaticInstance {
    color: vec4f,
    offset: vec2f,
};
"""

DYNAMIC_STRUCT_WGSL = """
struct DynamicInstance {
    scale: vec2f,
};
"""


@dataclass(frozen=True, slots=True)
class InstanceLayout:
    """Buffer sizing for ``count`` instances."""

    count: int

    def __post_init__(self) -> None:
        if int(self.count) < 0:
            raise InstanceCountError(f"instance count must be >= 0 (got {self.count})")

    @property
    def static_stride(self) -> int:
        return STATIC_STRIDE

    @property
    def dynamic_stride(self) -> int:
        return DYNAMIC_STRIDE

    @property
    def static_buffer_size(self) -> int:
        return STATIC_STRIDE * int(self.count)

    @property
    def dynamic_buffer_size(self) -> int:
        return DYNAMIC_STRIDE * int(self.count)


__all__ = [
    "ALIGNMENT",
    "COLOR_OFFSET",
    "DYNAMIC_RECORD_DTYPE",
    "DYNAMIC_STRIDE",
    "DYNAMIC_STRUCT_WGSL",
    "InstanceLayout",
    "OFFSET_OFFSET",
    "SCALE_OFFSET",
    "STATIC_RECORD_DTYPE",
    "STATIC_STRIDE",
    "STATIC_STRUCT_WGSL",
    "round_up",
]
