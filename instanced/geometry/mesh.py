"""Procedural 2D mesh builders shared by every instance."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from instanced.runtime.errors import MeshParameterError

VERTICES_PER_SEGMENT = 6
FLOATS_PER_VERTEX = 2


@dataclass(frozen=True, slots=True)
class MeshData:
    """Flat list of 2D positions, one row per vertex."""

    vertices: np.ndarray
    num_vertices: int

    @property
    def byte_size(self) -> int:
        return int(self.vertices.nbytes)


def create_circle_vertices(
    *,
    radius: float = 1.0,
    inner_radius: float = 0.0,
    num_subdivisions: int = 24,
    start_angle: float = 0.0,
    end_angle: float = math.tau,
) -> MeshData:
    """Build an annulus (or a filled disk when ``inner_radius`` is 0) as a triangle list.

    Each of the ``num_subdivisions`` angular steps emits two triangles:
    (outer1, outer2, inner1) and (inner1, outer2, inner2).
    """
    if int(num_subdivisions) < 1:
        raise MeshParameterError(f"num_subdivisions must be >= 1 (got {num_subdivisions})")
    if radius < 0.0 or inner_radius < 0.0:
        raise MeshParameterError(
            f"radii must be non-negative (radius={radius}, inner_radius={inner_radius})"
        )
    if not all(math.isfinite(v) for v in (radius, inner_radius, start_angle, end_angle)):
        raise MeshParameterError("mesh parameters must be finite")
    segments = int(num_subdivisions)
    steps = np.arange(segments, dtype=np.float64)
    span = float(end_angle) - float(start_angle)
    angle1 = float(start_angle) + steps * span / segments
    angle2 = float(start_angle) + (steps + 1.0) * span / segments

    c1, s1 = np.cos(angle1), np.sin(angle1)
    c2, s2 = np.cos(angle2), np.sin(angle2)
    outer1 = np.stack((c1 * radius, s1 * radius), axis=-1)
    outer2 = np.stack((c2 * radius, s2 * radius), axis=-1)
    inner1 = np.stack((c1 * inner_radius, s1 * inner_radius), axis=-1)
    inner2 = np.stack((c2 * inner_radius, s2 * inner_radius), axis=-1)

    # (segments, 6, 2): first triangle then second, in emission order
    quads = np.stack((outer1, outer2, inner1, inner1, outer2, inner2), axis=1)
    vertices = np.ascontiguousarray(quads.reshape(-1, FLOATS_PER_VERTEX), dtype=np.float32)
    return MeshData(vertices=vertices, num_vertices=segments * VERTICES_PER_SEGMENT)


def triangle_vertices() -> MeshData:
    """The fixed triangle: top center, bottom left, bottom right."""
    vertices = np.array(
        [
            (0.0, 0.5),
            (-0.5, -0.5),
            (0.5, -0.5),
        ],
        dtype=np.float32,
    )
    return MeshData(vertices=vertices, num_vertices=3)


def mesh_bytes(mesh: MeshData) -> bytes:
    """Pack positions as little-endian float32 pairs."""
    return np.ascontiguousarray(mesh.vertices, dtype="<f4").tobytes()


__all__ = [
    "FLOATS_PER_VERTEX",
    "MeshData",
    "VERTICES_PER_SEGMENT",
    "create_circle_vertices",
    "mesh_bytes",
    "triangle_vertices",
]
