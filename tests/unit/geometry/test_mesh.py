from __future__ import annotations

import math

import numpy as np
import pytest

from instanced.geometry.mesh import create_circle_vertices, mesh_bytes, triangle_vertices
from instanced.runtime.errors import MeshParameterError


@pytest.mark.parametrize("subdivisions", [1, 2, 3, 7, 24, 100])
def test_circle_vertex_count_is_six_per_segment(subdivisions: int) -> None:
    mesh = create_circle_vertices(radius=1.0, inner_radius=0.4, num_subdivisions=subdivisions)

    assert mesh.num_vertices == subdivisions * 6
    assert mesh.vertices.shape == (subdivisions * 6, 2)
    assert mesh.vertices.dtype == np.float32
    assert mesh.vertices.size == subdivisions * 12


@pytest.mark.parametrize(
    ("radius", "inner_radius"),
    [(1.0, 0.0), (0.5, 0.25), (0.25, 0.75), (2.0, 2.0)],
)
def test_circle_vertices_are_finite_and_bounded(radius: float, inner_radius: float) -> None:
    mesh = create_circle_vertices(radius=radius, inner_radius=inner_radius, num_subdivisions=17)

    assert np.all(np.isfinite(mesh.vertices))
    distances = np.hypot(mesh.vertices[:, 0].astype(np.float64), mesh.vertices[:, 1].astype(np.float64))
    assert float(distances.max()) <= max(radius, inner_radius) + 1e-6


def test_default_parameters_build_unit_disk() -> None:
    mesh = create_circle_vertices()

    assert mesh.num_vertices == 24 * 6
    segments = mesh.vertices.reshape(24, 6, 2)
    assert np.all(segments[:, 2] == 0.0)
    assert np.all(segments[:, 3] == 0.0)
    assert np.all(segments[:, 5] == 0.0)


def test_zero_inner_radius_collapses_inner_vertices_to_origin() -> None:
    mesh = create_circle_vertices(radius=1.0, inner_radius=0.0, num_subdivisions=4)

    assert mesh.num_vertices == 24
    at_origin = np.all(mesh.vertices == 0.0, axis=1)
    segments = at_origin.reshape(4, 6)
    assert segments[:, 2].all()
    assert segments[:, 3].all()
    # inner2 of each segment is also the origin
    assert segments[:, 5].all()
    assert int(at_origin.sum()) == 12


def test_segment_triangles_follow_outer_outer_inner_order() -> None:
    mesh = create_circle_vertices(radius=1.0, inner_radius=0.5, num_subdivisions=4)
    first = mesh.vertices[:6].astype(np.float64)

    np.testing.assert_allclose(first[0], (1.0, 0.0), atol=1e-6)
    np.testing.assert_allclose(first[1], (0.0, 1.0), atol=1e-6)
    np.testing.assert_allclose(first[2], (0.5, 0.0), atol=1e-6)
    np.testing.assert_allclose(first[3], first[2])
    np.testing.assert_allclose(first[4], first[1])
    np.testing.assert_allclose(first[5], (0.0, 0.5), atol=1e-6)


def test_winding_is_consistent_across_segments() -> None:
    mesh = create_circle_vertices(radius=1.0, inner_radius=0.5, num_subdivisions=12)
    triangles = mesh.vertices.astype(np.float64).reshape(-1, 3, 2)
    a, b, c = triangles[:, 0], triangles[:, 1], triangles[:, 2]
    cross = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])

    assert np.all(cross > 0.0)


def test_partial_arc_spans_requested_angles() -> None:
    mesh = create_circle_vertices(
        radius=1.0,
        inner_radius=0.5,
        num_subdivisions=2,
        start_angle=0.0,
        end_angle=math.pi / 2,
    )
    angles = np.arctan2(mesh.vertices[:, 1], mesh.vertices[:, 0])

    assert float(angles.min()) >= -1e-6
    assert float(angles.max()) <= math.pi / 2 + 1e-6


def test_generation_is_deterministic() -> None:
    first = create_circle_vertices(radius=0.7, inner_radius=0.1, num_subdivisions=9)
    second = create_circle_vertices(radius=0.7, inner_radius=0.1, num_subdivisions=9)

    assert mesh_bytes(first) == mesh_bytes(second)


def test_scenario_annulus_has_no_vertex_at_origin() -> None:
    mesh = create_circle_vertices(radius=0.5, inner_radius=0.25, num_subdivisions=24)

    assert mesh.num_vertices == 144
    assert not np.any(np.all(mesh.vertices == 0.0, axis=1))


def test_scenario_filled_disk_has_eight_origin_vertices() -> None:
    mesh = create_circle_vertices(radius=1.0, inner_radius=0.0, num_subdivisions=4)
    origin = np.all(mesh.vertices == 0.0, axis=1)

    assert mesh.num_vertices == 24
    assert int(origin.reshape(4, 6)[:, 2:4].sum()) == 8


def test_degenerate_subdivision_counts_are_allowed() -> None:
    assert create_circle_vertices(num_subdivisions=1).num_vertices == 6
    assert create_circle_vertices(num_subdivisions=2).num_vertices == 12


@pytest.mark.parametrize(
    "kwargs",
    [
        {"num_subdivisions": 0},
        {"num_subdivisions": -3},
        {"radius": -1.0},
        {"inner_radius": -0.1},
        {"end_angle": math.inf},
    ],
)
def test_invalid_parameters_raise(kwargs: dict[str, float]) -> None:
    with pytest.raises(MeshParameterError):
        create_circle_vertices(**kwargs)


def test_triangle_vertices_and_byte_packing() -> None:
    mesh = triangle_vertices()

    assert mesh.num_vertices == 3
    assert mesh.vertices.tolist() == [[0.0, 0.5], [-0.5, -0.5], [0.5, -0.5]]
    packed = mesh_bytes(mesh)
    assert len(packed) == 3 * 2 * 4
    assert np.frombuffer(packed, dtype="<f4").tolist() == [0.0, 0.5, -0.5, -0.5, 0.5, -0.5]
