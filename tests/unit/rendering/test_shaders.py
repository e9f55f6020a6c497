from __future__ import annotations

from instanced.rendering.shaders import circle_shader, shader_for, triangle_shader
from instanced.runtime.config import ShapeKind


def test_triangle_shader_embeds_positions_and_skips_vertex_storage() -> None:
    code = triangle_shader()

    assert "@binding(0) var<storage, read> staticInstances" in code
    assert "@binding(1) var<storage, read> dynamicInstances" in code
    assert "@binding(2)" not in code
    assert "vec2f(0.000000, 0.500000)" in code
    assert "vec2f(-0.500000, -0.500000)" in code


def test_circle_shader_reads_mesh_from_binding_two() -> None:
    code = circle_shader()

    assert "@group(0) @binding(2) var<storage, read> meshVertices: array<Vertex>;" in code
    assert "meshVertices[vertexIndex].position * dynamicInstance.scale" in code


def test_struct_fields_follow_record_layout() -> None:
    code = circle_shader()

    assert code.index("color: vec4f") < code.index("offset: vec2f")
    assert "scale: vec2f" in code


def test_shader_for_selects_by_shape() -> None:
    assert shader_for(ShapeKind.TRIANGLE) == triangle_shader()
    assert shader_for(ShapeKind.CIRCLE) == circle_shader()
