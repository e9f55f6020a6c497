"""WGSL programs for the instanced shape pipeline."""

from __future__ import annotations

from instanced.geometry.mesh import MeshData, triangle_vertices
from instanced.instances.layout import DYNAMIC_STRUCT_WGSL, STATIC_STRUCT_WGSL
from instanced.runtime.config import ShapeKind

_COMMON_WGSL = (
    STATIC_STRUCT_WGSL
    + DYNAMIC_STRUCT_WGSL
    + """
@group(0) @binding(0) var<storage, read> staticInstances: array<StaticInstance>;
@group(0) @binding(1) var<storage, read> dynamicInstances: array<DynamicInstance>;

struct VSOutput {
    @builtin(position) position: vec4f,
    @location(0) color: vec4f,
};

@fragment fn fs(vsOut: VSOutput) -> @location(0) vec4f {
    return vsOut.color;
}
"""
)


def _triangle_positions_wgsl(mesh: MeshData) -> str:
    rows = ",\n        ".join(f"vec2f({float(x):.6f}, {float(y):.6f})" for x, y in mesh.vertices)
    return f"array(\n        {rows}\n    )"


def triangle_shader() -> str:
    """Fixed triangle; positions are embedded, no vertex storage binding."""
    positions = _triangle_positions_wgsl(triangle_vertices())
    return (
        _COMMON_WGSL
        + f"""
@vertex fn vs(
    @builtin(vertex_index) vertexIndex: u32,
    @builtin(instance_index) instanceIndex: u32
) -> VSOutput {{
    var pos = {positions};
    let staticInstance = staticInstances[instanceIndex];
    let dynamicInstance = dynamicInstances[instanceIndex];

    var vsOut: VSOutput;
    vsOut.position = vec4f(
        pos[vertexIndex] * dynamicInstance.scale + staticInstance.offset, 0.0, 1.0);
    vsOut.color = staticInstance.color;
    return vsOut;
}}
"""
    )


def circle_shader() -> str:
    """Procedural mesh read from storage binding 2."""
    return (
        _COMMON_WGSL
        + """
struct Vertex {
    position: vec2f,
};

@group(0) @binding(2) var<storage, read> meshVertices: array<Vertex>;

@vertex fn vs(
    @builtin(vertex_index) vertexIndex: u32,
    @builtin(instance_index) instanceIndex: u32
) -> VSOutput {
    let staticInstance = staticInstances[instanceIndex];
    let dynamicInstance = dynamicInstances[instanceIndex];

    var vsOut: VSOutput;
    vsOut.position = vec4f(
        meshVertices[vertexIndex].position * dynamicInstance.scale + staticInstance.offset,
        0.0,
        1.0);
    vsOut.color = staticInstance.color;
    return vsOut;
}
"""
    )


def shader_for(shape: ShapeKind) -> str:
    if shape is ShapeKind.TRIANGLE:
        return triangle_shader()
    return circle_shader()


__all__ = ["circle_shader", "shader_for", "triangle_shader"]
