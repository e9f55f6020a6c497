"""One-time setup: mesh, buffers, initial static upload, pipeline and bind group."""

from __future__ import annotations

import logging
import random

from instanced.api.window import PresentationSurface
from instanced.geometry.mesh import MeshData, create_circle_vertices, mesh_bytes, triangle_vertices
from instanced.instances.sampling import make_rng
from instanced.instances.store import InstanceStore
from instanced.rendering.context import RenderContext, resolve_max_texture_dimension_2d
from instanced.rendering.descriptors import (
    DYNAMIC_BINDING,
    STATIC_BINDING,
    VERTEX_BINDING,
    BufferSpec,
    ColorAttachmentSpec,
    ColorTargetSpec,
    PipelineSpec,
    StorageBindingSpec,
)
from instanced.rendering.shaders import shader_for
from instanced.runtime.config import RenderConfig, ShapeKind

_LOG = logging.getLogger("instanced.rendering")

PIPELINE = PipelineSpec(label="instanced shapes pipeline")


def build_mesh(config: RenderConfig) -> MeshData:
    """Mesh for the configured shape."""
    if config.shape is ShapeKind.TRIANGLE:
        return triangle_vertices()
    circle = config.circle
    return create_circle_vertices(
        radius=circle.radius,
        inner_radius=circle.inner_radius,
        num_subdivisions=circle.num_subdivisions,
        start_angle=circle.start_angle,
        end_angle=circle.end_angle,
    )


def storage_bindings(shape: ShapeKind) -> tuple[StorageBindingSpec, ...]:
    """Bind group 0 slots; the triangle variant has no vertex storage."""
    if shape is ShapeKind.TRIANGLE:
        return (STATIC_BINDING, DYNAMIC_BINDING)
    return (STATIC_BINDING, DYNAMIC_BINDING, VERTEX_BINDING)


def build_render_context(
    device: object,
    surface: PresentationSurface,
    config: RenderConfig,
    *,
    wgpu_mod: object | None = None,
    rng: random.Random | None = None,
) -> RenderContext:
    """Create every GPU object the frame renderer needs and upload write-once data."""
    queue = getattr(device, "queue", None)
    if queue is None:
        raise RuntimeError("wgpu device queue unavailable")
    shape = config.shape
    mesh = build_mesh(config)
    store = InstanceStore.create(
        config.instance_count,
        ranges=config.ranges,
        rng=rng if rng is not None else make_rng(config.seed),
    )
    layout = store.layout

    static_buffer = device.create_buffer(
        **BufferSpec(label=STATIC_BINDING.label, size=layout.static_buffer_size).descriptor(wgpu_mod)
    )
    dynamic_buffer = device.create_buffer(
        **BufferSpec(label=DYNAMIC_BINDING.label, size=layout.dynamic_buffer_size).descriptor(wgpu_mod)
    )
    store.upload_static(queue, static_buffer)

    vertex_buffer: object | None = None
    buffers: dict[int, object] = {
        STATIC_BINDING.binding: static_buffer,
        DYNAMIC_BINDING.binding: dynamic_buffer,
    }
    if shape is ShapeKind.CIRCLE:
        vertex_buffer = device.create_buffer(
            **BufferSpec(label=VERTEX_BINDING.label, size=mesh.byte_size).descriptor(wgpu_mod)
        )
        queue.write_buffer(vertex_buffer, 0, mesh_bytes(mesh))
        buffers[VERTEX_BINDING.binding] = vertex_buffer

    bindings = storage_bindings(shape)
    module = device.create_shader_module(label=f"{shape.value} instancing shaders", code=shader_for(shape))
    bind_group_layout = device.create_bind_group_layout(
        label="instance storage layout",
        entries=[binding.layout_entry(wgpu_mod) for binding in bindings],
    )
    pipeline_layout = device.create_pipeline_layout(
        label="instance pipeline layout",
        bind_group_layouts=[bind_group_layout],
    )
    pipeline = device.create_render_pipeline(
        **PIPELINE.descriptor(
            module=module,
            layout=pipeline_layout,
            targets=(ColorTargetSpec(format=surface.format),),
        )
    )
    bind_group = device.create_bind_group(
        label="bind group for objects",
        layout=bind_group_layout,
        entries=[binding.bind_group_entry(buffers[binding.binding]) for binding in bindings],
    )
    context = RenderContext(
        device=device,
        queue=queue,
        surface=surface,
        shape=shape,
        store=store,
        pipeline=pipeline,
        bind_group=bind_group,
        static_buffer=static_buffer,
        dynamic_buffer=dynamic_buffer,
        vertex_buffer=vertex_buffer,
        vertex_count=mesh.num_vertices,
        color_attachment=ColorAttachmentSpec(clear_value=config.clear_color),
        max_texture_dimension_2d=resolve_max_texture_dimension_2d(device),
    )
    _LOG.info(
        "render_context_ready shape=%s instances=%d vertices=%d static_bytes=%d dynamic_bytes=%d format=%s",
        shape.value,
        store.count,
        mesh.num_vertices,
        layout.static_buffer_size,
        layout.dynamic_buffer_size,
        surface.format,
    )
    return context


__all__ = ["PIPELINE", "build_mesh", "build_render_context", "storage_bindings"]
