from __future__ import annotations

from types import SimpleNamespace

import pytest

from instanced.rendering.descriptors import (
    DYNAMIC_BINDING,
    STATIC_BINDING,
    VERTEX_BINDING,
    BufferSpec,
    ColorAttachmentSpec,
    ColorTargetSpec,
    PipelineSpec,
    resolve_flags,
)


def test_resolve_flags_uses_webgpu_values_without_wgpu() -> None:
    assert resolve_flags(None, "BufferUsage", ("STORAGE", "COPY_DST")) == 0x80 | 0x08
    assert resolve_flags(None, "ShaderStage", ("VERTEX",)) == 0x1


def test_resolve_flags_prefers_module_enum_values() -> None:
    wgpu_mod = SimpleNamespace(BufferUsage=SimpleNamespace(STORAGE=0x100, COPY_DST=0x1))

    assert resolve_flags(wgpu_mod, "BufferUsage", ("storage", "copy_dst")) == 0x101


def test_resolve_flags_rejects_unknown_names() -> None:
    with pytest.raises(ValueError):
        resolve_flags(None, "BufferUsage", ("SPARKLE",))


def test_buffer_spec_descriptor() -> None:
    buffer = BufferSpec(label="static storage for objects", size=3200)

    assert buffer.descriptor() == {
        "label": "static storage for objects",
        "size": 3200,
        "usage": 0x88,
    }
    with pytest.raises(ValueError):
        BufferSpec(label="bad", size=-1)


def test_storage_bindings_are_read_only_vertex_visible() -> None:
    assert [STATIC_BINDING.binding, DYNAMIC_BINDING.binding, VERTEX_BINDING.binding] == [0, 1, 2]
    entry = VERTEX_BINDING.layout_entry()

    assert entry == {"binding": 2, "visibility": 0x1, "buffer": {"type": "read-only-storage"}}
    buffer = object()
    assert STATIC_BINDING.bind_group_entry(buffer) == {"binding": 0, "resource": {"buffer": buffer}}


def test_pipeline_descriptor_wires_single_module_to_both_stages() -> None:
    module = object()
    layout = object()
    descriptor = PipelineSpec(label="p").descriptor(
        module=module,
        layout=layout,
        targets=(ColorTargetSpec(format="bgra8unorm"),),
    )

    assert descriptor["layout"] is layout
    assert descriptor["vertex"] == {"module": module, "entry_point": "vs", "buffers": []}
    assert descriptor["fragment"] == {
        "module": module,
        "entry_point": "fs",
        "targets": [{"format": "bgra8unorm"}],
    }
    assert descriptor["primitive"]["topology"] == "triangle-list"


def test_color_attachment_clears_and_stores() -> None:
    view = object()
    attachment = ColorAttachmentSpec().attachment(view)

    assert attachment["view"] is view
    assert attachment["clear_value"] == (0.3, 0.3, 0.3, 1.0)
    assert attachment["load_op"] == "clear"
    assert attachment["store_op"] == "store"
