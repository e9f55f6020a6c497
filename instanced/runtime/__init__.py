"""Runtime bootstrap, configuration, logging and device lifecycle."""

from instanced.runtime.config import RenderConfig, ShapeKind, load_render_config
from instanced.runtime.device import DeviceLifecycle, DeviceState
from instanced.runtime.errors import (
    EnvironmentUnsupportedError,
    InstanceCountError,
    InstancedError,
    MeshParameterError,
    StaticBufferRewriteError,
)

__all__ = [
    "DeviceLifecycle",
    "DeviceState",
    "EnvironmentUnsupportedError",
    "InstanceCountError",
    "InstancedError",
    "MeshParameterError",
    "RenderConfig",
    "ShapeKind",
    "StaticBufferRewriteError",
    "load_render_config",
]
