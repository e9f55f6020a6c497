"""Renderer configuration sourced from environment."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field, replace
from enum import Enum

DEFAULT_INSTANCE_COUNT = 100
DEFAULT_BACKENDS: tuple[str, ...] = ("vulkan", "metal", "dx12")
DEFAULT_CLEAR_COLOR: tuple[float, float, float, float] = (0.3, 0.3, 0.3, 1.0)


class ShapeKind(str, Enum):
    """Mesh drawn for every instance."""

    TRIANGLE = "triangle"
    CIRCLE = "circle"


@dataclass(frozen=True, slots=True)
class CircleParams:
    """Annulus mesh parameters."""

    radius: float = 0.5
    inner_radius: float = 0.25
    num_subdivisions: int = 24
    start_angle: float = 0.0
    end_angle: float = math.tau


@dataclass(frozen=True, slots=True)
class InstanceRanges:
    """Half-open ranges for randomized instance attributes."""

    color: tuple[float, float] = (0.0, 1.0)
    offset: tuple[float, float] = (-0.9, 0.9)
    scale: tuple[float, float] = (0.2, 0.5)
    alpha: float = 1.0


@dataclass(frozen=True, slots=True)
class WindowConfig:
    width: int = 640
    height: int = 480
    title: str = "Instanced Shapes"


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable renderer configuration."""

    instance_count: int = DEFAULT_INSTANCE_COUNT
    shape: ShapeKind = ShapeKind.CIRCLE
    circle: CircleParams = field(default_factory=CircleParams)
    ranges: InstanceRanges = field(default_factory=InstanceRanges)
    clear_color: tuple[float, float, float, float] = DEFAULT_CLEAR_COLOR
    seed: int | None = None
    wgpu_backends: tuple[str, ...] = DEFAULT_BACKENDS
    window: WindowConfig = field(default_factory=WindowConfig)

    def with_overrides(
        self,
        *,
        instance_count: int | None = None,
        shape: ShapeKind | None = None,
        seed: int | None = None,
    ) -> "RenderConfig":
        """Return a copy with CLI-level overrides applied."""
        updated = self
        if instance_count is not None:
            updated = replace(updated, instance_count=int(instance_count))
        if shape is not None:
            updated = replace(updated, shape=shape)
        if seed is not None:
            updated = replace(updated, seed=int(seed))
        return updated


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int, *, minimum: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        value = default
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = default
    if minimum is not None:
        value = max(minimum, value)
    return value


def _float(name: str, default: float, *, minimum: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
        if not math.isfinite(value):
            value = float(default)
    if minimum is not None:
        value = max(float(minimum), value)
    return value


def _csv(name: str) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return ()
    values = [part.strip().lower() for part in raw.split(",")]
    return tuple(value for value in values if value)


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def parse_shape(raw: str | None, default: ShapeKind = ShapeKind.CIRCLE) -> ShapeKind:
    """Parse a shape name, falling back to ``default`` for unknown values."""
    if raw is None:
        return default
    value = raw.strip().lower()
    for kind in ShapeKind:
        if kind.value == value:
            return kind
    return default


def parse_color(raw: str | None, default: tuple[float, float, float, float]) -> tuple[float, float, float, float]:
    """Parse ``r,g,b[,a]`` floats; malformed input returns ``default``."""
    if raw is None:
        return default
    parts = [part.strip() for part in raw.split(",") if part.strip()]
    if len(parts) not in {3, 4}:
        return default
    try:
        values = [float(part) for part in parts]
    except ValueError:
        return default
    if len(values) == 3:
        values.append(1.0)
    if not all(math.isfinite(value) for value in values):
        return default
    return (values[0], values[1], values[2], values[3])


def parse_window_size(raw: str | None, default: tuple[int, int]) -> tuple[int, int]:
    """Parse ``WIDTHxHEIGHT`` (``x``, ``,`` or ``:`` separated)."""
    if raw is None:
        return default
    normalized = raw.strip().lower().replace(" ", "")
    for sep in ("x", ",", ":"):
        if sep in normalized:
            left, right = normalized.split(sep, 1)
            try:
                return max(1, int(left)), max(1, int(right))
            except ValueError:
                return default
    return default


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with package-prefixed override."""
    value = os.getenv("INSTANCED_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def resolve_log_format() -> str:
    value = os.getenv("INSTANCED_LOG_FORMAT", "text").strip().lower()
    return value if value in {"text", "json"} else "text"


def resolve_log_file() -> str | None:
    value = os.getenv("INSTANCED_LOG_FILE", "").strip()
    return value or None


def resolve_wgpu_backends() -> tuple[str, ...]:
    return _csv("INSTANCED_WGPU_BACKENDS") or DEFAULT_BACKENDS


def load_render_config() -> RenderConfig:
    """Load immutable renderer configuration from env vars."""
    defaults = CircleParams()
    window_defaults = WindowConfig()
    width, height = parse_window_size(
        os.getenv("INSTANCED_WINDOW_SIZE"),
        (window_defaults.width, window_defaults.height),
    )
    return RenderConfig(
        instance_count=_int("INSTANCED_COUNT", DEFAULT_INSTANCE_COUNT, minimum=1),
        shape=parse_shape(os.getenv("INSTANCED_SHAPE")),
        circle=CircleParams(
            radius=_float("INSTANCED_CIRCLE_RADIUS", defaults.radius, minimum=0.0),
            inner_radius=_float("INSTANCED_CIRCLE_INNER_RADIUS", defaults.inner_radius, minimum=0.0),
            num_subdivisions=_int(
                "INSTANCED_CIRCLE_SUBDIVISIONS", defaults.num_subdivisions, minimum=1
            ),
        ),
        clear_color=parse_color(os.getenv("INSTANCED_CLEAR_COLOR"), DEFAULT_CLEAR_COLOR),
        seed=_optional_int("INSTANCED_SEED"),
        wgpu_backends=resolve_wgpu_backends(),
        window=WindowConfig(width=width, height=height, title=window_defaults.title),
    )


def trace_frames_enabled() -> bool:
    """Whether every submitted frame is logged at INFO instead of DEBUG."""
    return _flag("INSTANCED_TRACE_FRAMES", False)


__all__ = [
    "CircleParams",
    "InstanceRanges",
    "RenderConfig",
    "ShapeKind",
    "WindowConfig",
    "load_render_config",
    "parse_color",
    "parse_shape",
    "parse_window_size",
    "resolve_log_file",
    "resolve_log_format",
    "resolve_log_level_name",
    "resolve_wgpu_backends",
    "trace_frames_enabled",
]
