"""Per-instance attribute store and the CPU mirrors of both instance buffers."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from instanced.instances.layout import (
    DYNAMIC_RECORD_DTYPE,
    STATIC_RECORD_DTYPE,
    InstanceLayout,
)
from instanced.instances.sampling import rand
from instanced.runtime.config import InstanceRanges
from instanced.runtime.errors import InstanceCountError, StaticBufferRewriteError

_LOG = logging.getLogger("instanced.instances")


class QueueLike(Protocol):
    def write_buffer(self, buffer: object, buffer_offset: int, data: object) -> None: ...


@dataclass(frozen=True, slots=True)
class Instance:
    """Immutable attributes of one drawable object."""

    color: tuple[float, float, float, float]
    offset: tuple[float, float]
    base_scale: float

    def scale_for_aspect(self, aspect: float) -> tuple[float, float]:
        return (self.base_scale / aspect, self.base_scale)


@dataclass(slots=True)
class InstanceStore:
    """Owns the instance list plus the static and dynamic buffer contents."""

    instances: tuple[Instance, ...]
    layout: InstanceLayout = field(init=False)
    _static_records: np.ndarray = field(init=False, repr=False)
    _dynamic_records: np.ndarray = field(init=False, repr=False)
    _base_scales: np.ndarray = field(init=False, repr=False)
    _static_uploaded: bool = field(init=False, default=False)
    _last_aspect: float | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        count = len(self.instances)
        if count <= 0:
            raise InstanceCountError(f"instance store requires at least one instance (got {count})")
        self.layout = InstanceLayout(count)
        self._static_records = np.zeros(count, dtype=STATIC_RECORD_DTYPE)
        for index, instance in enumerate(self.instances):
            self._static_records["color"][index] = instance.color
            self._static_records["offset"][index] = instance.offset
        self._dynamic_records = np.zeros(count, dtype=DYNAMIC_RECORD_DTYPE)
        self._base_scales = np.array(
            [instance.base_scale for instance in self.instances], dtype=np.float64
        )

    @classmethod
    def create(
        cls,
        count: int,
        *,
        ranges: InstanceRanges | None = None,
        rng: random.Random | None = None,
    ) -> "InstanceStore":
        """Create ``count`` instances with randomized color, offset and base scale."""
        if int(count) <= 0:
            raise InstanceCountError(f"instance count must be > 0 (got {count})")
        bounds = ranges or InstanceRanges()
        instances: list[Instance] = []
        for _ in range(int(count)):
            color = (
                rand(*bounds.color, rng=rng),
                rand(*bounds.color, rng=rng),
                rand(*bounds.color, rng=rng),
                float(bounds.alpha),
            )
            offset = (rand(*bounds.offset, rng=rng), rand(*bounds.offset, rng=rng))
            instances.append(
                Instance(color=color, offset=offset, base_scale=rand(*bounds.scale, rng=rng))
            )
        return cls(instances=tuple(instances))

    @property
    def count(self) -> int:
        return len(self.instances)

    @property
    def static_uploaded(self) -> bool:
        return self._static_uploaded

    @property
    def last_aspect(self) -> float | None:
        return self._last_aspect

    def static_bytes(self) -> bytes:
        """Packed ``{color, offset, pad}`` records, ``layout.static_buffer_size`` bytes."""
        return self._static_records.tobytes()

    def dynamic_bytes(self) -> bytes:
        """Packed ``{scale}`` records from the most recent recompute."""
        return self._dynamic_records.tobytes()

    def compute_dynamic(self, aspect: float) -> bytes:
        """Recompute every instance scale as ``(base / aspect, base)``."""
        if not math.isfinite(aspect) or aspect <= 0.0:
            raise ValueError(f"aspect ratio must be positive and finite (got {aspect})")
        scales = self._dynamic_records["scale"]
        scales[:, 0] = self._base_scales / float(aspect)
        scales[:, 1] = self._base_scales
        self._last_aspect = float(aspect)
        return self._dynamic_records.tobytes()

    def upload_static(self, queue: QueueLike, buffer: object) -> None:
        """Write the static buffer; allowed exactly once per store."""
        if self._static_uploaded:
            raise StaticBufferRewriteError("static instance buffer is write-once")
        queue.write_buffer(buffer, 0, self.static_bytes())
        self._static_uploaded = True
        _LOG.debug(
            "static_instances_uploaded count=%d bytes=%d",
            self.count,
            self.layout.static_buffer_size,
        )

    def upload_dynamic(self, queue: QueueLike, buffer: object, aspect: float) -> None:
        """Recompute and overwrite the whole dynamic buffer."""
        queue.write_buffer(buffer, 0, self.compute_dynamic(aspect))


__all__ = ["Instance", "InstanceStore", "QueueLike"]
