"""GPU adapter/device acquisition and the device-loss state machine."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from instanced.runtime.errors import EnvironmentUnsupportedError

_LOG = logging.getLogger("instanced.runtime.device")

INTENTIONAL_LOSS_REASON = "destroyed"


def load_wgpu() -> object:
    """Import wgpu, reporting absence as an unsupported environment."""
    try:
        import wgpu
    except ImportError as exc:
        raise EnvironmentUnsupportedError(
            "this environment does not support WebGPU (wgpu unavailable)",
            details={
                "exception_type": exc.__class__.__name__,
                "exception_message": str(exc),
            },
        ) from exc
    return wgpu


def request_adapter(wgpu_mod: object, backends: tuple[str, ...]) -> tuple[object, str]:
    """Request a high-performance adapter, trying ``backends`` in order."""
    gpu = getattr(wgpu_mod, "gpu", None)
    if gpu is None:
        raise EnvironmentUnsupportedError(
            "this environment does not support WebGPU",
            details={"selected_backend": "unknown"},
        )
    request = getattr(gpu, "request_adapter_sync", None)
    if not callable(request):
        request = getattr(gpu, "request_adapter", None)
    if not callable(request):
        raise EnvironmentUnsupportedError(
            "wgpu adapter request API unavailable",
            details={"selected_backend": "unknown"},
        )
    adapter = None
    selected_backend = "unknown"
    for backend_name in backends:
        selected_backend = str(backend_name)
        try:
            adapter = request(power_preference="high-performance", backend=backend_name)
        except TypeError:
            adapter = request(power_preference="high-performance")
        if adapter is not None:
            break
    if adapter is None and not backends:
        adapter = request(power_preference="high-performance")
    if adapter is None:
        raise EnvironmentUnsupportedError(
            "this environment supports WebGPU but no adapter is available",
            details={
                "selected_backend": selected_backend,
                "attempted_backends": tuple(backends),
            },
        )
    return adapter, selected_backend


def request_device(adapter: object) -> object:
    request = getattr(adapter, "request_device_sync", None)
    if not callable(request):
        request = getattr(adapter, "request_device", None)
    if not callable(request):
        raise EnvironmentUnsupportedError("wgpu device request API unavailable")
    device = request(label="instanced.device")
    if device is None:
        raise EnvironmentUnsupportedError("failed to create GPU device")
    return device


def adapter_summary(adapter: object) -> dict[str, object]:
    info = getattr(adapter, "info", None)
    if isinstance(info, dict):
        return {str(key): value for key, value in info.items()}
    return {}


class DeviceState(str, Enum):
    ACTIVE = "active"
    LOST_INTENTIONAL = "lost_intentional"
    LOST_UNINTENTIONAL = "lost_unintentional"


@dataclass(slots=True)
class DeviceLifecycle:
    """Tracks one device from creation to loss.

    ``ACTIVE`` moves to ``LOST_INTENTIONAL`` (terminal) when the loss reason is
    ``"destroyed"``, or to ``LOST_UNINTENTIONAL`` otherwise, which calls
    ``on_unintentional_loss`` once to re-bootstrap. Later notifications are ignored.
    """

    device: object
    on_unintentional_loss: Callable[[], None]
    state: DeviceState = field(init=False, default=DeviceState.ACTIVE)
    loss_message: str = field(init=False, default="")

    def watch(self) -> bool:
        """Subscribe to the device loss promise when the backend exposes one."""
        promise = device_lost_promise(self.device)
        if promise is None:
            _LOG.warning("device_lost_promise_unavailable device=%s", type(self.device).__name__)
            return False
        promise.then(self.notify_lost)
        return True

    def notify_lost(self, info: object) -> DeviceState:
        if self.state is not DeviceState.ACTIVE:
            return self.state
        reason = _loss_field(info, "reason")
        self.loss_message = _loss_field(info, "message")
        if reason == INTENTIONAL_LOSS_REASON:
            self.state = DeviceState.LOST_INTENTIONAL
            _LOG.info("device_lost intentional message=%s", self.loss_message)
            return self.state
        self.state = DeviceState.LOST_UNINTENTIONAL
        _LOG.error("device_lost reason=%s message=%s; restarting", reason, self.loss_message)
        self.on_unintentional_loss()
        return self.state

    def destroy(self) -> None:
        """Intentional teardown; no restart follows."""
        if self.state is DeviceState.ACTIVE:
            self.state = DeviceState.LOST_INTENTIONAL
            _LOG.info("device_destroyed")
        destroy = getattr(self.device, "destroy", None)
        if callable(destroy):
            destroy()


def device_lost_promise(device: object) -> object | None:
    """Return the promise resolved when ``device`` is lost, or None.

    wgpu-py exposes it as ``lost_async`` (property or method) or through
    ``_get_lost_async()``; older bindings used ``lost``.
    """
    for name in ("lost_async", "_get_lost_async", "lost"):
        candidate = getattr(device, name, None)
        if candidate is None:
            continue
        if not callable(getattr(candidate, "then", None)) and callable(candidate):
            candidate = candidate()
        if callable(getattr(candidate, "then", None)):
            return candidate
    return None


def _loss_field(info: object, key: str) -> str:
    if isinstance(info, dict):
        value = info.get(key, "")
    else:
        value = getattr(info, key, "")
    # wgpu may report the reason as an enum member
    value = getattr(value, "value", value)
    return "" if value is None else str(value)


__all__ = [
    "DeviceLifecycle",
    "DeviceState",
    "INTENTIONAL_LOSS_REASON",
    "adapter_summary",
    "device_lost_promise",
    "load_wgpu",
    "request_adapter",
    "request_device",
]
