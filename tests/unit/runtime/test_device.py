from __future__ import annotations

from types import SimpleNamespace

import logging

import pytest

from instanced.runtime.device import (
    DeviceLifecycle,
    DeviceState,
    adapter_summary,
    device_lost_promise,
    request_adapter,
    request_device,
)
from instanced.runtime.errors import EnvironmentUnsupportedError
from tests.fakes import FakeAdapter, FakeDevice, FakeLostPromise, fake_wgpu


def test_request_adapter_uses_first_backend_that_answers() -> None:
    wgpu_mod = fake_wgpu()

    adapter, backend = request_adapter(wgpu_mod, ("vulkan", "metal"))

    assert adapter is wgpu_mod.gpu.adapter
    assert backend == "vulkan"
    assert wgpu_mod.gpu.requests == [{"power_preference": "high-performance", "backend": "vulkan"}]


def test_request_adapter_without_adapter_is_unsupported() -> None:
    wgpu_mod = fake_wgpu(no_adapter=True)

    with pytest.raises(EnvironmentUnsupportedError) as excinfo:
        request_adapter(wgpu_mod, ("vulkan", "dx12"))

    assert excinfo.value.details["attempted_backends"] == ("vulkan", "dx12")
    assert len(wgpu_mod.gpu.requests) == 2


def test_request_adapter_without_gpu_entry_point_is_unsupported() -> None:
    with pytest.raises(EnvironmentUnsupportedError):
        request_adapter(SimpleNamespace(), ("vulkan",))


def test_request_adapter_retries_without_backend_keyword() -> None:
    calls: list[dict[str, object]] = []

    def _request(**kwargs: object) -> object:
        calls.append(kwargs)
        if "backend" in kwargs:
            raise TypeError("unexpected keyword argument 'backend'")
        return "adapter"

    wgpu_mod = SimpleNamespace(gpu=SimpleNamespace(request_adapter_sync=_request))

    adapter, _ = request_adapter(wgpu_mod, ("metal",))

    assert adapter == "adapter"
    assert calls[-1] == {"power_preference": "high-performance"}


def test_request_device_and_summary() -> None:
    adapter = FakeAdapter()

    device = request_device(adapter)

    assert adapter.devices == [device]
    assert adapter_summary(adapter)["device"] == "fake"
    assert adapter_summary(SimpleNamespace()) == {}


def test_request_device_failure_is_unsupported() -> None:
    adapter = SimpleNamespace(request_device_sync=lambda **_: None)

    with pytest.raises(EnvironmentUnsupportedError):
        request_device(adapter)


def test_unintentional_loss_restarts_once() -> None:
    device = FakeDevice()
    restarts: list[int] = []
    lifecycle = DeviceLifecycle(device=device, on_unintentional_loss=lambda: restarts.append(1))

    assert lifecycle.watch() is True
    device.lost_promise.resolve("unknown", "driver reset")
    device.lost_promise.resolve("unknown", "again")

    assert lifecycle.state is DeviceState.LOST_UNINTENTIONAL
    assert lifecycle.loss_message == "driver reset"
    assert restarts == [1]


def test_destroyed_loss_is_terminal() -> None:
    device = FakeDevice()
    restarts: list[int] = []
    lifecycle = DeviceLifecycle(device=device, on_unintentional_loss=lambda: restarts.append(1))
    lifecycle.watch()

    device.lost_promise.resolve("destroyed")
    device.lost_promise.resolve("unknown")

    assert lifecycle.state is DeviceState.LOST_INTENTIONAL
    assert restarts == []


def test_loss_reason_accepts_mapping_and_enum_values() -> None:
    restarts: list[int] = []
    lifecycle = DeviceLifecycle(device=object(), on_unintentional_loss=lambda: restarts.append(1))

    reason = SimpleNamespace(value="destroyed")
    assert lifecycle.notify_lost({"reason": reason, "message": None}) is DeviceState.LOST_INTENTIONAL
    assert lifecycle.loss_message == ""
    assert restarts == []


def test_watch_without_loss_signal_warns(caplog) -> None:
    lifecycle = DeviceLifecycle(device=object(), on_unintentional_loss=lambda: None)

    with caplog.at_level(logging.WARNING, logger="instanced.runtime.device"):
        assert lifecycle.watch() is False

    assert lifecycle.state is DeviceState.ACTIVE
    assert [record.levelno for record in caplog.records] == [logging.WARNING]


def test_loss_promise_from_hidden_async_getter() -> None:
    device = FakeDevice()

    assert not hasattr(device, "lost")
    assert device_lost_promise(device) is device.lost_promise


def test_loss_promise_prefers_lost_async_attribute() -> None:
    promise = FakeLostPromise()
    device = SimpleNamespace(lost_async=promise, _get_lost_async=lambda: FakeLostPromise())

    assert device_lost_promise(device) is promise


def test_loss_promise_from_lost_async_method_and_legacy_attribute() -> None:
    promise = FakeLostPromise()

    assert device_lost_promise(SimpleNamespace(lost_async=lambda: promise)) is promise
    assert device_lost_promise(SimpleNamespace(lost=promise)) is promise
    assert device_lost_promise(SimpleNamespace(lost=None, lost_async=None)) is None


def test_watch_restarts_through_lost_async_method() -> None:
    promise = FakeLostPromise()
    restarts: list[int] = []
    lifecycle = DeviceLifecycle(
        device=SimpleNamespace(lost_async=lambda: promise),
        on_unintentional_loss=lambda: restarts.append(1),
    )

    assert lifecycle.watch() is True
    promise.resolve("unknown", "device removed")

    assert restarts == [1]
    assert lifecycle.state is DeviceState.LOST_UNINTENTIONAL


def test_destroy_marks_intentional_and_destroys_device() -> None:
    device = FakeDevice()
    lifecycle = DeviceLifecycle(device=device, on_unintentional_loss=lambda: None)

    lifecycle.destroy()

    assert lifecycle.state is DeviceState.LOST_INTENTIONAL
    assert device.destroyed == 1
