from __future__ import annotations

import random

import pytest

from instanced.runtime.config import CircleParams, RenderConfig, ShapeKind
from tests.fakes import FakeDevice, FakeSurface, FakeWindow


@pytest.fixture
def device() -> FakeDevice:
    return FakeDevice()


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def window() -> FakeWindow:
    return FakeWindow()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def circle_config() -> RenderConfig:
    return RenderConfig(
        instance_count=100,
        shape=ShapeKind.CIRCLE,
        circle=CircleParams(radius=0.5, inner_radius=0.25, num_subdivisions=24),
        seed=7,
    )


@pytest.fixture
def triangle_config() -> RenderConfig:
    return RenderConfig(instance_count=100, shape=ShapeKind.TRIANGLE, seed=7)
