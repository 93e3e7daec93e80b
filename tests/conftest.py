"""Shared test fixtures."""

import pytest

from keyline import SPEED, ClipTransform, Easing, Keyframe, TransformPath, Vec2, Vec3


def kf(
    time: float = 0.0,
    value: float = 0.0,
    property: str = TransformPath.OPACITY,
    easing: Easing | str = Easing.LINEAR,
    **kwargs,
) -> Keyframe:
    """Keyframe factory with test-friendly defaults."""
    return Keyframe(time=time, property=property, value=value, easing=easing, **kwargs)


def speed_kf(time: float = 0.0, value: float = 1.0, easing: Easing | str = Easing.LINEAR, **kwargs) -> Keyframe:
    return kf(time, value, property=SPEED, easing=easing, **kwargs)


def make_transform(
    opacity: float = 1.0,
    blend_mode: str = "normal",
    position: tuple[float, float, float] = (0.0, 0.0, 0.0),
    scale: tuple[float, float] = (1.0, 1.0),
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> ClipTransform:
    return ClipTransform(
        opacity=opacity,
        blend_mode=blend_mode,
        position=Vec3(*position),
        scale=Vec2(*scale),
        rotation=Vec3(*rotation),
    )


@pytest.fixture
def identity() -> ClipTransform:
    return make_transform()


@pytest.fixture
def opacity_ramp() -> list[Keyframe]:
    """Opacity 0 -> 1 over two seconds, linear."""
    return [kf(0.0, 0.0), kf(2.0, 1.0)]


@pytest.fixture
def speed_ramp() -> list[Keyframe]:
    """Speed rising linearly from 1x to 3x over two seconds."""
    return [speed_kf(0.0, 1.0), speed_kf(2.0, 3.0)]
