"""Value types shared by the evaluation engine."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import StrEnum


class TransformPath(StrEnum):
    """The nine animatable sub-paths of a ClipTransform."""

    OPACITY = "opacity"
    POSITION_X = "position.x"
    POSITION_Y = "position.y"
    POSITION_Z = "position.z"
    SCALE_X = "scale.x"
    SCALE_Y = "scale.y"
    ROTATION_X = "rotation.x"
    ROTATION_Y = "rotation.y"
    ROTATION_Z = "rotation.z"


SPEED = "speed"


def effect_path(effect_id: str, param: str) -> str:
    """Build the opaque property path for an effect parameter.

    >>> effect_path("fx_1", "amount")
    'effect.fx_1.amount'
    """
    return f"effect.{effect_id}.{param}"


class Easing(StrEnum):
    LINEAR = "linear"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"
    EASE_IN_OUT = "ease-in-out"
    BEZIER = "bezier"


@dataclass(frozen=True)
class Handle:
    """Bezier control offset from its keyframe, in (seconds, value) units."""

    x: float = 0.0
    y: float = 0.0

    @property
    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0


def _new_id() -> str:
    return f"kf_{uuid.uuid4().hex[:10]}"


@dataclass(frozen=True)
class Keyframe:
    time: float
    property: str
    value: float
    easing: Easing = Easing.LINEAR  # governs the segment to the next keyframe
    handle_in: Handle | None = None
    handle_out: Handle | None = None
    id: str = field(default_factory=_new_id, compare=False)

    def __post_init__(self) -> None:
        # Plain str so enum members and raw paths hash the same in dicts.
        object.__setattr__(self, "property", str(self.property))
        object.__setattr__(self, "easing", Easing(self.easing))


@dataclass(frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class ClipTransform:
    """Resolved visual state of a clip. Rotation is in degrees."""

    opacity: float = 1.0
    blend_mode: str = "normal"
    position: Vec3 = field(default_factory=Vec3)
    scale: Vec2 = field(default_factory=lambda: Vec2(1.0, 1.0))
    rotation: Vec3 = field(default_factory=Vec3)


IDENTITY = ClipTransform()
