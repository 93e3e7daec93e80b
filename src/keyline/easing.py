"""Named easing curves and their bezier equivalents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .model import Easing, Handle

EasingFn = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    return t * t


def ease_out(t: float) -> float:
    return t * (2.0 - t)


def ease_in_out(t: float) -> float:
    """Ease-in on the first half, ease-out on the second; 0.5 at t=0.5."""
    if t < 0.5:
        return 2.0 * t * t
    return -1.0 + (4.0 - 2.0 * t) * t


EASING_FUNCTIONS: dict[Easing, EasingFn] = {
    Easing.LINEAR: linear,
    Easing.EASE_IN: ease_in,
    Easing.EASE_OUT: ease_out,
    Easing.EASE_IN_OUT: ease_in_out,
}


def apply_easing(easing: Easing | str, t: float) -> float:
    """Evaluate a named easing. ``bezier`` and unknown names behave as linear."""
    return EASING_FUNCTIONS.get(easing, linear)(t)


@dataclass(frozen=True)
class BezierPreset:
    p1: tuple[float, float]
    p2: tuple[float, float]


# Control points match the CSS timing keywords of the same names.
PRESET_BEZIER: dict[Easing, BezierPreset] = {
    Easing.LINEAR: BezierPreset((0.0, 0.0), (1.0, 1.0)),
    Easing.EASE_IN: BezierPreset((0.42, 0.0), (1.0, 1.0)),
    Easing.EASE_OUT: BezierPreset((0.0, 0.0), (0.58, 1.0)),
    Easing.EASE_IN_OUT: BezierPreset((0.42, 0.0), (0.58, 1.0)),
}


def preset_to_handles(
    preset: Easing | str,
    time_delta: float,
    value_delta: float,
) -> tuple[Handle, Handle]:
    """Convert a named easing into explicit ``(handle_out, handle_in)`` offsets.

    *handle_out* belongs to the segment's first keyframe and *handle_in* to
    its second, both scaled into the segment's time and value units.
    Linear yields two zero handles.
    """
    curve = PRESET_BEZIER.get(Easing(preset))
    if curve is None:
        raise ValueError(f"No bezier preset for easing {preset!r}")
    (p1x, p1y), (p2x, p2y) = curve.p1, curve.p2
    handle_out = Handle(p1x * time_delta, p1y * value_delta)
    handle_in = Handle((p2x - 1.0) * time_delta, (p2y - 1.0) * value_delta)
    return handle_out, handle_in
