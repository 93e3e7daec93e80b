"""Keyframe interpolation for clip properties."""

from __future__ import annotations

import bisect
from dataclasses import replace
from numbers import Real
from typing import Iterable, Sequence

from .bezier import solve_for_y
from .easing import apply_easing
from .model import ClipTransform, Easing, Keyframe, TransformPath, Vec2, Vec3, effect_path

DEFAULT_TOLERANCE = 0.01


def keyframes_for(keyframes: Iterable[Keyframe], property: str) -> list[Keyframe]:
    """Keyframes targeting *property*, stably sorted by time."""
    return sorted((k for k in keyframes if k.property == property), key=lambda k: k.time)


def uses_bezier(start: Keyframe, end: Keyframe) -> bool:
    if start.easing == Easing.BEZIER:
        return True
    if start.handle_out is not None and not start.handle_out.is_zero:
        return True
    return end.handle_in is not None and not end.handle_in.is_zero


def interpolate_bezier(start: Keyframe, end: Keyframe, local_t: float) -> float:
    """Blend between two keyframes along the bezier defined by their handles.

    Handles are offsets in seconds/value units; they are normalized by the
    segment's time and value span before solving.  A missing handle is a
    zero offset, so two missing handles give a straight line.
    """
    time_delta = end.time - start.time
    value_delta = end.value - start.value
    if time_delta <= 0:
        return end.value
    if value_delta == 0:
        return start.value

    out_x, out_y = (start.handle_out.x, start.handle_out.y) if start.handle_out else (0.0, 0.0)
    in_x, in_y = (end.handle_in.x, end.handle_in.y) if end.handle_in else (0.0, 0.0)

    # Control x outside [0, 1] would make the curve non-monotonic in time.
    p1x = min(1.0, max(0.0, out_x / time_delta))
    p2x = min(1.0, max(0.0, 1.0 + in_x / time_delta))
    p1y = out_y / value_delta
    p2y = 1.0 + in_y / value_delta

    eased = solve_for_y(local_t, p1x, p1y, p2x, p2y)
    return start.value + value_delta * eased


def segment_value(start: Keyframe, end: Keyframe, time: float) -> float:
    """Value at *time* on the segment running from *start* to *end*."""
    span = end.time - start.time
    if span <= 0:
        return end.value
    local_t = (time - start.time) / span
    if uses_bezier(start, end):
        return interpolate_bezier(start, end, local_t)
    eased = apply_easing(start.easing, local_t)
    return start.value + (end.value - start.value) * eased


def value_on_sorted(sorted_keyframes: Sequence[Keyframe], time: float, default_value: float) -> float:
    """Evaluate an already filtered and time-sorted keyframe list."""
    if not sorted_keyframes:
        return default_value
    first, last = sorted_keyframes[0], sorted_keyframes[-1]
    if len(sorted_keyframes) == 1:
        return first.value
    if time <= first.time:
        return first.value
    if time >= last.time:
        return last.value

    # Rightmost keyframe at or before *time*; ties resolve to the later one.
    index = bisect.bisect_right(sorted_keyframes, time, key=lambda k: k.time)
    return segment_value(sorted_keyframes[index - 1], sorted_keyframes[index], time)


def interpolate(
    keyframes: Iterable[Keyframe],
    property: str,
    time: float,
    default_value: float,
) -> float:
    """Animated value of *property* at *time*, or *default_value* if not animated."""
    return value_on_sorted(keyframes_for(keyframes, property), time, default_value)


# --- transform field access ---


_VECTOR_FIELDS = {
    TransformPath.POSITION_X: ("position", "x"),
    TransformPath.POSITION_Y: ("position", "y"),
    TransformPath.POSITION_Z: ("position", "z"),
    TransformPath.SCALE_X: ("scale", "x"),
    TransformPath.SCALE_Y: ("scale", "y"),
    TransformPath.ROTATION_X: ("rotation", "x"),
    TransformPath.ROTATION_Y: ("rotation", "y"),
    TransformPath.ROTATION_Z: ("rotation", "z"),
}


def get_field(transform: ClipTransform, path: str) -> float:
    """Read one numeric transform field by path. Unknown paths read as 0."""
    if path == TransformPath.OPACITY:
        return transform.opacity
    location = _VECTOR_FIELDS.get(path)
    if location is None:
        return 0.0
    group, axis = location
    return getattr(getattr(transform, group), axis)


def set_field(transform: ClipTransform, path: str, value: float) -> ClipTransform:
    """Return a copy of *transform* with one field replaced.

    Unknown paths return an unchanged copy.
    """
    if path == TransformPath.OPACITY:
        return replace(transform, opacity=value)
    location = _VECTOR_FIELDS.get(path)
    if location is None:
        return replace(transform)
    group, axis = location
    vector: Vec2 | Vec3 = getattr(transform, group)
    return replace(transform, **{group: replace(vector, **{axis: value})})


def evaluate_transform(
    keyframes: Iterable[Keyframe],
    time: float,
    base: ClipTransform,
) -> ClipTransform:
    """Apply every animated transform path at *time* on top of *base*.

    ``blend_mode`` is not animatable and always comes from *base*.
    """
    by_property: dict[str, list[Keyframe]] = {}
    for k in keyframes:
        by_property.setdefault(k.property, []).append(k)

    result = replace(base)
    for path in TransformPath:
        matching = by_property.get(path)
        if not matching:
            continue
        ordered = sorted(matching, key=lambda k: k.time)
        value = value_on_sorted(ordered, time, get_field(base, path))
        result = set_field(result, path, value)
    return result


def interpolate_effect_params(
    keyframes: Iterable[Keyframe],
    effect_id: str,
    params: dict,
    time: float,
) -> dict:
    """Return *params* with keyframed numeric effect parameters evaluated at *time*."""
    keyframes = list(keyframes)
    result = dict(params)
    for name, static in params.items():
        if isinstance(static, bool) or not isinstance(static, Real):
            continue
        path = effect_path(effect_id, name)
        if has_keyframes_for(keyframes, path):
            result[name] = interpolate(keyframes, path, time, static)
    return result


# --- accessors ---


def has_keyframes_for(keyframes: Iterable[Keyframe], property: str) -> bool:
    return any(k.property == property for k in keyframes)


def animated_properties(keyframes: Iterable[Keyframe]) -> list[str]:
    """Properties with at least one keyframe, in first-seen order."""
    return list(dict.fromkeys(k.property for k in keyframes))


def keyframe_at_time(
    keyframes: Iterable[Keyframe],
    property: str,
    time: float,
    tolerance: float = DEFAULT_TOLERANCE,
) -> Keyframe | None:
    """First keyframe (in list order) for *property* within *tolerance* of *time*."""
    for k in keyframes:
        if k.property == property and abs(k.time - time) <= tolerance:
            return k
    return None
