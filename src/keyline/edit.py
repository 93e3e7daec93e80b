"""Copy-on-write edits to a clip's keyframe list.

Every function returns a new list sorted by time; inputs are never mutated.
Keyframes are addressed by ``Keyframe.id``; unknown ids leave the list
unchanged apart from ordering.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from .easing import preset_to_handles
from .interpolate import keyframe_at_time
from .model import Easing, Handle, Keyframe


def _by_time(keyframes: Iterable[Keyframe]) -> list[Keyframe]:
    return sorted(keyframes, key=lambda k: k.time)


def _clamp_time(time: float, duration: float | None) -> float:
    time = max(0.0, time)
    if duration is not None:
        time = min(time, duration)
    return time


def upsert_keyframe(
    keyframes: Iterable[Keyframe],
    property: str,
    time: float,
    value: float,
    easing: Easing | str = Easing.LINEAR,
    duration: float | None = None,
) -> list[Keyframe]:
    """Set *property* to *value* at *time*, reusing a keyframe already there."""
    keyframes = list(keyframes)
    time = _clamp_time(time, duration)
    existing = keyframe_at_time(keyframes, property, time)
    if existing is None:
        return _by_time([*keyframes, Keyframe(time, property, value, Easing(easing))])
    return _by_time(
        replace(k, value=value, easing=Easing(easing)) if k.id == existing.id else k
        for k in keyframes
    )


def remove_keyframe(keyframes: Iterable[Keyframe], keyframe_id: str) -> list[Keyframe]:
    return _by_time(k for k in keyframes if k.id != keyframe_id)


def move_keyframe(
    keyframes: Iterable[Keyframe],
    keyframe_id: str,
    new_time: float,
    duration: float | None = None,
) -> list[Keyframe]:
    """Move a keyframe in time, clamped to ``[0, duration]``."""
    new_time = _clamp_time(new_time, duration)
    return _by_time(replace(k, time=new_time) if k.id == keyframe_id else k for k in keyframes)


def set_bezier_handle(
    keyframes: Iterable[Keyframe],
    keyframe_id: str,
    side: str,
    handle: Handle,
) -> list[Keyframe]:
    """Set the ``"in"`` or ``"out"`` handle of a keyframe and switch it to bezier easing."""
    if side not in ("in", "out"):
        raise ValueError(f"Unknown handle side: {side!r}")
    attr = "handle_in" if side == "in" else "handle_out"
    return _by_time(
        replace(k, easing=Easing.BEZIER, **{attr: handle}) if k.id == keyframe_id else k
        for k in keyframes
    )


def bake_easing(keyframes: Iterable[Keyframe], keyframe_id: str) -> list[Keyframe]:
    """Replace a keyframe's named outgoing easing with equivalent bezier handles.

    The handle_out goes on the keyframe and the handle_in on the next
    keyframe of the same property.  The last keyframe of a property has no
    outgoing segment and is returned untouched, as are bezier keyframes.
    """
    ordered = _by_time(keyframes)
    target = next((k for k in ordered if k.id == keyframe_id), None)
    if target is None or target.easing == Easing.BEZIER:
        return ordered

    same_property = [k for k in ordered if k.property == target.property]
    position = next(i for i, k in enumerate(same_property) if k.id == keyframe_id)
    if position + 1 >= len(same_property):
        return ordered
    following = same_property[position + 1]

    handle_out, handle_in = preset_to_handles(
        target.easing,
        following.time - target.time,
        following.value - target.value,
    )
    baked = {
        target.id: replace(target, easing=Easing.BEZIER, handle_out=handle_out),
        following.id: replace(following, handle_in=handle_in),
    }
    return [baked.get(k.id, k) for k in ordered]
