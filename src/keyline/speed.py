"""Speed ramps: mapping timeline time to source-media time."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import pairwise
from typing import Iterable, Sequence

from .interpolate import interpolate, keyframes_for, segment_value, uses_bezier, value_on_sorted
from .model import SPEED, Easing, Keyframe

log = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 40
NEAR_FREEZE_SPEED = 0.001
FREEZE_DURATION_FACTOR = 1000.0
SOURCE_TOLERANCE = 1e-9

# Even number of Simpson panels per eased segment.
_SIMPSON_STEPS = 16


def _is_linear(start: Keyframe, end: Keyframe) -> bool:
    return start.easing == Easing.LINEAR and not uses_bezier(start, end)


def _simpson(start: Keyframe, end: Keyframe, a: float, b: float) -> float:
    h = (b - a) / _SIMPSON_STEPS
    total = segment_value(start, end, a) + segment_value(start, end, b)
    for i in range(1, _SIMPSON_STEPS):
        weight = 4.0 if i % 2 else 2.0
        total += weight * segment_value(start, end, a + i * h)
    return total * h / 3.0


def _segment_area(start: Keyframe, end: Keyframe, a: float, b: float) -> float:
    """Integral of the segment's speed curve over ``[a, b]``."""
    if _is_linear(start, end):
        # Trapezoid rule is exact for a straight line.
        return (segment_value(start, end, a) + segment_value(start, end, b)) / 2.0 * (b - a)

    if start.easing == Easing.EASE_IN_OUT and not uses_bezier(start, end):
        # Piecewise quadratic; Simpson is exact on each side of the joint.
        joint = (start.time + end.time) / 2.0
        if a < joint < b:
            return _simpson(start, end, a, joint) + _simpson(start, end, joint, b)
    return _simpson(start, end, a, b)


def _integrate(ramp: Sequence[Keyframe], end_time: float) -> float:
    """Area under a sorted speed ramp over ``[0, end_time]``."""
    first, last = ramp[0], ramp[-1]
    total = 0.0

    # Before the first keyframe its speed holds.
    if first.time > 0:
        total += first.value * min(end_time, first.time)

    for start, end in pairwise(ramp):
        a = max(start.time, 0.0)
        b = min(end.time, end_time)
        if b <= a:
            continue
        total += _segment_area(start, end, a, b)

    # After the last keyframe its speed holds.
    if end_time > last.time:
        total += last.value * (end_time - max(last.time, 0.0))
    return total


def _source_time_on_ramp(ramp: Sequence[Keyframe], time: float, default_speed: float) -> float:
    if not ramp:
        return time * default_speed
    if time <= 0:
        return 0.0
    if len(ramp) == 1:
        return time * ramp[0].value
    return _integrate(ramp, time)


def source_time(keyframes: Iterable[Keyframe], time: float, default_speed: float) -> float:
    """Source-media position reached after *time* seconds of clip playback.

    Without speed keyframes this is ``time * default_speed``; negative speed
    yields negative (reverse) source time.

    >>> source_time([], 2.0, -1.0)
    -2.0
    """
    return _source_time_on_ramp(keyframes_for(keyframes, SPEED), time, default_speed)


def total_source_time(keyframes: Iterable[Keyframe], timeline_duration: float, default_speed: float) -> float:
    """Source time consumed by playing the whole clip."""
    return source_time(keyframes, timeline_duration, default_speed)


def speed_at_time(keyframes: Iterable[Keyframe], time: float, default_speed: float) -> float:
    return interpolate(keyframes, SPEED, time, default_speed)


def _duration_on_ramp(
    ramp: Sequence[Keyframe],
    source_duration: float,
    default_speed: float,
    max_iterations: int,
) -> float:
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")
    if source_duration <= 0:
        return 0.0

    if len(ramp) <= 1:
        speed = abs(ramp[0].value if ramp else default_speed)
        if speed < NEAR_FREEZE_SPEED:
            return source_duration * FREEZE_DURATION_FACTOR
        return source_duration / speed

    # Reverse playback still consumes source, so compare magnitudes.
    def consumed(d: float) -> float:
        return abs(_source_time_on_ramp(ramp, d, default_speed))

    limit = source_duration * FREEZE_DURATION_FACTOR
    high = source_duration
    while consumed(high) < source_duration and high < limit:
        high = min(high * 2.0, limit)
    if consumed(high) < source_duration:
        log.debug("Speed ramp never reaches %.3fs of source; capping at %.3fs", source_duration, high)
        return high

    low = 0.0
    for _ in range(max_iterations):
        mid = (low + high) / 2.0
        reached = consumed(mid)
        if abs(reached - source_duration) <= SOURCE_TOLERANCE:
            return mid
        if reached < source_duration:
            low = mid
        else:
            high = mid
    return (low + high) / 2.0


def timeline_duration(
    keyframes: Iterable[Keyframe],
    source_duration: float,
    default_speed: float,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> float:
    """Timeline length needed to play *source_duration* seconds of media.

    Numeric inverse of :func:`source_time`.  Speed ramps are inverted by
    bisection limited to *max_iterations* steps; fewer steps trade precision
    for latency, never termination.
    """
    ramp = keyframes_for(keyframes, SPEED)
    return _duration_on_ramp(ramp, source_duration, default_speed, max_iterations)


def has_reverse_speed(keyframes: Iterable[Keyframe], default_speed: float) -> bool:
    ramp = keyframes_for(keyframes, SPEED)
    if not ramp:
        return default_speed < 0
    return any(k.value < 0 for k in ramp)


def max_speed(keyframes: Iterable[Keyframe], default_speed: float) -> float:
    """Largest absolute speed, always counting *default_speed*."""
    return max([abs(default_speed), *(abs(k.value) for k in keyframes_for(keyframes, SPEED))])


@dataclass(frozen=True)
class SpeedMap:
    """A clip's speed curve, filtered and sorted once for repeated lookups."""

    keyframes: Iterable[Keyframe] = ()
    default_speed: float = 1.0
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    _ramp: list[Keyframe] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "keyframes", tuple(self.keyframes))
        object.__setattr__(self, "_ramp", keyframes_for(self.keyframes, SPEED))

    def speed(self, time: float) -> float:
        """Instantaneous speed at clip-local *time*."""
        return value_on_sorted(self._ramp, time, self.default_speed)

    def source_time(self, time: float) -> float:
        """Convert clip-local time to source time."""
        return _source_time_on_ramp(self._ramp, time, self.default_speed)

    def timeline_duration(self, source_duration: float) -> float:
        """Convert a source duration to the clip-local time that consumes it."""
        return _duration_on_ramp(self._ramp, source_duration, self.default_speed, self.max_iterations)

    @property
    def is_reversed(self) -> bool:
        if not self._ramp:
            return self.default_speed < 0
        return any(k.value < 0 for k in self._ramp)

    @property
    def max_speed(self) -> float:
        return max([abs(self.default_speed), *(abs(k.value) for k in self._ramp)])
