"""Timeline evaluation engine: keyframes, speed ramps and transform composition."""

from .bezier import solve_for_y
from .compose import (
    ParentLookup,
    ancestors,
    compose,
    parent_lookup,
    resolve_transform,
    rotate2d,
    would_create_cycle,
)
from .easing import EASING_FUNCTIONS, PRESET_BEZIER, BezierPreset, apply_easing, preset_to_handles
from .edit import bake_easing, move_keyframe, remove_keyframe, set_bezier_handle, upsert_keyframe
from .interpolate import (
    animated_properties,
    evaluate_transform,
    get_field,
    has_keyframes_for,
    interpolate,
    interpolate_bezier,
    interpolate_effect_params,
    keyframe_at_time,
    set_field,
)
from .model import (
    IDENTITY,
    SPEED,
    ClipTransform,
    Easing,
    Handle,
    Keyframe,
    TransformPath,
    Vec2,
    Vec3,
    effect_path,
)
from .serde import (
    keyframe_from_dict,
    keyframe_to_dict,
    keyframes_from_list,
    keyframes_to_list,
    transform_from_dict,
    transform_to_dict,
)
from .speed import (
    SpeedMap,
    has_reverse_speed,
    max_speed,
    source_time,
    speed_at_time,
    timeline_duration,
    total_source_time,
)

__all__ = [
    "ancestors",
    "animated_properties",
    "apply_easing",
    "bake_easing",
    "BezierPreset",
    "ClipTransform",
    "compose",
    "Easing",
    "EASING_FUNCTIONS",
    "effect_path",
    "evaluate_transform",
    "get_field",
    "Handle",
    "has_keyframes_for",
    "has_reverse_speed",
    "IDENTITY",
    "interpolate",
    "interpolate_bezier",
    "interpolate_effect_params",
    "Keyframe",
    "keyframe_at_time",
    "keyframe_from_dict",
    "keyframe_to_dict",
    "keyframes_from_list",
    "keyframes_to_list",
    "max_speed",
    "move_keyframe",
    "parent_lookup",
    "ParentLookup",
    "PRESET_BEZIER",
    "preset_to_handles",
    "remove_keyframe",
    "resolve_transform",
    "rotate2d",
    "set_bezier_handle",
    "set_field",
    "solve_for_y",
    "source_time",
    "SPEED",
    "speed_at_time",
    "SpeedMap",
    "timeline_duration",
    "total_source_time",
    "transform_from_dict",
    "transform_to_dict",
    "TransformPath",
    "upsert_keyframe",
    "Vec2",
    "Vec3",
    "would_create_cycle",
]

__version__ = "0.1.0"
