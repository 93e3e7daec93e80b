"""Conversion between engine values and plain JSON-compatible dicts."""

from __future__ import annotations

import logging
from typing import Any

from .model import IDENTITY, ClipTransform, Easing, Handle, Keyframe, Vec2, Vec3

log = logging.getLogger(__name__)


def _handle_to_dict(handle: Handle | None) -> dict | None:
    if handle is None:
        return None
    return {"x": handle.x, "y": handle.y}


def _handle_from_dict(data: dict | None) -> Handle | None:
    if data is None:
        return None
    return Handle(float(data.get("x", 0.0)), float(data.get("y", 0.0)))


def _parse_easing(value: Any) -> Easing:
    if value is None:
        return Easing.LINEAR
    try:
        return Easing(value)
    except ValueError:
        log.warning("Unknown easing %r, using linear", value)
        return Easing.LINEAR


def keyframe_to_dict(keyframe: Keyframe) -> dict:
    data: dict[str, Any] = {
        "id": keyframe.id,
        "time": keyframe.time,
        "property": keyframe.property,
        "value": keyframe.value,
        "easing": str(keyframe.easing),
    }
    if keyframe.handle_in is not None:
        data["handleIn"] = _handle_to_dict(keyframe.handle_in)
    if keyframe.handle_out is not None:
        data["handleOut"] = _handle_to_dict(keyframe.handle_out)
    return data


def keyframe_from_dict(data: dict) -> Keyframe:
    """Build a Keyframe from its dict form.

    Raises ``ValueError`` when ``time``, ``property`` or ``value`` is missing.
    """
    missing = [key for key in ("time", "property", "value") if key not in data]
    if missing:
        raise ValueError(f"Keyframe is missing {', '.join(missing)}")

    kwargs: dict[str, Any] = {
        "time": float(data["time"]),
        "property": str(data["property"]),
        "value": float(data["value"]),
        "easing": _parse_easing(data.get("easing")),
        "handle_in": _handle_from_dict(data.get("handleIn")),
        "handle_out": _handle_from_dict(data.get("handleOut")),
    }
    if data.get("id"):
        kwargs["id"] = str(data["id"])
    return Keyframe(**kwargs)


def keyframes_to_list(keyframes) -> list[dict]:
    return [keyframe_to_dict(k) for k in keyframes]


def keyframes_from_list(items: list[dict]) -> list[Keyframe]:
    """Decode a keyframe list, skipping (and logging) malformed entries."""
    keyframes = []
    for index, item in enumerate(items):
        try:
            keyframes.append(keyframe_from_dict(item))
        except (TypeError, ValueError) as e:
            log.warning("Skipping keyframe %d: %s", index, e)
    return keyframes


def transform_to_dict(transform: ClipTransform) -> dict:
    return {
        "opacity": transform.opacity,
        "blendMode": transform.blend_mode,
        "position": {"x": transform.position.x, "y": transform.position.y, "z": transform.position.z},
        "scale": {"x": transform.scale.x, "y": transform.scale.y},
        "rotation": {"x": transform.rotation.x, "y": transform.rotation.y, "z": transform.rotation.z},
    }


def transform_from_dict(data: dict | None) -> ClipTransform:
    """Build a ClipTransform, filling any missing field from the identity.

    Older documents store ``rotation`` as a single number meaning Z rotation.
    """
    data = data or {}
    position = data.get("position") or {}
    scale = data.get("scale") or {}
    rotation = data.get("rotation")
    if isinstance(rotation, (int, float)):
        rotation = {"z": rotation}
    rotation = rotation or {}

    return ClipTransform(
        opacity=float(data.get("opacity", IDENTITY.opacity)),
        blend_mode=data.get("blendMode", IDENTITY.blend_mode),
        position=Vec3(
            float(position.get("x", IDENTITY.position.x)),
            float(position.get("y", IDENTITY.position.y)),
            float(position.get("z", IDENTITY.position.z)),
        ),
        scale=Vec2(
            float(scale.get("x", IDENTITY.scale.x)),
            float(scale.get("y", IDENTITY.scale.y)),
        ),
        rotation=Vec3(
            float(rotation.get("x", IDENTITY.rotation.x)),
            float(rotation.get("y", IDENTITY.rotation.y)),
            float(rotation.get("z", IDENTITY.rotation.z)),
        ),
    )
