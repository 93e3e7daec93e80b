"""Parent/child transform composition and parent-cycle checks."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Callable, Hashable, Protocol, TypeVar, runtime_checkable

from .model import ClipTransform, Vec2, Vec3

log = logging.getLogger(__name__)

Id = TypeVar("Id", bound=Hashable)

MAX_PARENT_DEPTH = 1024


@runtime_checkable
class ParentLookup(Protocol[Id]):

    def get_parent(self, clip_id: Id) -> Id | None: ...


class _FnParentLookup:
    def __init__(self, lookup_fn):
        self._lookup_fn = lookup_fn

    def get_parent(self, clip_id):
        return self._lookup_fn(clip_id)


def parent_lookup(lookup_fn: Callable[[Id], Id | None]) -> ParentLookup[Id]:
    """Wrap a plain function as a ParentLookup.

    >>> parents = {"child": "root"}
    >>> parent_lookup(parents.get).get_parent("child")
    'root'
    """
    return _FnParentLookup(lookup_fn)


def _as_lookup(source: ParentLookup | Callable | Mapping) -> ParentLookup:
    if isinstance(source, ParentLookup):
        return source
    if isinstance(source, Mapping):
        return _FnParentLookup(source.get)
    return _FnParentLookup(source)


def rotate2d(x: float, y: float, degrees: float) -> tuple[float, float]:
    """Rotate the point (x, y) counter-clockwise about the origin."""
    radians = math.radians(degrees)
    cos, sin = math.cos(radians), math.sin(radians)
    return x * cos - y * sin, x * sin + y * cos


def compose(parent: ClipTransform, child: ClipTransform) -> ClipTransform:
    """Combine a parent transform with a child's local transform.

    Only the parent's Z rotation moves the child's XY offset, and the
    parent's scale does not scale that offset; scale is applied later in
    render space.  The child's blend mode always wins.
    """
    offset_x, offset_y = rotate2d(child.position.x, child.position.y, parent.rotation.z)
    return ClipTransform(
        opacity=parent.opacity * child.opacity,
        blend_mode=child.blend_mode,
        position=Vec3(
            parent.position.x + offset_x,
            parent.position.y + offset_y,
            parent.position.z + child.position.z,
        ),
        scale=Vec2(parent.scale.x * child.scale.x, parent.scale.y * child.scale.y),
        rotation=Vec3(
            parent.rotation.x + child.rotation.x,
            parent.rotation.y + child.rotation.y,
            parent.rotation.z + child.rotation.z,
        ),
    )


def would_create_cycle(clip_id, candidate_parent_id, get_parent: ParentLookup | Callable | Mapping) -> bool:
    """Return True if parenting *clip_id* to *candidate_parent_id* would form a loop.

    *get_parent* may be a ParentLookup, a plain ``id -> parent id | None``
    function, or a mapping.  An ancestry that is already cyclic, or deeper
    than MAX_PARENT_DEPTH, is logged and reported as True so the caller
    refuses the assignment.
    """
    if candidate_parent_id == clip_id:
        return True

    lookup = _as_lookup(get_parent)
    visited = {candidate_parent_id}
    current = lookup.get_parent(candidate_parent_id)
    while current is not None:
        if current == clip_id:
            return True
        if current in visited:
            log.warning("Parent chain of %r is already cyclic at %r", candidate_parent_id, current)
            return True
        if len(visited) >= MAX_PARENT_DEPTH:
            log.warning("Parent chain of %r exceeds %d levels", candidate_parent_id, MAX_PARENT_DEPTH)
            return True
        visited.add(current)
        current = lookup.get_parent(current)
    return False


def ancestors(clip_id, get_parent: ParentLookup | Callable | Mapping) -> list:
    """Parent ids of *clip_id*, nearest first, stopping at any cycle."""
    lookup = _as_lookup(get_parent)
    chain = []
    seen = {clip_id}
    current = lookup.get_parent(clip_id)
    while current is not None:
        if current in seen or len(chain) >= MAX_PARENT_DEPTH:
            log.warning("Truncating parent chain of %r at %r", clip_id, current)
            break
        chain.append(current)
        seen.add(current)
        current = lookup.get_parent(current)
    return chain


def resolve_transform(
    clip_id,
    own_transform: Callable[[Id], ClipTransform],
    get_parent: ParentLookup | Callable | Mapping,
) -> ClipTransform:
    """Effective transform of *clip_id* after composing every ancestor.

    *own_transform* returns a clip's local (already keyframe-evaluated)
    transform.  Composition is associative, so the chain is folded from the
    clip upward.
    """
    result = own_transform(clip_id)
    for ancestor in ancestors(clip_id, get_parent):
        result = compose(own_transform(ancestor), result)
    return result
