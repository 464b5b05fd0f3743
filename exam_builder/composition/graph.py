"""
Pure functions over the composition graph.

Nothing here touches the database: callers pass current ordered id lists
(and a ``children_of`` lookup for traversal) and get new lists back, so a
failed check never leaves a half-applied mutation behind.
"""
from typing import Callable, Iterable, List, Optional, Sequence

from exam_builder.core.errors import InvalidLink, InvalidOrder, OutOfRange
from exam_builder.db.models.enums import EntityKind

# (parent kind, child kind) -> ordered list column on the parent
CONTAINMENT = {
    (EntityKind.TEST, EntityKind.LISTENING): "listening_ids",
    (EntityKind.TEST, EntityKind.READING): "reading_ids",
    (EntityKind.TEST, EntityKind.WRITING): "writing_ids",
    (EntityKind.LISTENING, EntityKind.LISTENING_PART): "child_ids",
    (EntityKind.READING, EntityKind.READING_PART): "child_ids",
    (EntityKind.WRITING, EntityKind.WRITING_TASK): "child_ids",
}


def containment_field(parent_kind: EntityKind, child_kind: EntityKind) -> str:
    try:
        return CONTAINMENT[(EntityKind(parent_kind), EntityKind(child_kind))]
    except KeyError:
        raise InvalidLink(
            f"A {EntityKind(parent_kind).value} cannot contain a {EntityKind(child_kind).value}",
            parent_kind=EntityKind(parent_kind).value,
            child_kind=EntityKind(child_kind).value,
        ) from None


def list_fields(parent_kind: EntityKind) -> List[str]:
    """Ordered list columns a parent kind owns, in declaration order."""
    fields = []
    for (parent, _), field in CONTAINMENT.items():
        if parent == EntityKind(parent_kind) and field not in fields:
            fields.append(field)
    return fields


def insert_at(ids: Sequence[str], child_id: str, position: Optional[int] = None) -> List[str]:
    if position is None:
        return list(ids) + [child_id]
    if position < 0 or position > len(ids):
        raise OutOfRange(
            f"Position {position} is outside 0..{len(ids)}",
            position=position,
            length=len(ids),
        )
    updated = list(ids)
    updated.insert(position, child_id)
    return updated


def without(ids: Sequence[str], child_id: str) -> List[str]:
    return [i for i in ids if i != child_id]


def check_permutation(current: Sequence[str], proposed: Sequence[str]) -> List[str]:
    """Return ``proposed`` as a list if it reorders ``current`` exactly."""
    proposed = list(proposed)
    if len(proposed) != len(set(proposed)):
        raise InvalidOrder("Duplicate ids in the requested order")
    if set(proposed) != set(current):
        missing = sorted(set(current) - set(proposed))
        unexpected = sorted(set(proposed) - set(current))
        raise InvalidOrder(
            "Requested order must contain exactly the current children",
            missing=missing,
            unexpected=unexpected,
        )
    return proposed


def creates_cycle(parent_id: str, child_id: str,
                  children_of: Callable[[str], Iterable[str]]) -> bool:
    """True if ``parent_id`` is ``child_id`` or one of its descendants."""
    if parent_id == child_id:
        return True
    seen = set()
    stack = [child_id]
    while stack:
        node = stack.pop()
        if node in seen:
            continue
        seen.add(node)
        for descendant in children_of(node):
            if descendant == parent_id:
                return True
            stack.append(descendant)
    return False
