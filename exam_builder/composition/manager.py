"""
Composition graph manager.

Keeps parent -> child ordered id lists and the child back-references in
step. Each public operation is one store transaction: it reads the parent
(and its version), validates against the pure rules in ``graph``, then
writes the new list and back-reference together.
"""
import logging
from typing import List, Optional

from exam_builder.composition import graph
from exam_builder.core.errors import (
    AlreadyLinked,
    CompositionError,
    CreatedButUnlinked,
    CycleDetected,
    InvalidLink,
    InvalidOrder,
    NotFound,
    RequestTokenReused,
)
from exam_builder.core.prefill import ParentRef
from exam_builder.db.models import LinkRequest
from exam_builder.db.models.enums import EntityKind
from exam_builder.store import EntityStore
from exam_builder.store.entity_store import PARENT_COLUMNS

logger = logging.getLogger(__name__)

LOG_LINK = "LINK parent=%s child=%s position=%s"
LOG_UNLINK = "UNLINK parent=%s child=%s"
LOG_REORDER = "REORDER parent=%s children=%d"
LOG_IDEMPOTENT_SKIP = "IDEMPOTENT_SKIP token=%s parent=%s child=%s"
LOG_CREATED_BUT_UNLINKED = "CREATED_BUT_UNLINKED child=%s parent=%s reason=%s"
LOG_DELETE = "DELETE kind=%s id=%s detached=%d"


class CompositionManager:
    def __init__(self, store: EntityStore):
        self.store = store

    # ---------------------------
    # Reads
    # ---------------------------

    def children(self, parent_id: str, kind: Optional[EntityKind] = None) -> List[str]:
        parent_kind, parent = self.store.find(parent_id)
        if kind is None:
            return self.store.child_ids(parent)
        return list(getattr(parent, graph.containment_field(parent_kind, kind)))

    # ---------------------------
    # Link / unlink
    # ---------------------------

    def link(self, parent_id: str, child_id: str, position: Optional[int] = None,
             request_token: Optional[str] = None, expected_version: Optional[int] = None) -> List[str]:
        """Insert ``child_id`` into the parent's list; returns the new list.

        A retry carrying the ``request_token`` of an already applied link is
        a no-op that returns the parent's current list.
        """
        with self.store.transaction():
            if request_token:
                replay = self._replayed(request_token, parent_id, child_id)
                if replay is not None:
                    return replay

            parent_kind, parent = self.store.find(parent_id)
            child_kind, child = self.store.find(child_id)

            if graph.creates_cycle(parent_id, child_id, self.store.child_ids_of):
                logger.error("Refusing link that would create a cycle: parent=%s child=%s", parent_id, child_id)
                raise CycleDetected(
                    f"Linking {child_id} under {parent_id} would create a cycle",
                    parent_id=parent_id,
                    child_id=child_id,
                )

            field = graph.containment_field(parent_kind, child_kind)
            current = list(getattr(parent, field))
            if child_id in current:
                raise AlreadyLinked(f"{child_id} is already linked to {parent_id}", parent_id=parent_id)

            owner_column = PARENT_COLUMNS[child_kind]
            owner_id = getattr(child, owner_column)
            if owner_id is not None and owner_id != parent_id:
                raise AlreadyLinked(f"{child_id} is already linked to {owner_id}", parent_id=owner_id)

            updated = graph.insert_at(current, child_id, position)
            self.store.update(parent_kind, parent_id, {field: updated},
                              version=self._version(parent, expected_version))
            self.store.update(child_kind, child_id, {owner_column: parent_id})

            if request_token:
                self.store.db.add(LinkRequest(
                    token=request_token, parent_id=parent_id, child_id=child_id, position=position))
                self.store.flush()

            logger.info(LOG_LINK, parent_id, child_id, position)
            return updated

    def unlink(self, parent_id: str, child_id: str, expected_version: Optional[int] = None) -> List[str]:
        with self.store.transaction():
            return self._unlink(parent_id, child_id, expected_version)

    def _unlink(self, parent_id: str, child_id: str, expected_version: Optional[int]) -> List[str]:
        parent_kind, parent = self.store.find(parent_id)
        child_kind, child = self.store.find(child_id)
        try:
            field = graph.containment_field(parent_kind, child_kind)
        except InvalidLink:
            raise NotFound(f"{child_id} is not linked to {parent_id}", id=child_id) from None

        current = list(getattr(parent, field))
        if child_id not in current:
            raise NotFound(f"{child_id} is not linked to {parent_id}", id=child_id)

        updated = graph.without(current, child_id)
        self.store.update(parent_kind, parent_id, {field: updated},
                          version=self._version(parent, expected_version))
        owner_column = PARENT_COLUMNS[child_kind]
        if getattr(child, owner_column) == parent_id:
            self.store.update(child_kind, child_id, {owner_column: None})

        logger.info(LOG_UNLINK, parent_id, child_id)
        return updated

    # ---------------------------
    # Reorder
    # ---------------------------

    def reorder(self, parent_id: str, ordered_child_ids: List[str],
                kind: Optional[EntityKind] = None, expected_version: Optional[int] = None) -> List[str]:
        """Replace the parent's child order with a permutation of itself.

        Tests own one list per section kind; pass ``kind`` to pick it, or
        leave it out and the list whose members match is used.
        """
        with self.store.transaction():
            parent_kind, parent = self.store.find(parent_id)
            field = self._reorder_field(parent_kind, parent, ordered_child_ids, kind)
            current = list(getattr(parent, field))
            updated = graph.check_permutation(current, ordered_child_ids)
            self.store.update(parent_kind, parent_id, {field: updated},
                              version=self._version(parent, expected_version))
            logger.info(LOG_REORDER, parent_id, len(updated))
            return updated

    def _reorder_field(self, parent_kind, parent, ordered_child_ids, kind) -> str:
        fields = graph.list_fields(parent_kind)
        if not fields:
            raise InvalidLink(f"A {parent_kind.value} has no linked children to reorder")
        if kind is not None:
            return graph.containment_field(parent_kind, kind)
        if len(fields) == 1:
            return fields[0]
        wanted = set(ordered_child_ids)
        for field in fields:
            if set(getattr(parent, field)) == wanted:
                return field
        raise InvalidOrder("Requested order must contain exactly the current children")

    # ---------------------------
    # Delete
    # ---------------------------

    def detach_and_delete(self, parent_id: str, child_id: str,
                          expected_version: Optional[int] = None) -> List[str]:
        """Unlink then delete the child; both happen or neither does."""
        with self.store.transaction():
            updated = self._unlink(parent_id, child_id, expected_version)
            self._delete(child_id)
            return updated

    def delete(self, entity_id: str, kind: Optional[EntityKind] = None):
        with self.store.transaction():
            if kind is not None:
                self.store.get(kind, entity_id)
            self._delete(entity_id)

    def _delete(self, entity_id: str):
        kind, record = self.store.find(entity_id)
        if kind == EntityKind.QUESTION:
            raise InvalidLink("Questions are removed through their part's ordering")

        owner_column = PARENT_COLUMNS.get(kind)
        owner_id = getattr(record, owner_column) if owner_column else None
        if owner_id is not None:
            owner_kind, owner = self.store.find(owner_id)
            field = graph.containment_field(owner_kind, kind)
            self.store.update(owner_kind, owner_id, {field: graph.without(getattr(owner, field), entity_id)})

        # Detach sections / parts / tasks; questions cascade with their part
        detached = 0
        if kind != EntityKind.READING_PART and kind != EntityKind.LISTENING_PART:
            for child_id in self.store.child_ids(record):
                child_kind, child = self.store.find(child_id)
                column = PARENT_COLUMNS[child_kind]
                if getattr(child, column) == entity_id:
                    self.store.update(child_kind, child_id, {column: None})
                    detached += 1

        self.store.delete(kind, entity_id)
        logger.info(LOG_DELETE, kind.value, entity_id, detached)

    # ---------------------------
    # Create under a parent
    # ---------------------------

    def create_and_link(self, kind: EntityKind, payload: dict, parent: Optional[ParentRef] = None):
        """Create, then link to ``parent`` if one was prefilled.

        The create is committed before the link is attempted. When the link
        fails the entity stays, unlinked, and ``CreatedButUnlinked`` carries
        its id back to the caller.
        """
        with self.store.transaction():
            child_id = self.store.create(kind, payload)

        if parent is not None:
            try:
                self._check_parent_kind(parent)
                self.link(parent.id, child_id)
            except CycleDetected:
                raise
            except CompositionError as exc:
                logger.warning(LOG_CREATED_BUT_UNLINKED, child_id, parent.id, exc.code)
                raise CreatedButUnlinked(child_id, parent.id, exc) from exc

        return self.store.get(kind, child_id)

    # ---------------------------
    # Helpers
    # ---------------------------

    def _check_parent_kind(self, parent: ParentRef):
        """A prefill names its parent's kind; an id of another kind is refused."""
        actual, _ = self.store.find(parent.id)
        if actual != parent.kind:
            raise InvalidLink(
                f"{parent.id} is a {actual.value}, not a {parent.kind.value}",
                parent_kind=actual.value,
                expected_kind=parent.kind.value,
            )

    def _replayed(self, token: str, parent_id: str, child_id: str) -> Optional[List[str]]:
        previous = self.store.db.get(LinkRequest, token)
        if previous is None:
            return None
        if previous.parent_id != parent_id or previous.child_id != child_id:
            raise RequestTokenReused(
                f"Token {token} was already used to link {previous.child_id} to {previous.parent_id}")
        logger.info(LOG_IDEMPOTENT_SKIP, token, parent_id, child_id)
        parent_kind, parent = self.store.find(parent_id)
        child_kind, _ = self.store.find(child_id)
        return list(getattr(parent, graph.containment_field(parent_kind, child_kind)))

    @staticmethod
    def _version(record, expected_version: Optional[int]) -> int:
        return record.version if expected_version is None else expected_version
