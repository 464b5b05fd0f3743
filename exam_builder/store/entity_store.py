"""
SQLAlchemy-backed entity store.

CRUD for every builder entity kind, with optimistic concurrency: each
record carries a ``version`` (the mapper's ``version_id_col``). Callers
read it, hand it back on update, and get ``StaleVersion`` when another
session wrote first. Writes only flush; ``transaction()`` owns the commit.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from exam_builder.core.errors import NotFound, StaleVersion
from exam_builder.db.models import IeltsTest, Section, Part, Question, WritingTask
from exam_builder.db.models.enums import EntityKind

logger = logging.getLogger(__name__)

LOG_STALE_VERSION = "STALE_VERSION kind=%s id=%s"

# kind -> (model, discriminator columns)
KIND_MODELS = {
    EntityKind.TEST: (IeltsTest, {}),
    EntityKind.LISTENING: (Section, {"kind": "listening"}),
    EntityKind.READING: (Section, {"kind": "reading"}),
    EntityKind.WRITING: (Section, {"kind": "writing"}),
    EntityKind.LISTENING_PART: (Part, {"kind": "listening"}),
    EntityKind.READING_PART: (Part, {"kind": "reading"}),
    EntityKind.WRITING_TASK: (WritingTask, {}),
    EntityKind.QUESTION: (Question, {}),
}

# Column on the child naming its owner
PARENT_COLUMNS = {
    EntityKind.LISTENING: "test_id",
    EntityKind.READING: "test_id",
    EntityKind.WRITING: "test_id",
    EntityKind.LISTENING_PART: "section_id",
    EntityKind.READING_PART: "section_id",
    EntityKind.WRITING_TASK: "writing_id",
    EntityKind.QUESTION: "part_id",
}

LOOKUP_ORDER = (IeltsTest, Section, Part, WritingTask, Question)


def kind_of(record) -> EntityKind:
    if isinstance(record, IeltsTest):
        return EntityKind.TEST
    if isinstance(record, Section):
        return EntityKind(record.kind)
    if isinstance(record, Part):
        return EntityKind(f"{record.kind}_part")
    if isinstance(record, WritingTask):
        return EntityKind.WRITING_TASK
    if isinstance(record, Question):
        return EntityKind.QUESTION
    raise TypeError(f"Not a builder entity: {record!r}")


class EntityStore:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator["EntityStore"]:
        """Commit on success, roll back on any error."""
        try:
            yield self
            self.db.commit()
        except StaleDataError as exc:
            self.db.rollback()
            raise StaleVersion(str(exc)) from exc
        except Exception:
            self.db.rollback()
            raise

    def flush(self):
        try:
            self.db.flush()
        except StaleDataError as exc:
            raise StaleVersion(str(exc)) from exc

    # ---------------------------
    # CRUD
    # ---------------------------

    def create(self, kind: EntityKind, payload: dict) -> str:
        model, discriminator = KIND_MODELS[EntityKind(kind)]
        record = model(**payload, **discriminator)
        self.db.add(record)
        self.flush()
        logger.debug("Created %s %s", EntityKind(kind).value, record.id)
        return record.id

    def get(self, kind: EntityKind, entity_id: str):
        kind = EntityKind(kind)
        model, discriminator = KIND_MODELS[kind]
        record = self.db.get(model, entity_id)
        if record is None or any(getattr(record, k) != v for k, v in discriminator.items()):
            raise NotFound(f"{kind.value} {entity_id} not found", id=entity_id)
        return record

    def find(self, entity_id: str) -> Tuple[EntityKind, object]:
        """Resolve an id of unknown kind."""
        for model in LOOKUP_ORDER:
            record = self.db.get(model, entity_id)
            if record is not None:
                return kind_of(record), record
        raise NotFound(f"Entity {entity_id} not found", id=entity_id)

    def update(self, kind: EntityKind, entity_id: str, patch: dict, version: Optional[int] = None):
        record = self.get(kind, entity_id)
        if version is not None and record.version != version:
            logger.info(LOG_STALE_VERSION, EntityKind(kind).value, entity_id)
            raise StaleVersion(
                f"{EntityKind(kind).value} {entity_id} is at version {record.version}, not {version}",
                id=entity_id,
                current_version=record.version,
            )
        for key, value in patch.items():
            setattr(record, key, value)
        self.flush()
        return record

    def delete(self, kind: EntityKind, entity_id: str):
        record = self.get(kind, entity_id)
        self.db.delete(record)
        self.flush()
        return record

    def list(self, kind: EntityKind, parent_id: Optional[str] = None,
             filters: Optional[dict] = None, limit: Optional[int] = None,
             linked: Optional[bool] = None) -> List:
        """Records of one kind; in the parent's order when ``parent_id`` is given.

        ``linked`` keeps only records that do (or do not) have an owner. It is
        applied in the query, before ``limit``.
        """
        kind = EntityKind(kind)
        model, discriminator = KIND_MODELS[kind]
        query = self.db.query(model).filter_by(**discriminator)
        for key, value in (filters or {}).items():
            if value is not None:
                query = query.filter(getattr(model, key) == value)

        owner = getattr(model, PARENT_COLUMNS[kind]) if kind in PARENT_COLUMNS else None
        if linked is not None and owner is not None:
            query = query.filter(owner.isnot(None) if linked else owner.is_(None))

        if parent_id is None:
            query = query.order_by(model.created_at.desc())
            if limit:
                query = query.limit(limit)
            return query.all()

        query = query.filter(owner == parent_id)
        records = {record.id: record for record in query.all()}
        _, parent = self.find(parent_id)
        ordered = [records[i] for i in self.child_ids(parent) if i in records]
        return ordered[:limit] if limit else ordered

    # ---------------------------
    # Graph reads
    # ---------------------------

    def child_ids(self, record) -> List[str]:
        if isinstance(record, IeltsTest):
            return list(record.listening_ids) + list(record.reading_ids) + list(record.writing_ids)
        if isinstance(record, Section):
            return list(record.child_ids)
        if isinstance(record, Part):
            return [q.id for q in sorted(record.questions, key=lambda q: q.position)]
        return []

    def child_ids_of(self, entity_id: str) -> List[str]:
        try:
            _, record = self.find(entity_id)
        except NotFound:
            return []
        return self.child_ids(record)
