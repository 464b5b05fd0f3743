"""
Prefill parent references.

Create pages accept an optional ``testId`` / ``listeningId`` / ``readingId``
/ ``writingId`` query parameter naming the parent to attach the new entity
to. A missing, blank or unparseable value means "no prefill"; it never
fails the create.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from exam_builder.db.models.enums import EntityKind

logger = logging.getLogger(__name__)

PREFILL_PARAMS = {
    "testId": EntityKind.TEST,
    "listeningId": EntityKind.LISTENING,
    "readingId": EntityKind.READING,
    "writingId": EntityKind.WRITING,
}


@dataclass(frozen=True)
class ParentRef:
    kind: EntityKind
    id: str


def parse_prefill(raw: Optional[str], kind: EntityKind) -> Optional[ParentRef]:
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None
    try:
        parsed = uuid.UUID(value)
    except ValueError:
        logger.info("Ignoring unparseable %s prefill id %r", EntityKind(kind).value, raw)
        return None
    return ParentRef(kind=EntityKind(kind), id=str(parsed))
