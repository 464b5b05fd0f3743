from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from exam_builder.composition import CompositionManager
from exam_builder.core.prefill import ParentRef, parse_prefill
from exam_builder.db.models.enums import EntityKind
from exam_builder.db.session import get_db
from exam_builder.ordering import QuestionOrderingEngine
from exam_builder.store import EntityStore


def get_store(db: Session = Depends(get_db)) -> EntityStore:
    return EntityStore(db)


def get_manager(store: EntityStore = Depends(get_store)) -> CompositionManager:
    return CompositionManager(store)


def get_engine(store: EntityStore = Depends(get_store)) -> QuestionOrderingEngine:
    return QuestionOrderingEngine(store)


def prefill_param(alias: str, kind: EntityKind):
    """Dependency reading an optional prefill parent id from the query string."""
    def dependency(raw: Optional[str] = Query(None, alias=alias)) -> Optional[ParentRef]:
        return parse_prefill(raw, kind)
    return dependency
