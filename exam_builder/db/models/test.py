from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from exam_builder.db.session import Base
from exam_builder.db.models.base import new_id
from exam_builder.db.models.enums import TestMode, TestStatus


class IeltsTest(Base):
    __tablename__ = "ielts_tests"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    mode = Column(String, default=TestMode.PRACTICE.value, nullable=False)
    status = Column(String, default=TestStatus.DRAFT.value, nullable=False)
    category = Column(String, nullable=True)

    # Ordered section ids, one list per section kind
    listening_ids = Column(JSON, nullable=False, default=list)
    reading_ids = Column(JSON, nullable=False, default=list)
    writing_ids = Column(JSON, nullable=False, default=list)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}
