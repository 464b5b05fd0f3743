from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func
from exam_builder.db.session import Base
from exam_builder.db.models.base import new_id


class Section(Base):
    """Listening, Reading or Writing container.

    ``child_ids`` holds ordered part ids for listening/reading sections and
    ordered writing task ids for writing sections.
    """
    __tablename__ = "sections"

    id = Column(String(36), primary_key=True, default=new_id)
    kind = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    payload_ref = Column(String, nullable=True)  # full audio url / passage ref

    child_ids = Column(JSON, nullable=False, default=list)

    # Owning test, if linked
    test_id = Column(String(36), ForeignKey("ielts_tests.id", ondelete="SET NULL"), nullable=True, index=True)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}
