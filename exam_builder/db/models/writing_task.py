from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from exam_builder.db.session import Base
from exam_builder.db.models.base import new_id


class WritingTask(Base):
    __tablename__ = "writing_tasks"

    id = Column(String(36), primary_key=True, default=new_id)
    label = Column(String, nullable=False)  # TASK_1 / TASK_2
    prompt = Column(Text, nullable=True)
    instructions = Column(Text, nullable=True)
    min_words = Column(Integer, nullable=True)
    suggested_time = Column(Integer, nullable=True)  # minutes

    writing_id = Column(String(36), ForeignKey("sections.id", ondelete="SET NULL"), nullable=True, index=True)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}
