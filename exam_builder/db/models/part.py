from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from exam_builder.db.session import Base
from exam_builder.db.models.base import new_id


class Part(Base):
    __tablename__ = "parts"

    id = Column(String(36), primary_key=True, default=new_id)
    kind = Column(String, nullable=False, index=True)
    label = Column(String, nullable=False)  # PART_1 .. PART_4
    title = Column(String, nullable=True)
    payload_ref = Column(Text, nullable=True)  # part audio url / passage text
    answers = Column(JSON, nullable=False, default=dict)

    section_id = Column(String(36), ForeignKey("sections.id", ondelete="SET NULL"), nullable=True, index=True)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Questions and groups are exclusively owned
    questions = relationship(
        "Question", back_populates="part", cascade="all, delete-orphan",
        order_by="Question.position")
    groups = relationship(
        "QuestionGroup", back_populates="part", cascade="all, delete-orphan")

    __mapper_args__ = {"version_id_col": version}
