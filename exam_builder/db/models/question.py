from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from exam_builder.db.session import Base
from exam_builder.db.models.base import new_id
from exam_builder.db.models.enums import QuestionType


class Question(Base):
    __tablename__ = "questions"

    id = Column(String(36), primary_key=True, default=new_id)
    part_id = Column(String(36), ForeignKey("parts.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)  # 0-based, contiguous per part
    type = Column(String, default=QuestionType.COMPLETION.value, nullable=False)
    prompt = Column(Text, nullable=True)
    options = Column(JSON, nullable=False, default=list)
    answer_key = Column(JSON, nullable=True)

    group_id = Column(String(36), ForeignKey("question_groups.id", ondelete="SET NULL"), nullable=True)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    part = relationship("Part", back_populates="questions")
    group = relationship("QuestionGroup", back_populates="questions")

    __mapper_args__ = {"version_id_col": version}


class QuestionGroup(Base):
    """A prompt shared by a contiguous run of questions in one part."""
    __tablename__ = "question_groups"

    id = Column(String(36), primary_key=True, default=new_id)
    part_id = Column(String(36), ForeignKey("parts.id", ondelete="CASCADE"), nullable=False, index=True)
    prompt = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    part = relationship("Part", back_populates="groups")
    questions = relationship("Question", back_populates="group")
