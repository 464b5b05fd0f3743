from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from exam_builder.db.session import Base
from exam_builder.db.models.enums import UserRole

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)
    hashed_password = Column(String, nullable=False)
    role = Column(String, default=UserRole.TEACHER.value, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
