from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from exam_builder.db.session import Base

TOKEN_MAX_LENGTH = 128


class LinkRequest(Base):
    """Completed link request, keyed by the caller's idempotency token.

    Tokens share one namespace across users; callers send random keys.
    """
    __tablename__ = "link_requests"

    token = Column(String(TOKEN_MAX_LENGTH), primary_key=True)
    parent_id = Column(String(36), nullable=False)
    child_id = Column(String(36), nullable=False)
    position = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
