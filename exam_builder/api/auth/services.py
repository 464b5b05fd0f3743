from typing import Optional

from sqlalchemy.orm import Session
from exam_builder.core.security import hash_password, verify_password
from exam_builder.db.models.user import User
from . import schemas

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()

def create_user(db: Session, user: schemas.UserCreate) -> User:
    db_user = User(
        email=user.email,
        name=user.name,
        hashed_password=hash_password(user.password),
        role=user.role.value,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    db_user = get_user_by_email(db, email)
    if not db_user or not verify_password(password, db_user.hashed_password):
        return None
    return db_user
