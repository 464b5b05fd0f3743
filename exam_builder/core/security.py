import logging
from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from exam_builder.config import settings
from exam_builder.db.session import get_db
from exam_builder.db.models.user import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Used to extract token from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

BCRYPT_MAX_BYTES = 72


def _bcrypt_safe(password: str) -> str:
    """Cut to bcrypt's 72-byte limit without splitting a UTF-8 character."""
    encoded = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return encoded.decode("utf-8", errors="ignore")


def hash_password(password: str) -> str:
    return pwd_context.hash(_bcrypt_safe(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(_bcrypt_safe(plain_password), hashed_password)


# 🔐 Create JWT Access Token
def create_access_token(data: dict, expires_minutes: int = None) -> str:
    to_encode = data.copy()
    minutes = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    to_encode.update({"exp": datetime.now(timezone.utc) + timedelta(minutes=minutes)})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


# 👤 Extract User from Token
def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_email: str = payload.get("sub")

        if user_email is None:
            logger.warning("JWT token missing 'sub' claim")
            raise credentials_exception

    except JWTError as e:
        logger.info("JWT decode failed: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Token is invalid: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.email == user_email).first()
    if user is None:
        logger.warning("User not found in DB for email: %s", user_email)
        raise credentials_exception

    return user


def require_builder(current_user: User = Depends(get_current_user)) -> User:
    """Only builder roles may author test content."""
    if current_user.role not in settings.BUILDER_ROLES:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Builder access required")
    return current_user
