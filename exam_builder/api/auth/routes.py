from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from exam_builder.db.session import get_db
from exam_builder.db.models.user import User
from exam_builder.core.security import create_access_token, get_current_user
from . import schemas, services

router = APIRouter()


@router.post("/register", response_model=schemas.UserOut)
def register(user: schemas.UserCreate, db: Session = Depends(get_db)):
    if services.get_user_by_email(db, user.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    return services.create_user(db, user)


@router.post("/login", response_model=schemas.Token)
def login(user: schemas.UserLogin, db: Session = Depends(get_db)):
    db_user = services.authenticate(db, user.email, user.password)
    if not db_user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_access_token({"sub": db_user.email})
    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=schemas.AuthState)
def me(current_user: User = Depends(get_current_user)):
    # The server only answers once auth is resolved, so loading is never true
    return {"is_authenticated": True, "role": current_user.role, "loading": False}
