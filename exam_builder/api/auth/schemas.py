from typing import Optional
from pydantic import BaseModel, EmailStr

from exam_builder.db.models.enums import UserRole

class UserCreate(BaseModel):
    name: Optional[str] = None
    email: EmailStr
    password: str
    role: UserRole = UserRole.TEACHER

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserOut(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    role: str

    model_config = {
        "from_attributes": True
    }


class AuthState(BaseModel):
    is_authenticated: bool
    role: Optional[str] = None
    loading: bool = False
