from pydantic import AfterValidator, BaseModel, Field
from datetime import datetime
from typing import Annotated, Optional

from app.models.user import UserRole
from app.schemas.fields import NonBlankStr

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72

def _check_password_length(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value

Password = Annotated[str, Field(min_length=1), AfterValidator(_check_password_length)]

class UserBase(BaseModel):
    name: NonBlankStr
    email: NonBlankStr
    role: Optional[UserRole] = None

class UserCreate(UserBase):
    password: Optional[Password] = None

class UserUpdate(BaseModel):
    name: Optional[NonBlankStr] = None
    email: Optional[NonBlankStr] = None
    password: Optional[Password] = None
    role: Optional[UserRole] = None

class UserResponse(UserBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True
