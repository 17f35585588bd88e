
import re
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator
from app.models.user import Role

SPECIAL_CHARS = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")
UPPERCASE = re.compile(r"[A-Z]")


class UserBase(BaseModel):
    # 20 is the lower bound the product asked for, kept literally.
    name: str = Field(min_length=20, max_length=60)
    email: EmailStr
    address: str = Field(max_length=400)


class RegisterIn(UserBase):
    password: str = Field(min_length=8, max_length=16)
    confirm_password: str = Field(alias="confirmPassword")

    class Config:
        populate_by_name = True

    @field_validator("password")
    @classmethod
    def password_complexity(cls, value: str) -> str:
        problems = []
        if not UPPERCASE.search(value):
            problems.append("at least one uppercase letter")
        if not SPECIAL_CHARS.search(value):
            problems.append("at least one special character")
        if problems:
            raise ValueError("Password must contain " + " and ".join(problems))
        return value

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        password = info.data.get("password")
        if password is not None and value != password:
            raise ValueError("Passwords don't match")
        return value


class UserCreate(RegisterIn):
    role: Role = Role.USER


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    address: str
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
