
from pydantic import BaseModel, EmailStr, Field
from app.schemas.user import UserOut

class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

class AuthOut(BaseModel):
    user: UserOut
    access_token: str
    token_type: str = "bearer"
