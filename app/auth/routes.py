
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from app.auth.deps import get_db, get_current_user, COOKIE_NAME
from app.config import settings
from app.models.user import User, Role
from app.schemas.auth import LoginIn, AuthOut
from app.schemas.user import RegisterIn, UserOut
from app.auth.service import register_user, authenticate, issue_token

router = APIRouter(prefix="/api", tags=["auth"])

def set_auth_cookie(response: Response, token: str):
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="Lax",
        secure=settings.app_env == "prod",
        path="/",
        max_age=settings.access_token_expire_minutes * 60,
    )

@router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
def register(body: RegisterIn, response: Response, db: Session = Depends(get_db)):
    # self-registration never chooses a role
    user = register_user(db, body.name, body.email, body.password, body.address, role=Role.USER)
    token = issue_token(user)
    set_auth_cookie(response, token)
    return AuthOut(user=UserOut.model_validate(user), access_token=token)

@router.post("/login", response_model=AuthOut)
def login(body: LoginIn, response: Response, db: Session = Depends(get_db)):
    user = authenticate(db, body.email, body.password)
    token = issue_token(user)
    set_auth_cookie(response, token)
    return AuthOut(user=UserOut.model_validate(user), access_token=token)

@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(COOKIE_NAME, path="/")
    return {"ok": True}

@router.get("/user", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)):
    return user
