
from dataclasses import dataclass
from fastapi import Request, Depends, HTTPException, status
from sqlalchemy.orm import Session
from jose import JWTError
from app.db.session import SessionLocal
from app.utils.security import token_user_id
from app.models.user import User, Role

COOKIE_NAME = "sr_jwt"
NOT_AUTHENTICATED = "You must be logged in"
FORBIDDEN = "You do not have permission to access this resource"


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of a request."""
    id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return request.cookies.get(COOKIE_NAME)

def _unauthorized(detail: str = NOT_AUTHENTICATED) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = get_token(request)
    if not token:
        raise _unauthorized()

    try:
        user_id = token_user_id(token)
    except (JWTError, ValueError):
        raise _unauthorized("Invalid token")

    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized()

    return user

def require_authenticated(user: User = Depends(get_current_user)) -> Actor:
    # role comes from the database row, never from the token claims
    return Actor(id=user.id, role=Role(user.role))

def require_role(*roles: Role):
    allowed = frozenset(roles)

    def role_dep(actor: Actor = Depends(require_authenticated)) -> Actor:
        if actor.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN)
        return actor

    return role_dep
