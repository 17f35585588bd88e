
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from app.models.user import User, Role
from app.utils.security import hash_password, verify_password, create_access_token

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already registered"

def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()

def register_user(db: Session, name: str, email: str, password: str, address: str, role: Role = Role.USER) -> User:
    if get_user_by_email(db, email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=EMAIL_TAKEN)
    user = User(name=name, email=email, password=hash_password(password), address=address, role=role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # another registration claimed the email after the lookup
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=EMAIL_TAKEN)
    db.refresh(user)
    logger.info("Registered user %s with role %s", user.id, user.role.value)
    return user

def authenticate(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password):
        logger.warning("Failed login for %s", email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    return user

def issue_token(user: User) -> str:
    return create_access_token(str(user.id))
