
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from app.auth.deps import get_db, require_authenticated, require_role, Actor
from app.auth.permissions import can_access_user
from app.auth.service import register_user
from app.models.user import Role
from app.schemas.user import UserCreate, UserOut
from app.users.service import list_users, get_user_or_404, delete_user

router = APIRouter(prefix="/api/users", tags=["users"])

@router.get("", response_model=list[UserOut])
def get_users(db: Session = Depends(get_db), actor: Actor = Depends(require_role(Role.ADMIN))):
    return list_users(db)

@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreate, db: Session = Depends(get_db), actor: Actor = Depends(require_role(Role.ADMIN))):
    return register_user(db, body.name, body.email, body.password, body.address, role=body.role)

@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db), actor: Actor = Depends(require_authenticated)):
    if not can_access_user(actor, user_id):
        raise HTTPException(status_code=403, detail="You do not have permission to view this user")
    return get_user_or_404(db, user_id)

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_user(user_id: int, db: Session = Depends(get_db), actor: Actor = Depends(require_role(Role.ADMIN))):
    delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
