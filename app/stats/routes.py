
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.auth.deps import get_db, require_role, Actor
from app.models.user import Role
from app.schemas.stats import AdminStats, StoreOwnerStats
from app.stats.service import admin_stats, store_owner_stats

router = APIRouter(prefix="/api/stats", tags=["stats"])

@router.get("/admin", response_model=AdminStats)
def get_admin_stats(db: Session = Depends(get_db), actor: Actor = Depends(require_role(Role.ADMIN))):
    return admin_stats(db)

@router.get("/store-owner", response_model=StoreOwnerStats)
def get_store_owner_stats(db: Session = Depends(get_db), actor: Actor = Depends(require_role(Role.STORE_OWNER))):
    return store_owner_stats(db, actor.id)
