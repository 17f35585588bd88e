
import logging
from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.auth.deps import Actor
from app.auth.permissions import can_manage_store, resolve_store_owner
from app.models.user import User
from app.models.store import Store
from app.models.rating import Rating
from app.schemas.store import StoreIn
from app.stats.aggregates import average_rating

logger = logging.getLogger(__name__)

def _store_fields(store: Store) -> dict:
    return {
        "id": store.id,
        "name": store.name,
        "email": store.email,
        "address": store.address,
        "owner_id": store.owner_id,
        "created_at": store.created_at,
        "updated_at": store.updated_at,
    }

def list_stores(db: Session, name: str | None = None, address: str | None = None) -> list[dict]:
    summary = (db.query(Rating.store_id,
                        func.avg(Rating.rating).label("average"),
                        func.count(Rating.id).label("total"))
                 .group_by(Rating.store_id)
                 .subquery())
    query = (db.query(Store, summary.c.average, summary.c.total)
               .outerjoin(summary, summary.c.store_id == Store.id))
    if name:
        query = query.filter(Store.name.ilike(f"%{name}%"))
    if address:
        query = query.filter(Store.address.ilike(f"%{address}%"))
    return [
        {**_store_fields(store), "averageRating": float(average or 0), "totalRatings": total or 0}
        for store, average, total in query.order_by(Store.name, Store.id).all()
    ]

def get_store_or_404(db: Session, store_id: int) -> Store:
    store = db.get(Store, store_id)
    if not store:
        raise HTTPException(status_code=404, detail="Store not found")
    return store

def store_detail(db: Session, store_id: int) -> dict:
    store = get_store_or_404(db, store_id)
    ratings = list(store.ratings)
    return {
        **_store_fields(store),
        "ratings": ratings,
        "owner": store.owner,
        "averageRating": average_rating(r.rating for r in ratings),
        "totalRatings": len(ratings),
    }

def get_managed_store(db: Session, actor: Actor, store_id: int, action: str) -> Store:
    """Load a store the actor is about to change, or fail with 404/403."""
    store = get_store_or_404(db, store_id)
    if not can_manage_store(actor, store):
        logger.warning("User %s tried to %s store %s owned by %s", actor.id, action, store.id, store.owner_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You do not have permission to {action} this store",
        )
    return store

def _owner_id_for(db: Session, actor: Actor, requested: int | None, current: int | None = None) -> int:
    owner_id = resolve_store_owner(actor, requested)
    if owner_id is None:
        owner_id = current
    if owner_id is None:
        raise HTTPException(status_code=400, detail="owner_id is required")
    if owner_id != actor.id and db.get(User, owner_id) is None:
        raise HTTPException(status_code=400, detail="Owner not found")
    return owner_id

def create_store(db: Session, actor: Actor, body: StoreIn) -> Store:
    store = Store(
        name=body.name,
        email=body.email,
        address=body.address,
        owner_id=_owner_id_for(db, actor, body.owner_id),
    )
    db.add(store)
    db.commit()
    db.refresh(store)
    logger.info("User %s created store %s for owner %s", actor.id, store.id, store.owner_id)
    return store

def update_store(db: Session, actor: Actor, store: Store, body: StoreIn) -> Store:
    store.owner_id = _owner_id_for(db, actor, body.owner_id, current=store.owner_id)
    store.name = body.name
    store.email = body.email
    store.address = body.address
    db.commit()
    db.refresh(store)
    logger.info("User %s updated store %s", actor.id, store.id)
    return store

def delete_store(db: Session, actor: Actor, store: Store) -> None:
    store_id = store.id
    try:
        db.query(Rating).filter(Rating.store_id == store_id).delete(synchronize_session=False)
        db.query(Store).filter(Store.id == store_id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("User %s deleted store %s", actor.id, store_id)
