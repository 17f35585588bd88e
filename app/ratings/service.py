
import logging
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.auth.deps import Actor
from app.auth.permissions import can_delete_rating
from app.models.rating import Rating
from app.schemas.rating import RatingIn
from app.stores.service import get_store_or_404

logger = logging.getLogger(__name__)

def list_ratings(db: Session) -> list[Rating]:
    return db.query(Rating).order_by(Rating.created_at.desc(), Rating.id.desc()).all()

def ratings_by_user(db: Session, user_id: int) -> list[Rating]:
    return (db.query(Rating)
              .filter(Rating.user_id == user_id)
              .order_by(Rating.created_at.desc(), Rating.id.desc())
              .all())

def ratings_by_store(db: Session, store_id: int) -> list[Rating]:
    return (db.query(Rating)
              .filter(Rating.store_id == store_id)
              .order_by(Rating.created_at.desc(), Rating.id.desc())
              .all())

def find_rating(db: Session, user_id: int, store_id: int) -> Rating | None:
    return db.query(Rating).filter(Rating.user_id == user_id, Rating.store_id == store_id).first()

def _apply(rating: Rating, body: RatingIn):
    rating.rating = body.rating
    rating.review = body.review

def submit_rating(db: Session, actor: Actor, body: RatingIn) -> tuple[Rating, bool]:
    """Create the actor's rating for a store, or replace the one they already left.

    Returns the row and whether it was newly created.
    """
    get_store_or_404(db, body.store_id)

    existing = find_rating(db, actor.id, body.store_id)
    if existing:
        _apply(existing, body)
        db.commit()
        db.refresh(existing)
        logger.info("User %s updated rating %s on store %s", actor.id, existing.id, body.store_id)
        return existing, False

    rating = Rating(store_id=body.store_id, user_id=actor.id)
    _apply(rating, body)
    db.add(rating)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent submission inserted the pair first
        db.rollback()
        existing = find_rating(db, actor.id, body.store_id)
        if existing is None:
            raise
        _apply(existing, body)
        db.commit()
        db.refresh(existing)
        return existing, False
    db.refresh(rating)
    logger.info("User %s rated store %s", actor.id, body.store_id)
    return rating, True

def delete_rating(db: Session, actor: Actor, rating_id: int) -> None:
    rating = db.get(Rating, rating_id)
    if not rating:
        raise HTTPException(status_code=404, detail="Rating not found")
    if not can_delete_rating(actor, rating):
        logger.warning("User %s tried to delete rating %s", actor.id, rating_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to delete this rating",
        )
    db.delete(rating)
    db.commit()
    logger.info("User %s deleted rating %s", actor.id, rating_id)
