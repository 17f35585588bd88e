
import logging
from fastapi import HTTPException
from sqlalchemy.orm import Session
from app.models.user import User
from app.models.store import Store
from app.models.rating import Rating

logger = logging.getLogger(__name__)

def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

def delete_user(db: Session, user_id: int) -> None:
    """Delete a user together with everything hanging off them.

    Removes the user's own ratings, every rating on stores they own, those
    stores and finally the user, committing once.
    """
    user = get_user_or_404(db, user_id)
    store_ids = [sid for (sid,) in db.query(Store.id).filter(Store.owner_id == user.id)]
    try:
        db.query(Rating).filter(Rating.user_id == user.id).delete(synchronize_session=False)
        if store_ids:
            db.query(Rating).filter(Rating.store_id.in_(store_ids)).delete(synchronize_session=False)
            db.query(Store).filter(Store.id.in_(store_ids)).delete(synchronize_session=False)
        db.query(User).filter(User.id == user.id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Deleted user %s with %d owned stores", user_id, len(store_ids))
