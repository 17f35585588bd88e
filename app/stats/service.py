
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
from app.config import settings
from app.models.user import User
from app.models.store import Store
from app.models.rating import Rating
from app.stats.aggregates import average_rating, rating_distribution, rating_percentages, merge_recent_activity

def _count(db: Session, model) -> int:
    return db.query(func.count(model.id)).scalar() or 0

def recent_activity(db: Session) -> list[dict]:
    ratings = (db.query(Rating)
                 .options(joinedload(Rating.user), joinedload(Rating.store))
                 .order_by(Rating.created_at.desc(), Rating.id.desc())
                 .limit(settings.recent_ratings_limit)
                 .all())
    stores = (db.query(Store)
                .options(joinedload(Store.owner))
                .order_by(Store.created_at.desc(), Store.id.desc())
                .limit(settings.recent_stores_limit)
                .all())
    return merge_recent_activity(ratings, stores, limit=settings.recent_activity_limit)

def admin_stats(db: Session) -> dict:
    return {
        "userCount": _count(db, User),
        "storeCount": _count(db, Store),
        "ratingCount": _count(db, Rating),
        "recentActivity": recent_activity(db),
    }

def store_performance(store: Store, ratings: list[Rating]) -> dict:
    values = [r.rating for r in ratings]
    distribution = rating_distribution(values)
    return {
        "id": store.id,
        "name": store.name,
        "totalRatings": len(values),
        "averageRating": average_rating(values),
        "ratingDistribution": distribution,
        "ratingPercentages": rating_percentages(distribution),
    }

def store_owner_stats(db: Session, owner_id: int) -> dict:
    stores = db.query(Store).filter(Store.owner_id == owner_id).order_by(Store.name, Store.id).all()
    store_ids = [s.id for s in stores]

    ratings: list[Rating] = []
    if store_ids:
        ratings = (db.query(Rating)
                     .options(joinedload(Rating.user), joinedload(Rating.store))
                     .filter(Rating.store_id.in_(store_ids))
                     .order_by(Rating.created_at.desc(), Rating.id.desc())
                     .all())

    by_store: dict[int, list[Rating]] = {sid: [] for sid in store_ids}
    for r in ratings:
        by_store[r.store_id].append(r)

    return {
        "storeCount": len(stores),
        "totalRatings": len(ratings),
        "averageRating": average_rating(r.rating for r in ratings),
        "storePerformance": [store_performance(s, by_store[s.id]) for s in stores],
        "recentRatings": ratings[:settings.recent_ratings_limit],
    }
