"""Pure aggregation helpers over ratings and stores.

Nothing here touches the database; callers pass already-loaded rows.
"""

from datetime import datetime
from typing import Iterable

RATING_VALUES = (1, 2, 3, 4, 5)


def average_rating(values: Iterable[int]) -> float:
    values = list(values)
    if not values:
        return 0
    return sum(values) / len(values)


def rating_distribution(values: Iterable[int]) -> dict[int, int]:
    distribution = {value: 0 for value in RATING_VALUES}
    for value in values:
        if value in distribution:
            distribution[value] += 1
    return distribution


def rating_percentages(distribution: dict[int, int]) -> dict[int, int]:
    total = sum(distribution.values())
    if total == 0:
        return {value: 0 for value in RATING_VALUES}
    return {value: round(distribution.get(value, 0) / total * 100) for value in RATING_VALUES}


def _created(item) -> datetime:
    return item["created_at"] or datetime.min


def merge_recent_activity(ratings, stores, limit: int = 10) -> list[dict]:
    """Combine recent ratings and stores into one feed, newest first.

    Ordering holds across both sources, not just within each one.
    """
    activity = [
        {
            "type": "rating",
            "created_at": r.created_at,
            "user": r.user,
            "store": r.store,
            "rating": r.rating,
        }
        for r in ratings
    ]
    activity.extend(
        {
            "type": "store",
            "created_at": s.created_at,
            "user": s.owner,
            "store": s,
        }
        for s in stores
    )
    activity.sort(key=_created, reverse=True)
    return activity[:limit]
