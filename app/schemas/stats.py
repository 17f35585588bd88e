
from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field
from app.schemas.rating import RatingOut
from app.schemas.store import StoreOut
from app.schemas.user import UserOut

class ActivityItem(BaseModel):
    type: Literal["rating", "store"]
    created_at: datetime | None = None
    user: UserOut | None = None
    store: StoreOut
    rating: int | None = None

class AdminStats(BaseModel):
    user_count: int = Field(alias="userCount")
    store_count: int = Field(alias="storeCount")
    rating_count: int = Field(alias="ratingCount")
    recent_activity: list[ActivityItem] = Field(alias="recentActivity")

class StorePerformance(BaseModel):
    id: int
    name: str
    total_ratings: int = Field(alias="totalRatings")
    average_rating: float = Field(alias="averageRating")
    rating_distribution: dict[int, int] = Field(alias="ratingDistribution")
    rating_percentages: dict[int, int] = Field(alias="ratingPercentages")

class RecentRating(RatingOut):
    user: UserOut | None = None
    store: StoreOut | None = None

class StoreOwnerStats(BaseModel):
    store_count: int = Field(alias="storeCount")
    total_ratings: int = Field(alias="totalRatings")
    average_rating: float = Field(alias="averageRating")
    store_performance: list[StorePerformance] = Field(alias="storePerformance")
    recent_ratings: list[RecentRating] = Field(alias="recentRatings")
