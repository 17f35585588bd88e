
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from app.schemas.rating import RatingOut
from app.schemas.user import UserOut

class StoreIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    address: str = Field(max_length=400)
    owner_id: int | None = None

class StoreOut(BaseModel):
    id: int
    name: str
    email: str
    address: str
    owner_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True

class StoreListItem(StoreOut):
    average_rating: float = Field(0, alias="averageRating")
    total_ratings: int = Field(0, alias="totalRatings")

    class Config:
        from_attributes = True
        populate_by_name = True

class StoreDetailOut(StoreListItem):
    ratings: list[RatingOut] = []
    owner: UserOut | None = None
