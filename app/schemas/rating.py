
from datetime import datetime
from pydantic import BaseModel, Field

class RatingIn(BaseModel):
    store_id: int = Field(strict=True)
    rating: int = Field(ge=1, le=5, strict=True)
    review: str | None = None

class RatingOut(BaseModel):
    id: int
    store_id: int
    user_id: int
    rating: int
    review: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
