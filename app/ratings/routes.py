
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from app.auth.deps import get_db, require_authenticated, Actor
from app.auth.permissions import can_access_user
from app.schemas.rating import RatingIn, RatingOut
from app.ratings import service

router = APIRouter(prefix="/api/ratings", tags=["ratings"])

@router.get("", response_model=list[RatingOut])
def list_ratings(db: Session = Depends(get_db)):
    return service.list_ratings(db)

@router.get("/user/{user_id}", response_model=list[RatingOut])
def user_ratings(user_id: int, db: Session = Depends(get_db), actor: Actor = Depends(require_authenticated)):
    if not can_access_user(actor, user_id):
        raise HTTPException(status_code=403, detail="You do not have permission to view these ratings")
    return service.ratings_by_user(db, user_id)

@router.get("/store/{store_id}", response_model=list[RatingOut])
def store_ratings(store_id: int, db: Session = Depends(get_db)):
    return service.ratings_by_store(db, store_id)

@router.post("", response_model=RatingOut, status_code=status.HTTP_201_CREATED)
def submit_rating(body: RatingIn, response: Response, db: Session = Depends(get_db), actor: Actor = Depends(require_authenticated)):
    rating, created = service.submit_rating(db, actor, body)
    if not created:
        response.status_code = status.HTTP_200_OK
    return rating

@router.delete("/{rating_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rating(rating_id: int, db: Session = Depends(get_db), actor: Actor = Depends(require_authenticated)):
    service.delete_rating(db, actor, rating_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
