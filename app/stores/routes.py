
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from app.auth.deps import get_db, require_role, Actor
from app.auth.permissions import STORE_MANAGERS
from app.models.store import Store
from app.schemas.store import StoreIn, StoreOut, StoreListItem, StoreDetailOut
from app.stores import service

router = APIRouter(prefix="/api/stores", tags=["stores"])

manage_stores = require_role(*STORE_MANAGERS)

def managed_store(action: str):
    # runs before the request body is parsed, so ownership wins over validation
    def store_dep(store_id: int, db: Session = Depends(get_db), actor: Actor = Depends(manage_stores)) -> Store:
        return service.get_managed_store(db, actor, store_id, action)

    return store_dep

@router.get("", response_model=list[StoreListItem])
def list_stores(name: str | None = None, address: str | None = None, db: Session = Depends(get_db)):
    return service.list_stores(db, name=name, address=address)

@router.get("/{store_id}", response_model=StoreDetailOut)
def get_store(store_id: int, db: Session = Depends(get_db)):
    return service.store_detail(db, store_id)

@router.post("", response_model=StoreOut, status_code=status.HTTP_201_CREATED)
def create_store(body: StoreIn, db: Session = Depends(get_db), actor: Actor = Depends(manage_stores)):
    return service.create_store(db, actor, body)

@router.put("/{store_id}", response_model=StoreOut)
def update_store(
    body: StoreIn,
    store: Store = Depends(managed_store("update")),
    db: Session = Depends(get_db),
    actor: Actor = Depends(manage_stores),
):
    return service.update_store(db, actor, store, body)

@router.delete("/{store_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_store(
    store: Store = Depends(managed_store("delete")),
    db: Session = Depends(get_db),
    actor: Actor = Depends(manage_stores),
):
    service.delete_store(db, actor, store)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
