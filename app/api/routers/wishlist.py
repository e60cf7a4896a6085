# app/api/routers/wishlist.py
from typing import List, Union

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api.deps import current_identity
from app.data.database import get_db
from app.domain.schemas import WishlistIn, WishlistItemOut, WishlistExistingOut, MessageOut
from app.services.identity_client import Identity
from app.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def get_service(db: Session):
    return WishlistService(db)


@router.get("", response_model=List[WishlistItemOut])
def get_wishlist(identity: Identity = Depends(current_identity), db: Session = Depends(get_db)):
    return get_service(db).list_items(identity.id)


@router.post("", response_model=Union[WishlistItemOut, WishlistExistingOut])
def add_to_wishlist(
    payload: WishlistIn,
    response: Response,
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
):
    item, created = get_service(db).add_item(identity.id, payload.product_id)
    if not created:
        return WishlistExistingOut(
            message="Product already in wishlist",
            data=WishlistItemOut.model_validate(item),
        )

    response.status_code = 201
    return WishlistItemOut.model_validate(item)


@router.delete("/product/{product_id}", response_model=MessageOut)
def remove_product(
    product_id: str,
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
):
    get_service(db).remove_product(identity.id, product_id)
    return {"message": "Product removed from wishlist"}


@router.delete("/{item_id}", response_model=MessageOut)
def remove_item(
    item_id: str,
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
):
    get_service(db).remove_item(identity.id, item_id)
    return {"message": "Item removed from wishlist"}
