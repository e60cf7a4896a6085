#app/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api.deps import current_identity, get_lock_service
from app.data.database import get_db
from app.domain.schemas import CartItemIn, CartQuantityIn, CartItemOut, MessageOut
from app.services.cart_service import CartService
from app.services.identity_client import Identity
from app.services.lock_service import LockService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session, lock_service: LockService):
    return CartService(db=db, lock_service=lock_service)


@router.get("", response_model=List[CartItemOut])
def get_cart(
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    return get_service(db, lock_service).list_items(identity.id)


@router.post("", response_model=CartItemOut)
def add_item(
    payload: CartItemIn,
    response: Response,
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    item, created = get_service(db, lock_service).add_item(
        user_id=identity.id,
        product_id=payload.product_id,
        quantity=payload.quantity,
    )
    # 201 dla nowego wiersza, 200 gdy tylko zwiekszona ilosc
    response.status_code = 201 if created else 200
    return item


@router.put("/{item_id}", response_model=CartItemOut)
def update_item(
    item_id: str,
    payload: CartQuantityIn,
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    return get_service(db, lock_service).update_quantity(identity.id, item_id, payload.quantity)


@router.delete("", response_model=MessageOut)
def clear_cart(
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    get_service(db, lock_service).clear_cart(identity.id)
    return {"message": "Cart cleared successfully"}


@router.delete("/{item_id}", response_model=MessageOut)
def remove_item(
    item_id: str,
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    get_service(db, lock_service).remove_item(identity.id, item_id)
    return {"message": "Item removed from cart"}
