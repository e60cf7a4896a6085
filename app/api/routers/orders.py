# app/api/routers/orders.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import (
    Authorized,
    Forbidden,
    admin_check,
    current_identity,
    get_notification_destination,
    get_notification_service,
    require_admin,
)
from app.data.database import get_db
from app.domain.schemas import OrderCreate, OrderUpdate, OrderOut, OrderCreatedOut, OrderListOut, MessageOut
from app.services.identity_client import Identity
from app.services.notification_service import NotificationService
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session, notification_service: NotificationService | None = None):
    return OrderService(db, notification_service)


@router.get("", response_model=OrderListOut)
def list_orders(
    check: Authorized | Forbidden = Depends(admin_check),
    db: Session = Depends(get_db),
):
    """Admin widzi wszystkie zamówienia, zwykły user tylko swoje."""
    rows, count = get_service(db).list_orders(check.identity.id, isinstance(check, Authorized))
    return {"data": rows, "count": count}


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    check: Authorized | Forbidden = Depends(admin_check),
    db: Session = Depends(get_db),
):
    return get_service(db).get_order(order_id, check.identity.id, isinstance(check, Authorized))


@router.post("", response_model=OrderCreatedOut, status_code=201)
def create_order(
    payload: OrderCreate,
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
    destination: str | None = Depends(get_notification_destination),
):
    """
    Tworzy zamówienie z aktualnego koszyka.
    Powiadomienie admina jest best-effort, jego błąd nie cofa zamówienia.
    """
    order, invoice_url = get_service(db, notification_service).create_order(identity.id, payload, destination)
    return OrderCreatedOut(**OrderOut.model_validate(order).model_dump(), invoice_url=invoice_url)


@router.put("/{order_id}", response_model=OrderOut)
def update_order(
    order_id: str,
    payload: OrderUpdate,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return get_service(db).update_order(order_id, payload.model_dump(exclude_unset=True))


@router.delete("/{order_id}", response_model=MessageOut)
def delete_order(
    order_id: str,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    get_service(db).delete_order(order_id)
    return {"message": "Order deleted successfully"}
