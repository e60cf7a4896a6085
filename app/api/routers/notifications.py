# app/api/routers/notifications.py
from fastapi import APIRouter, Depends

from app.api.deps import current_identity, get_notification_destination, get_notification_service
from app.domain.schemas import InvoiceIn, InvoiceOut
from app.services.identity_client import Identity
from app.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("/invoice", response_model=InvoiceOut)
def send_invoice(
    payload: InvoiceIn,
    identity: Identity = Depends(current_identity),
    notification_service: NotificationService = Depends(get_notification_service),
    destination: str | None = Depends(get_notification_destination),
):
    url = notification_service.dispatch_invoice(payload, destination)
    return {"success": True, "whatsapp_url": url, "message": "Invoice prepared successfully"}
