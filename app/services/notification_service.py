# app/services/notification_service.py
from decimal import Decimal
from urllib.parse import quote

from kombu.exceptions import OperationalError

from app.celery_worker import celery_app
from app.domain.errors import NotificationUnavailable
from app.domain.schemas import InvoiceIn
from app.utils.logging import get_logger

logger = get_logger(__name__)

ADMIN_WHATSAPP_KEY = "admin_whatsapp"
WHATSAPP_BASE_URL = "https://wa.me"


def _money(value: Decimal) -> str:
    return f"${Decimal(value).quantize(Decimal('0.01'))}"


def format_invoice_message(summary: InvoiceIn) -> str:
    items_list = "\n".join(
        f"• {item.name} x{item.quantity} - {_money(item.price * item.quantity)}"
        for item in summary.items
    )

    return "\n".join([
        "🛍️ *NEW ORDER RECEIVED*",
        "",
        f"📋 Order #: {summary.order_number}",
        "",
        "👤 *Customer Information:*",
        f"Name: {summary.customer_name}",
        f"Email: {summary.customer_email}",
        f"Phone: {summary.customer_phone}",
        "",
        "📍 *Delivery Address:*",
        summary.delivery_address,
        "",
        "🛒 *Order Items:*",
        items_list,
        "",
        f"💰 *Total Amount:* {_money(summary.total_amount)}",
        "",
        "_This order was placed through your online store._",
    ])


def build_whatsapp_url(destination: str, message: str) -> str:
    phone_number = "".join(ch for ch in destination if ch.isdigit())
    return f"{WHATSAPP_BASE_URL}/{phone_number}?text={quote(message, safe='')}"


class NotificationService:
    """
    Serwis do wysyłania powiadomień o zamówieniach do admina.
    Link do WhatsAppa budowany jest od razu, zapis wysyłki idzie przez Celery.
    """

    def dispatch_invoice(self, summary: InvoiceIn, destination: str | None) -> str:
        """
        Formatuje fakture i zwraca deep link dla klienta.
        Brak skonfigurowanego numeru admina = NotificationUnavailable.
        """
        if not destination or not any(ch.isdigit() for ch in destination):
            raise NotificationUnavailable("Admin WhatsApp number not configured")

        message = format_invoice_message(summary)
        url = build_whatsapp_url(destination, message)

        try:
            send_invoice_task.delay(summary.order_number, summary.customer_email, destination)
        except OperationalError as e:
            # broker niedostepny, link i tak oddajemy klientowi
            logger.warning(f"Nie udalo sie zakolejkowac powiadomienia {summary.order_number}: {e}")

        logger.info(f"Invoice prepared for order {summary.order_number} ({summary.customer_email})")
        return url


@celery_app.task(name="app.services.notification_service.send_invoice_task")
def send_invoice_task(order_number: str, customer_email: str, destination: str):
    """
    Celery task - zapisuje wysylke faktury.
    Samo dostarczenie robi klient otwierajac link wa.me.
    """
    logger.info(f"[NOTIFICATION] Invoice for order {order_number} ({customer_email}) -> {destination}")

    return {"order_number": order_number, "destination": destination, "status": "sent"}
