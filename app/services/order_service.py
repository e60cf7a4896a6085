# app/services/order_service.py
import secrets
import string
import time
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel
from app.domain.errors import NotFound, ValidationFailure
from app.domain.schemas import OrderCreate, InvoiceIn, InvoiceItemIn
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.services.checkout_saga import CheckoutSaga, SagaStep
from app.services.notification_service import NotificationService
from app.utils.logging import get_logger

logger = get_logger(__name__)

_BASE36 = string.digits + string.ascii_uppercase
ORDER_SUFFIX_LENGTH = 8
CENT = Decimal("0.01")


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_order_number() -> str:
    """ORD-<czas w ms base36>-<losowy sufiks>, sufiks z CSPRNG (36^8 kombinacji)."""
    timestamp = to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(ORDER_SUFFIX_LENGTH))
    return f"ORD-{timestamp}-{suffix}"


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    Tworzenie zamówienia to saga: koszyk -> snapshot -> zapis -> czyszczenie koszyka -> powiadomienie.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.notification_service = notification_service or NotificationService()

    def create_order(
        self,
        user_id: str,
        payload: OrderCreate,
        notification_destination: str | None = None,
    ) -> tuple[OrderModel, str | None]:
        """
        Use Case: Tworzenie zamówienia z koszyka.

        Zwraca (zamówienie, link do faktury albo None gdy powiadomienie się nie udało).
        Błąd przy pobraniu koszyka albo zapisie = brak zamówienia.
        Błąd przy czyszczeniu koszyka albo powiadomieniu = tylko log.
        """
        context = {
            "user_id": user_id,
            "payload": payload,
            "destination": notification_destination,
            "invoice_url": None,
        }

        saga = CheckoutSaga(steps=[
            SagaStep("FetchCart", self._fetch_cart),
            SagaStep("SnapshotItems", self._snapshot_items),
            SagaStep("PersistOrder", self._persist_order, compensate=self._delete_order),
            SagaStep("ClearCart", self._clear_cart, critical=False),
            SagaStep("NotifyAdmin", self._notify_admin, critical=False),
        ])
        saga.run(context)

        order = context["order"]
        if saga.failed_steps:
            logger.warning(f"Order {order.order_number} created with failed steps: {saga.failed_steps}")
        return order, context["invoice_url"]

    # ---- kroki sagi ----

    def _fetch_cart(self, ctx: dict):
        rows = self.cart_repo.list_items(ctx["user_id"])
        if not rows:
            raise ValidationFailure("Cart is empty")
        ctx["cart_rows"] = rows

    def _snapshot_items(self, ctx: dict):
        # kopia nazwy i ceny z chwili zakupu, pozniejsze edycje produktu jej nie ruszaja
        items = []
        total = Decimal("0.00")
        for row in ctx["cart_rows"]:
            price = Decimal(row.product.price).quantize(CENT)
            items.append({
                "product_id": row.product_id,
                "name": row.product.name,
                "price": str(price),
                "quantity": row.quantity,
            })
            total += price * row.quantity

        # wysylka zawsze 0
        total = total.quantize(CENT)

        client_total = ctx["payload"].total_amount
        if client_total is not None and Decimal(client_total).quantize(CENT) != total:
            logger.warning(
                f"Client total {client_total} differs from cart total {total} for user {ctx['user_id']}, using cart total"
            )

        ctx["items"] = items
        ctx["total_amount"] = total

    def _persist_order(self, ctx: dict):
        payload = ctx["payload"]
        order = OrderModel(
            user_id=ctx["user_id"],
            order_number=generate_order_number(),
            items=ctx["items"],
            total_amount=ctx["total_amount"],
            customer_name=payload.customer_name,
            customer_email=payload.customer_email,
            customer_phone=payload.customer_phone,
            delivery_address=payload.delivery_address,
            status="pending",
        )
        try:
            ctx["order"] = self.repo.create_order(order)
        except SQLAlchemyError:
            self.repo.rollback()
            raise

        logger.info(f"Order {order.order_number} created for user {ctx['user_id']} total {ctx['total_amount']}")

    def _delete_order(self, ctx: dict):
        order_number = ctx["order"].order_number
        self.repo.delete_order(ctx["order"])
        logger.info(f"Order {order_number} removed by compensation")

    def _clear_cart(self, ctx: dict):
        try:
            self.cart_repo.clear(ctx["user_id"])
            self.cart_repo.commit()
        except SQLAlchemyError:
            self.cart_repo.rollback()
            raise

    def _notify_admin(self, ctx: dict):
        order = ctx["order"]
        summary = InvoiceIn(
            order_number=order.order_number,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            delivery_address=order.delivery_address,
            items=[
                InvoiceItemIn(name=i["name"], quantity=i["quantity"], price=Decimal(i["price"]))
                for i in ctx["items"]
            ],
            total_amount=ctx["total_amount"],
        )
        ctx["invoice_url"] = self.notification_service.dispatch_invoice(summary, ctx["destination"])

    # ---- zapytania i admin ----

    def list_orders(self, user_id: str, is_admin: bool) -> tuple[list[OrderModel], int]:
        # admin widzi wszystko, reszta tylko swoje
        return self.repo.list_orders(None if is_admin else user_id)

    def get_order(self, order_id: str, user_id: str, is_admin: bool) -> OrderModel:
        order = self.repo.get_order(order_id, None if is_admin else user_id)
        if not order:
            raise NotFound("Order not found")
        return order

    def update_order(self, order_id: str, data: dict) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        updated = self.repo.update_order(order, data)
        logger.info(f"Order {updated.order_number} updated: {sorted(data)}")
        return updated

    def delete_order(self, order_id: str):
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        self.repo.delete_order(order)
        logger.info(f"Order {order_id} deleted")
