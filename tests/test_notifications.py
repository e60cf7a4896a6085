from decimal import Decimal
from urllib.parse import unquote

from app.domain.schemas import InvoiceIn, InvoiceItemIn
from app.services.notification_service import build_whatsapp_url, format_invoice_message

INVOICE = {
    "order_number": "ORD-ABC-12345678",
    "customer_name": "Alice Smith",
    "customer_email": "alice@test.com",
    "customer_phone": "600100200",
    "delivery_address": "Main St 1, Warsaw",
    "items": [
        {"name": "Keyboard", "quantity": 2, "price": "10.00"},
        {"name": "Mouse", "quantity": 1, "price": "5.00"},
    ],
    "total_amount": "25.00",
}


def test_invoice_message_lists_items_and_total():
    message = format_invoice_message(InvoiceIn(**INVOICE))

    assert "Order #: ORD-ABC-12345678" in message
    assert "• Keyboard x2 - $20.00" in message
    assert "• Mouse x1 - $5.00" in message
    assert "*Total Amount:* $25.00" in message
    assert "Main St 1, Warsaw" in message


def test_whatsapp_url_keeps_only_digits():
    url = build_whatsapp_url("+48 (600) 100-200", "a b&c")

    assert url == "https://wa.me/48600100200?text=a%20b%26c"


def test_invoice_endpoint_returns_link(client, alice_headers, whatsapp_destination):
    resp = client.post("/notifications/invoice", json=INVOICE, headers=alice_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["whatsapp_url"].startswith(f"https://wa.me/{whatsapp_destination}?text=")
    assert "ORD-ABC-12345678" in unquote(body["whatsapp_url"])


def test_invoice_without_destination_is_503(client, alice_headers):
    resp = client.post("/notifications/invoice", json=INVOICE, headers=alice_headers)

    assert resp.status_code == 503


def test_invoice_requires_auth(client):
    assert client.post("/notifications/invoice", json=INVOICE).status_code == 401


def test_invoice_item_total_uses_quantity():
    summary = InvoiceIn(**{**INVOICE, "items": [InvoiceItemIn(name="Cable", quantity=3, price=Decimal("1.10"))]})

    assert "• Cable x3 - $3.30" in format_invoice_message(summary)
