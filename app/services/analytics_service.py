# app/services/analytics_service.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.repos.user_repo import UserRepo

PERIOD_DAYS = {
    "7days": 7,
    "30days": 30,
    "90days": 90,
    "1year": 365,
}


class AnalyticsService:
    """Agregaty dla panelu admina, liczone na zywo z tabel."""

    def __init__(self, db: Session):
        self.orders = OrderRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)

    def dashboard(self, now: datetime | None = None) -> dict:
        now = now or datetime.now(timezone.utc)
        today = now.date()
        start = datetime.combine(today - timedelta(days=6), datetime.min.time(), tzinfo=timezone.utc)

        # dzien -> (przychod, liczba zamowien), ostatnie 7 dni lacznie z dzisiaj
        chart = {(today - timedelta(days=i)).isoformat(): [Decimal("0.00"), 0] for i in range(6, -1, -1)}
        for order in self.orders.created_since(start):
            day = order.created_at.date().isoformat()
            if day in chart:
                chart[day][0] += Decimal(order.total_amount)
                chart[day][1] += 1

        return {
            "overview": {
                "total_orders": self.orders.count(),
                "total_revenue": Decimal(self.orders.total_revenue()),
                "total_products": self.products.count(),
                "total_users": self.users.count_profiles(),
            },
            "recent_orders": self.orders.recent(10),
            "top_products": self.products.top_rated(5),
            "orders_by_status": self.orders.count_by_status(),
            "revenue_chart": [
                {"date": day, "revenue": revenue, "orders": count}
                for day, (revenue, count) in chart.items()
            ],
        }

    def revenue(self, period: str = "7days", now: datetime | None = None) -> list[dict]:
        now = now or datetime.now(timezone.utc)
        # nieznany okres traktujemy jak domyslne 7 dni
        start = now - timedelta(days=PERIOD_DAYS.get(period, 7))

        by_day: dict[str, Decimal] = {}
        for order in self.orders.created_since(start):
            day = order.created_at.date().isoformat()
            by_day[day] = by_day.get(day, Decimal("0.00")) + Decimal(order.total_amount)

        return [{"date": day, "revenue": revenue} for day, revenue in by_day.items()]

    def product_stats(self):
        return self.products.top_rated()
