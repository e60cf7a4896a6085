# app/repos/order_repo.py
from datetime import datetime

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def get_order(self, order_id: str, user_id: str | None = None) -> OrderModel | None:
        # user_id ustawiony = zapytanie ograniczone do wlasciciela
        stmt = select(OrderModel).where(OrderModel.id == order_id)
        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_orders(self, user_id: str | None = None) -> tuple[list[OrderModel], int]:
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc())
        count_stmt = select(func.count()).select_from(OrderModel)
        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
            count_stmt = count_stmt.where(OrderModel.user_id == user_id)

        rows = self.db.execute(stmt).scalars().all()
        return list(rows), self.db.execute(count_stmt).scalar_one()

    def update_order(self, order: OrderModel, data: dict) -> OrderModel:
        for key, value in data.items():
            setattr(order, key, value)
        self.db.commit()
        self.db.refresh(order)
        return order

    def delete_order(self, order: OrderModel):
        self.db.delete(order)
        self.db.commit()

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(OrderModel)).scalar_one()

    def recent(self, limit: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel).order_by(OrderModel.created_at.desc()).limit(limit)
            ).scalars().all()
        )

    def created_since(self, start: datetime) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.created_at >= start)
                .order_by(OrderModel.created_at.asc())
            ).scalars().all()
        )

    def total_revenue(self):
        return self.db.execute(select(func.coalesce(func.sum(OrderModel.total_amount), 0))).scalar_one()

    def count_by_status(self) -> dict[str, int]:
        rows = self.db.execute(
            select(OrderModel.status, func.count()).group_by(OrderModel.status)
        ).all()
        return {status: count for status, count in rows}

    def rollback(self):
        self.db.rollback()
