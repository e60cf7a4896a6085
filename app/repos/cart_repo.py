# app/repos/cart_repo.py
from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session, joinedload

from app.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_items(self, user_id: str) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .options(joinedload(CartItemModel.product))
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.created_at.desc())
            ).scalars().all()
        )

    def get_item(self, user_id: str, item_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel)
            .options(joinedload(CartItemModel.product))
            .where(CartItemModel.id == item_id, CartItemModel.user_id == user_id)
        ).scalar_one_or_none()

    def find_item(self, user_id: str, product_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel)
            .options(joinedload(CartItemModel.product))
            .where(CartItemModel.user_id == user_id, CartItemModel.product_id == product_id)
        ).scalar_one_or_none()

    def increment_quantity(self, user_id: str, product_id: str, quantity: int) -> int:
        # UPDATE carts SET quantity = quantity + :qty, baza liczy nowa wartosc sama
        res = self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.user_id == user_id, CartItemModel.product_id == product_id)
            .values(quantity=CartItemModel.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount

    def add_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def set_quantity(self, user_id: str, item_id: str, quantity: int) -> int:
        res = self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.id == item_id, CartItemModel.user_id == user_id)
            .values(quantity=quantity)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount

    def delete_item(self, user_id: str, item_id: str) -> int:
        res = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.id == item_id, CartItemModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount

    def clear(self, user_id: str) -> int:
        res = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
