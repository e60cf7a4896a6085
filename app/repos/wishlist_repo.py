# app/repos/wishlist_repo.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session, joinedload

from app.data.models.wishlist_item import WishlistItemModel


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_items(self, user_id: str) -> list[WishlistItemModel]:
        return list(
            self.db.execute(
                select(WishlistItemModel)
                .options(joinedload(WishlistItemModel.product))
                .where(WishlistItemModel.user_id == user_id)
                .order_by(WishlistItemModel.created_at.desc())
            ).scalars().all()
        )

    def find_item(self, user_id: str, product_id: str) -> WishlistItemModel | None:
        return self.db.execute(
            select(WishlistItemModel)
            .options(joinedload(WishlistItemModel.product))
            .where(WishlistItemModel.user_id == user_id, WishlistItemModel.product_id == product_id)
        ).scalar_one_or_none()

    def create_item(self, item: WishlistItemModel) -> WishlistItemModel:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_item(self, user_id: str, item_id: str) -> int:
        res = self.db.execute(
            delete(WishlistItemModel)
            .where(WishlistItemModel.id == item_id, WishlistItemModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return res.rowcount

    def delete_by_product(self, user_id: str, product_id: str) -> int:
        res = self.db.execute(
            delete(WishlistItemModel)
            .where(WishlistItemModel.user_id == user_id, WishlistItemModel.product_id == product_id)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return res.rowcount

    def rollback(self):
        self.db.rollback()
