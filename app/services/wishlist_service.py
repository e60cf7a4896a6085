# app/services/wishlist_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.wishlist_item import WishlistItemModel
from app.domain.errors import NotFound
from app.repos.product_repo import ProductRepo
from app.repos.wishlist_repo import WishlistRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class WishlistService:
    def __init__(self, db: Session):
        self.repo = WishlistRepo(db)
        self.products = ProductRepo(db)

    def list_items(self, user_id: str) -> list[WishlistItemModel]:
        return self.repo.list_items(user_id)

    def add_item(self, user_id: str, product_id: str) -> tuple[WishlistItemModel, bool]:
        """Idempotentne: drugi raz ten sam produkt zwraca istniejacy wiersz."""
        existing = self.repo.find_item(user_id, product_id)
        if existing:
            return existing, False

        if not self.products.get_product(product_id):
            raise NotFound("Product not found")

        try:
            item = self.repo.create_item(WishlistItemModel(user_id=user_id, product_id=product_id))
        except IntegrityError:
            # rownolegly request dodal ten sam produkt
            self.repo.rollback()
            return self.repo.find_item(user_id, product_id), False

        logger.info(f"Dodano produkt {product_id} do wishlisty uzytkownika {user_id}")
        return self.repo.find_item(user_id, product_id), True

    def remove_item(self, user_id: str, item_id: str):
        if self.repo.delete_item(user_id, item_id) == 0:
            raise NotFound("Wishlist item not found")

    def remove_product(self, user_id: str, product_id: str):
        if self.repo.delete_by_product(user_id, product_id) == 0:
            raise NotFound("Wishlist item not found")
