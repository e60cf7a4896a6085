from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.cart_item import CartItemModel
from app.domain.errors import NotFound, ValidationFailure
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.services.lock_service import LockService, cart_lock_key
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Prosta implementacja cqrs i proste use case dla domeny cart
    commands (add, update, remove, clear) modyfikuja stan
    query (list) tylko odczyt
    kazda operacja jest ograniczona do wierszy wlasciciela (user_id)
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.lock_service = lock_service

    #query - odczyt
    def list_items(self, user_id: str) -> list[CartItemModel]:
        return self.repo.list_items(user_id)

    #commands
    def add_item(self, user_id: str, product_id: str, quantity: int = 1) -> tuple[CartItemModel, bool]:
        """
        Dodaje produkt albo zwieksza ilosc istniejacego wiersza.
        Zwraca (wiersz z produktem, czy_utworzono).

        Wspolbieznosc:
        - lock w redisie na pare (user, produkt)
        - inkrementacja liczona w bazie (quantity = quantity + :qty), bez read-modify-write
        - insert ktory trafi na unique constraint wraca do inkrementacji
        """
        if quantity <= 0:
            raise ValidationFailure("Quantity must be greater than 0")

        if not self.products.get_product(product_id):
            raise NotFound("Product not found")

        with self.lock_service.hold(cart_lock_key(user_id, product_id)):
            created = self._increment_or_insert(user_id, product_id, quantity)

        item = self.repo.find_item(user_id, product_id)
        if created:
            logger.info(f"Dodano produkt {product_id} do koszyka uzytkownika {user_id}")
        else:
            logger.info(
                f"Produkt {product_id} juz jest w koszyku uzytkownika {user_id}, "
                f"zwiekszono ilosc o {quantity} do {item.quantity}"
            )
        return item, created

    def _increment_or_insert(self, user_id: str, product_id: str, quantity: int) -> bool:
        if self.repo.increment_quantity(user_id, product_id, quantity):
            self.repo.commit()
            return False

        try:
            self.repo.add_item(
                CartItemModel(user_id=user_id, product_id=product_id, quantity=quantity)
            )
            self.repo.commit()
            return True
        except IntegrityError:
            # ktos inny wstawil wiersz miedzy UPDATE a INSERT
            self.repo.rollback()
            logger.info(f"Wiersz koszyka ({user_id}, {product_id}) juz istnieje, ponawiam inkrementacje")

        if not self.repo.increment_quantity(user_id, product_id, quantity):
            self.repo.rollback()
            raise RuntimeError(f"Cart row ({user_id}, {product_id}) vanished during upsert")
        self.repo.commit()
        return False

    def update_quantity(self, user_id: str, item_id: str, quantity: int) -> CartItemModel:
        # zero i ujemne odrzucamy tutaj, nie polegamy na walidacji w UI
        if quantity < 1:
            raise ValidationFailure("Quantity must be at least 1")

        rowcount = self.repo.set_quantity(user_id, item_id, quantity)
        if rowcount == 0:
            self.repo.rollback()
            raise NotFound("Cart item not found")

        self.repo.commit()
        logger.info(f"Zmieniono ilosc w wierszu koszyka {item_id} na {quantity}")

        return self.repo.get_item(user_id, item_id)

    def remove_item(self, user_id: str, item_id: str):
        rowcount = self.repo.delete_item(user_id, item_id)

        # wiersz innego usera wyglada tak samo jak nieistniejacy
        if rowcount == 0:
            self.repo.rollback()
            raise NotFound("Cart item not found")

        self.repo.commit()
        logger.info(f"Usunieto wiersz koszyka {item_id} uzytkownika {user_id}")

    def clear_cart(self, user_id: str) -> int:
        removed = self.repo.clear(user_id)
        self.repo.commit()
        logger.info(f"Wyczyszczono koszyk uzytkownika {user_id} ({removed} pozycji)")
        return removed
