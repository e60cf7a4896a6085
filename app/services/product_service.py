# app/services/product_service.py
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel
from app.domain.errors import NotFound, ValidationFailure
from app.domain.schemas import ProductIn, ProductUpdate
from app.repos.category_repo import CategoryRepo
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.categories = CategoryRepo(db)

    def list_products(self, category=None, search=None, deals=False, limit=None, offset=0):
        if limit is not None and limit < 1:
            raise ValidationFailure("limit must be positive")
        if offset < 0:
            raise ValidationFailure("offset must not be negative")
        return self.repo.list_products(category, search, deals, limit, offset)

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.repo.get_product(product_id)

    def create_product(self, payload: ProductIn) -> ProductModel:
        self._check_category(payload.category_id)
        product = self.repo.create_product(ProductModel(**payload.model_dump()))
        logger.info(f"Utworzono produkt {product.id} ({product.name})")
        return product

    def update_product(self, product_id: str, payload: ProductUpdate) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        data = payload.model_dump(exclude_unset=True)
        if "category_id" in data:
            self._check_category(data["category_id"])

        updated = self.repo.update_product(product, data)
        logger.info(f"Zaktualizowano produkt {product_id}: {sorted(data)}")
        return updated

    def delete_product(self, product_id: str):
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        self.repo.delete_product(product)
        logger.info(f"Usunieto produkt {product_id}")

    def _check_category(self, category_id: str | None):
        if category_id and not self.categories.get_category(category_id):
            raise ValidationFailure("Category does not exist")
