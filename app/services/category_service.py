# app/services/category_service.py
from sqlalchemy.orm import Session

from app.data.models.category import CategoryModel
from app.domain.errors import NotFound
from app.domain.schemas import CategoryIn, CategoryUpdate
from app.repos.category_repo import CategoryRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CategoryService:
    def __init__(self, db: Session):
        self.repo = CategoryRepo(db)

    def list_categories(self) -> list[CategoryModel]:
        return self.repo.list_categories()

    def get_category(self, category_id: str) -> CategoryModel:
        category = self.repo.get_category(category_id)
        if not category:
            raise NotFound("Category not found")
        return category

    def create_category(self, payload: CategoryIn) -> CategoryModel:
        category = self.repo.create_category(CategoryModel(**payload.model_dump()))
        logger.info(f"Utworzono kategorie {category.id} ({category.name})")
        return category

    def update_category(self, category_id: str, payload: CategoryUpdate) -> CategoryModel:
        category = self.get_category(category_id)
        return self.repo.update_category(category, payload.model_dump(exclude_unset=True))

    def delete_category(self, category_id: str):
        category = self.get_category(category_id)
        self.repo.delete_category(category)
        logger.info(f"Usunieto kategorie {category_id}")
