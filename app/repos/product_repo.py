# app/repos/product_repo.py
from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(
        self,
        category_id: str | None = None,
        search: str | None = None,
        deals: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[ProductModel], int]:
        filters = []
        if category_id:
            filters.append(ProductModel.category_id == category_id)
        if search:
            pattern = f"%{search}%"
            filters.append(
                or_(
                    ProductModel.name.ilike(pattern),
                    ProductModel.description.ilike(pattern),
                    ProductModel.brand.ilike(pattern),
                )
            )
        if deals:
            filters.append(ProductModel.is_todays_deals.is_(True))

        count = self.db.execute(
            select(func.count()).select_from(ProductModel).where(*filters)
        ).scalar_one()

        stmt = select(ProductModel).where(*filters).order_by(ProductModel.created_at.desc())
        if limit is not None:
            stmt = stmt.offset(offset).limit(limit)

        rows = self.db.execute(stmt).unique().scalars().all()
        return list(rows), count

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product: ProductModel, data: dict) -> ProductModel:
        for key, value in data.items():
            setattr(product, key, value)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel):
        self.db.delete(product)
        self.db.commit()

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(ProductModel)).scalar_one()

    def top_rated(self, limit: int | None = None) -> list[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.rating.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).unique().scalars().all())
