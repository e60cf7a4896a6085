from sqlalchemy import Column, String, Text, Integer, Numeric, Float, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.models._common import new_id, utcnow


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    original_price = Column(Numeric(10, 2), nullable=True)
    image = Column(String(500), nullable=True)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    brand = Column(String(255), nullable=True)

    rating = Column(Float, nullable=False, default=0)
    reviews = Column(Integer, nullable=False, default=0)
    in_stock = Column(Boolean, nullable=False, default=True)
    stock_quantity = Column(Integer, nullable=False, default=0)
    features = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)
    is_todays_deals = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    category = relationship("CategoryModel", lazy="joined")
