from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.models._common import new_id, utcnow


class CartItemModel(Base):
    __tablename__ = "carts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    product = relationship("ProductModel")

    # jeden wiersz na pare (user, produkt), kolejne dodania tylko zwiekszaja quantity
    __table_args__ = (UniqueConstraint("user_id", "product_id", name="u_cart_user_product"),)
