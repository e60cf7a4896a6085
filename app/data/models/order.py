from sqlalchemy import Column, String, Text, DateTime, Numeric, JSON

from app.data.database import Base
from app.data.models._common import new_id, utcnow


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    order_number = Column(String(40), nullable=False, unique=True)

    # snapshot pozycji z chwili zakupu: [{product_id, name, price, quantity}]
    items = Column(JSON, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)

    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=False)
    delivery_address = Column(Text, nullable=False)

    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
