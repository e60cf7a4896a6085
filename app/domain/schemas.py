# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import List, Literal, Optional, Any
from decimal import Decimal
from datetime import datetime


OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]
Role = Literal["admin", "user"]


class MessageOut(BaseModel):
    message: str


# ---------- Categories ----------

class CategoryIn(BaseModel):
    """Schema dla tworzenia kategorii."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = None


class CategoryRef(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class CategoryOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------- Products ----------

class ProductIn(BaseModel):
    """Schema dla tworzenia produktu (admin)."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    original_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    image: Optional[str] = None
    category_id: Optional[str] = None
    brand: Optional[str] = None
    rating: float = Field(0, ge=0, le=5)
    reviews: int = Field(0, ge=0)
    in_stock: bool = True
    stock_quantity: int = Field(0, ge=0)
    features: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    is_todays_deals: bool = False


class ProductUpdate(BaseModel):
    """Czesciowa aktualizacja, zmieniamy tylko pola przeslane w body."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    original_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    image: Optional[str] = None
    category_id: Optional[str] = None
    brand: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    reviews: Optional[int] = Field(None, ge=0)
    in_stock: Optional[bool] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    features: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    is_todays_deals: Optional[bool] = None


class ProductOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    original_price: Optional[Decimal] = None
    image: Optional[str] = None
    category_id: Optional[str] = None
    category: Optional[CategoryRef] = None
    brand: Optional[str] = None
    rating: float
    reviews: int
    in_stock: bool
    stock_quantity: int
    features: List[str]
    tags: List[str]
    is_todays_deals: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductListOut(BaseModel):
    data: List[ProductOut]
    count: int


# ---------- Cart ----------

class CartItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, gt=0, description="Ilosc produktu (musi byc > 0)")


class CartQuantityIn(BaseModel):
    quantity: int = Field(..., gt=0, description="Nowa ilosc (musi byc > 0)")


class CartItemOut(BaseModel):
    """Schema dla wiersza koszyka razem z produktem (response)."""

    id: str
    user_id: str
    product_id: str
    quantity: int
    created_at: datetime
    product: ProductOut

    model_config = ConfigDict(from_attributes=True)


# ---------- Wishlist ----------

class WishlistIn(BaseModel):
    product_id: str = Field(..., min_length=1)


class WishlistItemOut(BaseModel):
    id: str
    user_id: str
    product_id: str
    created_at: datetime
    product: ProductOut

    model_config = ConfigDict(from_attributes=True)


class WishlistExistingOut(BaseModel):
    message: str
    data: WishlistItemOut


# ---------- Orders ----------

class OrderItemOut(BaseModel):
    product_id: str
    name: str
    price: Decimal
    quantity: int


class OrderCreate(BaseModel):
    """
    Schema dla skladania zamowienia.
    items i total_amount od klienta sa opcjonalne i nie decyduja o kwocie,
    serwer zawsze liczy total z koszyka.
    """

    items: Optional[List[Any]] = None
    total_amount: Optional[Decimal] = None
    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_email: EmailStr
    customer_phone: str = Field(..., min_length=1, max_length=50)
    delivery_address: str = Field(..., min_length=1)


class OrderUpdate(BaseModel):
    status: Optional[OrderStatus] = None
    customer_name: Optional[str] = Field(None, min_length=1, max_length=255)
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = Field(None, min_length=1, max_length=50)
    delivery_address: Optional[str] = Field(None, min_length=1)


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: str
    user_id: str
    order_number: str
    items: List[OrderItemOut]
    total_amount: Decimal
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderCreatedOut(OrderOut):
    invoice_url: Optional[str] = None


class OrderListOut(BaseModel):
    data: List[OrderOut]
    count: int


# ---------- Users ----------

class ProfileUpdate(BaseModel):
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    avatar_url: Optional[str] = Field(None, max_length=500)


class ProfileOut(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    roles: List[str] = Field(default_factory=list)


class RolesIn(BaseModel):
    roles: List[Role]


# ---------- Notifications ----------

class InvoiceItemIn(BaseModel):
    name: str
    quantity: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0)


class InvoiceIn(BaseModel):
    """Podsumowanie zamowienia wysylane do admina."""

    order_number: str = Field(..., min_length=1)
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    items: List[InvoiceItemIn]
    total_amount: Decimal = Field(..., ge=0)


class InvoiceOut(BaseModel):
    success: bool
    whatsapp_url: str
    message: str


# ---------- Analytics ----------

class OverviewOut(BaseModel):
    total_orders: int
    total_revenue: Decimal
    total_products: int
    total_users: int


class RevenuePoint(BaseModel):
    date: str
    revenue: Decimal


class DailyRevenuePoint(RevenuePoint):
    orders: int


class ProductStatsOut(BaseModel):
    id: str
    name: str
    rating: float
    reviews: int
    stock_quantity: int

    model_config = ConfigDict(from_attributes=True)


class DashboardOut(BaseModel):
    overview: OverviewOut
    recent_orders: List[OrderOut]
    top_products: List[ProductOut]
    orders_by_status: dict[str, int]
    revenue_chart: List[DailyRevenuePoint]
