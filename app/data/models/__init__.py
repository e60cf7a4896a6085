#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.user import ProfileModel, UserRoleModel
from app.data.models.category import CategoryModel
from app.data.models.product import ProductModel
from app.data.models.cart_item import CartItemModel
from app.data.models.wishlist_item import WishlistItemModel
from app.data.models.order import OrderModel
from app.data.models.setting import SettingModel

__all__ = [
    "ProfileModel",
    "UserRoleModel",
    "CategoryModel",
    "ProductModel",
    "CartItemModel",
    "WishlistItemModel",
    "OrderModel",
    "SettingModel",
]
