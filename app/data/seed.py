# app/data/seed.py
from decimal import Decimal

from app.data.database import SessionLocal, init_db
from app.data.models import CategoryModel, ProductModel, ProfileModel, UserRoleModel
from app.repos.settings_repo import SettingsRepo
from app.services.identity_client import IdentityClient
from app.services.notification_service import ADMIN_WHATSAPP_KEY
from app.utils.settings import ADMIN_WHATSAPP
from app.utils.logging import get_logger

logger = get_logger(__name__)

CATEGORIES = [
    {"name": "Electronics", "description": "Phones, laptops and accessories"},
    {"name": "Home", "description": "Furniture and decor"},
    {"name": "Books", "description": "Fiction and non-fiction"},
]

PRODUCTS = [
    {"name": "Keyboard", "price": Decimal("199.99"), "brand": "Keyz", "category": "Electronics", "stock_quantity": 25, "rating": 4.5},
    {"name": "Mouse", "price": Decimal("49.50"), "brand": "Clicky", "category": "Electronics", "stock_quantity": 40, "rating": 4.1},
    {"name": "Monitor", "price": Decimal("899.00"), "brand": "Pixel", "category": "Electronics", "stock_quantity": 8, "rating": 4.7, "is_todays_deals": True},
    {"name": "Desk Lamp", "price": Decimal("35.00"), "brand": "Glow", "category": "Home", "stock_quantity": 60, "rating": 3.9},
]

# konta demo, tylko dla srodowisk dev/test
TEST_USERS = [
    {"email": "admin@test.com", "password": "Admin123!", "full_name": "Admin User", "role": "admin"},
    {"email": "john@test.com", "password": "User123!", "full_name": "John Doe", "role": "user"},
    {"email": "jane@test.com", "password": "User123!", "full_name": "Jane Smith", "role": "user"},
    {"email": "mike@test.com", "password": "User123!", "full_name": "Mike Johnson", "role": "user"},
]


def seed(db=None, admin_user_ids: list[str] | None = None):
    """
    Wypelnia pusta baze danymi startowymi.
    Nie nadpisuje niczego: kategorie i produkty tylko gdy tabele puste.
    """
    own_session = db is None
    db = db or SessionLocal()
    try:
        if not db.query(CategoryModel).first():
            by_name = {}
            for data in CATEGORIES:
                category = CategoryModel(**data)
                db.add(category)
                by_name[category.name] = category
            db.flush()

            for data in PRODUCTS:
                data = dict(data)
                category = by_name[data.pop("category")]
                db.add(ProductModel(category_id=category.id, **data))
            logger.info(f"Seeded {len(CATEGORIES)} categories and {len(PRODUCTS)} products")

        for user_id in admin_user_ids or []:
            exists = db.query(UserRoleModel).filter_by(user_id=user_id, role="admin").first()
            if not exists:
                db.add(UserRoleModel(user_id=user_id, role="admin"))

        db.commit()

        settings = SettingsRepo(db)
        if ADMIN_WHATSAPP and settings.get_value(ADMIN_WHATSAPP_KEY) is None:
            settings.set_value(ADMIN_WHATSAPP_KEY, ADMIN_WHATSAPP)
    finally:
        if own_session:
            db.close()


def seed_test_users(db, identity_client: IdentityClient, users: list[dict] = TEST_USERS) -> list[dict]:
    """
    Zaklada konta demo u providera i nadaje im role.
    Konto ktore juz istnieje jest pomijane (status already_exists).
    """
    results = []
    for user in users:
        identity = identity_client.create_user(user["email"], user["password"], user["full_name"])
        if identity is None:
            results.append({"email": user["email"], "status": "already_exists"})
            continue

        db.add(UserRoleModel(user_id=identity.id, role=user["role"]))
        db.merge(ProfileModel(id=identity.id, email=identity.email, full_name=user["full_name"]))
        db.commit()

        logger.info(f"Created test user {user['email']} ({user['role']})")
        results.append({"email": user["email"], "status": "created", "id": identity.id, "role": user["role"]})
    return results


if __name__ == "__main__":
    import sys

    args = sys.argv[1:]
    with_test_users = "--test-users" in args
    init_db()
    seed(admin_user_ids=[a for a in args if a != "--test-users"])

    if with_test_users:
        session = SessionLocal()
        try:
            for result in seed_test_users(session, IdentityClient()):
                logger.info(f"{result['email']}: {result['status']}")
        finally:
            session.close()
