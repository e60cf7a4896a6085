from app.data import seed as seed_module
from app.data.models import CategoryModel, ProductModel, ProfileModel, UserRoleModel
from app.data.seed import seed, seed_test_users, CATEGORIES, PRODUCTS
from app.repos.settings_repo import SettingsRepo
from app.services.identity_client import Identity
from app.services.notification_service import ADMIN_WHATSAPP_KEY

from tests.fakes import FakeIdentityClient


def test_seed_fills_empty_catalog_once(db):
    seed(db, admin_user_ids=["admin-9"])
    seed(db, admin_user_ids=["admin-9"])

    assert db.query(CategoryModel).count() == len(CATEGORIES)
    assert db.query(ProductModel).count() == len(PRODUCTS)
    assert db.query(UserRoleModel).filter_by(user_id="admin-9", role="admin").count() == 1


def test_seeded_products_belong_to_categories(db):
    seed(db)

    monitor = db.query(ProductModel).filter_by(name="Monitor").one()
    assert monitor.category.name == "Electronics"
    assert monitor.is_todays_deals is True


def test_seed_stores_admin_whatsapp_once(db, monkeypatch):
    monkeypatch.setattr(seed_module, "ADMIN_WHATSAPP", "+48 600 100 200")
    seed(db)

    monkeypatch.setattr(seed_module, "ADMIN_WHATSAPP", "+48 999 999 999")
    seed(db)

    assert SettingsRepo(db).get_value(ADMIN_WHATSAPP_KEY) == "+48 600 100 200"


class ProvisioningIdentityClient(FakeIdentityClient):
    def __init__(self, existing=()):
        super().__init__()
        self.existing = set(existing)
        self.created = []

    def create_user(self, email, password, full_name=None):
        if email in self.existing:
            return None
        self.created.append((email, full_name))
        return Identity(id=f"id-{email.split('@')[0]}", email=email)


def test_seed_test_users_creates_accounts_with_roles(db):
    identity = ProvisioningIdentityClient(existing={"jane@test.com"})

    results = seed_test_users(db, identity)

    statuses = {r["email"]: r["status"] for r in results}
    assert statuses == {
        "admin@test.com": "created",
        "john@test.com": "created",
        "jane@test.com": "already_exists",
        "mike@test.com": "created",
    }
    assert len(identity.created) == 3

    db.expire_all()
    assert db.query(UserRoleModel).filter_by(user_id="id-admin", role="admin").count() == 1
    assert db.query(UserRoleModel).filter_by(user_id="id-john", role="user").count() == 1
    assert db.get(ProfileModel, "id-mike").full_name == "Mike Johnson"
    assert db.query(UserRoleModel).count() == 3
