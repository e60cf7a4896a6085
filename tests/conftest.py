import os

# konfiguracja musi byc ustawiona zanim zaimportujemy app.*
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_identity_client, get_lock_service, get_notification_service
from app.data.database import Base, SessionLocal, engine
from app.data.models import CategoryModel, ProductModel, SettingModel, UserRoleModel
from app.main import app
from app.services.notification_service import NotificationService, ADMIN_WHATSAPP_KEY

from tests.fakes import ADMIN, FakeIdentityClient, InMemoryLockService


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def identity_client():
    return FakeIdentityClient()


@pytest.fixture
def lock_service():
    return InMemoryLockService()


@pytest.fixture
def notification_service():
    return NotificationService()


@pytest.fixture
def client(identity_client, lock_service, notification_service):
    app.dependency_overrides[get_identity_client] = lambda: identity_client
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_notification_service] = lambda: notification_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(db):
    db.add(UserRoleModel(user_id=ADMIN.id, role="admin"))
    db.commit()
    return {"Authorization": "Bearer admin-token"}


@pytest.fixture
def alice_headers():
    return {"Authorization": "Bearer alice-token"}


@pytest.fixture
def bob_headers():
    return {"Authorization": "Bearer bob-token"}


@pytest.fixture
def whatsapp_destination(db):
    db.add(SettingModel(key=ADMIN_WHATSAPP_KEY, value="+1 (555) 010-2030"))
    db.commit()
    return "15550102030"


@pytest.fixture
def category(db):
    cat = CategoryModel(name="Electronics", description="Gadgets")
    db.add(cat)
    db.commit()
    db.refresh(cat)
    return cat


@pytest.fixture
def make_product(db):
    def _make(name="Keyboard", price="10.00", **kwargs):
        product = ProductModel(name=name, price=Decimal(price), **kwargs)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make
