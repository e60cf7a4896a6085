# app/api/deps.py
from dataclasses import dataclass

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import AuthenticationMissing, AuthenticationInvalid, AuthorizationDenied
from app.repos.settings_repo import SettingsRepo
from app.repos.user_repo import UserRepo
from app.services.identity_client import Identity, IdentityClient
from app.services.lock_service import LockService
from app.services.notification_service import NotificationService, ADMIN_WHATSAPP_KEY

ADMIN = "admin"


@dataclass(frozen=True)
class Authorized:
    identity: Identity
    role: str


@dataclass(frozen=True)
class Forbidden:
    identity: Identity
    role: str


def require_role(db: Session, identity: Identity, role: str) -> Authorized | Forbidden:
    """Jedyne miejsce gdzie sprawdzamy role, handlery dostaja gotowy wynik."""
    if UserRepo(db).has_role(identity.id, role):
        return Authorized(identity, role)
    return Forbidden(identity, role)


def get_identity_client() -> IdentityClient:
    return IdentityClient()


def get_lock_service() -> LockService:
    return LockService()


def get_notification_service() -> NotificationService:
    return NotificationService()


def current_identity(
    authorization: str | None = Header(default=None),
    identity_client: IdentityClient = Depends(get_identity_client),
) -> Identity:
    # bez naglowka odpadamy zanim dotkniemy bazy
    if not authorization:
        raise AuthenticationMissing()

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationInvalid()

    return identity_client.get_user(token.strip())


def admin_check(
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
) -> Authorized | Forbidden:
    return require_role(db, identity, ADMIN)


def require_admin(check: Authorized | Forbidden = Depends(admin_check)) -> Identity:
    if isinstance(check, Forbidden):
        raise AuthorizationDenied()
    return check.identity


def get_notification_destination(db: Session = Depends(get_db)) -> str | None:
    # czytane raz na request i wstrzykiwane dalej
    return SettingsRepo(db).get_value(ADMIN_WHATSAPP_KEY)
