from sqlalchemy.orm import Session

from app.data.models.user import ProfileModel
from app.domain.errors import NotFound
from app.domain.schemas import ProfileUpdate, ProfileOut
from app.repos.user_repo import UserRepo
from app.services.identity_client import Identity, IdentityClient
from app.utils.logging import get_logger

logger = get_logger(__name__)

PROFILE_FIELDS = ("email", "full_name", "phone", "address", "avatar_url", "created_at", "updated_at")


def _profile_out(user_id: str, profile: ProfileModel | None, roles: list[str]) -> ProfileOut:
    data = {field: getattr(profile, field) for field in PROFILE_FIELDS} if profile else {}
    return ProfileOut(id=user_id, roles=roles, **data)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def list_users(self) -> list[ProfileOut]:
        profiles = self.repo.list_profiles()
        roles = self.repo.roles_map([p.id for p in profiles])
        return [_profile_out(p.id, p, roles.get(p.id, [])) for p in profiles]

    def get_me(self, identity: Identity) -> ProfileOut:
        profile = self.repo.get_profile(identity.id)
        out = _profile_out(identity.id, profile, self.repo.roles_for(identity.id))
        if out.email is None:
            out.email = identity.email
        return out

    def update_me(self, identity: Identity, payload: ProfileUpdate) -> ProfileOut:
        profile = self.repo.get_profile(identity.id)
        if not profile:
            # profil zakladany przy pierwszej edycji
            profile = ProfileModel(id=identity.id, email=identity.email)

        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(profile, key, value)

        saved = self.repo.save_profile(profile)
        return _profile_out(saved.id, saved, self.repo.roles_for(saved.id))

    def get_user(self, user_id: str) -> ProfileOut:
        profile = self.repo.get_profile(user_id)
        if not profile:
            raise NotFound("User not found")
        return _profile_out(user_id, profile, self.repo.roles_for(user_id))

    def replace_roles(self, user_id: str, roles: list[str]):
        self.repo.replace_roles(user_id, roles)
        logger.info(f"Role uzytkownika {user_id} ustawione na {sorted(set(roles))}")

    def delete_user(self, user_id: str, identity_client: IdentityClient):
        # najpierw provider, lokalne dane dopiero gdy konto faktycznie usuniete
        identity_client.delete_user(user_id)
        self.repo.delete_user_data(user_id)
        logger.info(f"Usunieto uzytkownika {user_id}")
