from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session

from app.data.models.user import ProfileModel, UserRoleModel
from app.data.models.cart_item import CartItemModel
from app.data.models.wishlist_item import WishlistItemModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_profile(self, user_id: str) -> ProfileModel | None:
        return self.db.get(ProfileModel, user_id)

    def list_profiles(self) -> list[ProfileModel]:
        return list(
            self.db.execute(select(ProfileModel).order_by(ProfileModel.created_at.desc())).scalars().all()
        )

    def save_profile(self, profile: ProfileModel) -> ProfileModel:
        self.db.add(profile)
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def count_profiles(self) -> int:
        return self.db.execute(select(func.count()).select_from(ProfileModel)).scalar_one()

    def has_role(self, user_id: str, role: str) -> bool:
        found = self.db.execute(
            select(UserRoleModel.id).where(UserRoleModel.user_id == user_id, UserRoleModel.role == role)
        ).first()
        return found is not None

    def roles_for(self, user_id: str) -> list[str]:
        return list(
            self.db.execute(
                select(UserRoleModel.role).where(UserRoleModel.user_id == user_id).order_by(UserRoleModel.role)
            ).scalars().all()
        )

    def roles_map(self, user_ids: list[str]) -> dict[str, list[str]]:
        if not user_ids:
            return {}
        rows = self.db.execute(
            select(UserRoleModel.user_id, UserRoleModel.role)
            .where(UserRoleModel.user_id.in_(user_ids))
            .order_by(UserRoleModel.role)
        ).all()
        result: dict[str, list[str]] = {}
        for user_id, role in rows:
            result.setdefault(user_id, []).append(role)
        return result

    def replace_roles(self, user_id: str, roles: list[str]):
        # usun wszystkie i wstaw od nowa, w jednej transakcji
        self.db.execute(delete(UserRoleModel).where(UserRoleModel.user_id == user_id))
        for role in dict.fromkeys(roles):
            self.db.add(UserRoleModel(user_id=user_id, role=role))
        self.db.commit()

    def delete_user_data(self, user_id: str):
        self.db.execute(delete(UserRoleModel).where(UserRoleModel.user_id == user_id))
        self.db.execute(delete(CartItemModel).where(CartItemModel.user_id == user_id))
        self.db.execute(delete(WishlistItemModel).where(WishlistItemModel.user_id == user_id))
        self.db.execute(delete(ProfileModel).where(ProfileModel.id == user_id))
        self.db.commit()
