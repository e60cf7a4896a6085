from sqlalchemy import Column, String, DateTime, UniqueConstraint

from app.data.database import Base
from app.data.models._common import new_id, utcnow


class ProfileModel(Base):
    __tablename__ = "profiles"

    # id z identity providera, nie generujemy go lokalnie
    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=True)
    full_name = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    avatar_url = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class UserRoleModel(Base):
    __tablename__ = "user_roles"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    role = Column(String(20), nullable=False)  # admin, user

    __table_args__ = (UniqueConstraint("user_id", "role", name="u_user_role"),)
