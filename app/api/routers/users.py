from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import current_identity, get_identity_client, require_admin
from app.data.database import get_db
from app.domain.schemas import ProfileOut, ProfileUpdate, RolesIn, MessageOut
from app.services.identity_client import Identity, IdentityClient
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[ProfileOut])
def list_users(admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    return UserService(db).list_users()


@router.get("/me", response_model=ProfileOut)
def get_me(identity: Identity = Depends(current_identity), db: Session = Depends(get_db)):
    return UserService(db).get_me(identity)


@router.put("/me", response_model=ProfileOut)
def update_me(
    payload: ProfileUpdate,
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
):
    return UserService(db).update_me(identity, payload)


@router.get("/{user_id}", response_model=ProfileOut)
def get_user(user_id: str, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    return UserService(db).get_user(user_id)


@router.put("/{user_id}/roles", response_model=MessageOut)
def update_roles(
    user_id: str,
    payload: RolesIn,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    UserService(db).replace_roles(user_id, payload.roles)
    return {"message": "Roles updated successfully"}


@router.delete("/{user_id}", response_model=MessageOut)
def delete_user(
    user_id: str,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
    identity_client: IdentityClient = Depends(get_identity_client),
):
    UserService(db).delete_user(user_id, identity_client)
    return {"message": "User deleted successfully"}
