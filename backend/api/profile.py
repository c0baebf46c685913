"""Profile API routes: view and edit the signed-in user's profile and credentials."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.auth import token_response
from api.deps import get_current_user
from auth.service import change_email, change_password
from db import get_db
from models.user import User
from repositories.user_repository import update_profile
from schemas.auth import TokenResponse
from schemas.users import EmailChange, PasswordChange, ProfileResponse, ProfileUpdate

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
def get_profile(user: User = Depends(get_current_user)) -> ProfileResponse:
    return ProfileResponse.model_validate(user)


@router.patch("", response_model=ProfileResponse)
def patch_profile(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """Update name, phone and vehicle type. Email and role are not editable here."""
    updates = body.model_dump(exclude_unset=True)
    if "name" in updates and not (updates["name"] or "").strip():
        updates.pop("name")
    user = update_profile(db, user, updates)
    LOG.info("PROFILE_UPDATED user=%s fields=%s", user.id, sorted(updates))
    return ProfileResponse.model_validate(user)


@router.post("/password", response_model=TokenResponse)
def post_password(
    body: PasswordChange,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TokenResponse:
    """Change password (current password required). Returns a new token; other sessions end."""
    auth = change_password(
        db,
        user,
        current_password=body.current_password,
        new_password=body.new_password,
        confirm_password=body.confirm_password,
    )
    return token_response(auth)


@router.post("/email", response_model=TokenResponse)
def post_email(
    body: EmailChange,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TokenResponse:
    auth = change_email(db, user, current_password=body.current_password, new_email=body.new_email)
    return token_response(auth)
