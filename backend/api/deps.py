"""FastAPI dependencies: bearer token to user and Actor."""
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from auth.service import authenticate_token
from booking_core.actors import Actor, require_admin
from db import get_db
from models.user import User

# auto_error=False so a missing token surfaces as our AuthenticationError (401 with a code).
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """The signed-in user, loaded fresh from the database."""
    return authenticate_token(db, token)


def get_current_actor(user: User = Depends(get_current_user)) -> Actor:
    return Actor.from_user(user)


def get_optional_actor(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Actor | None:
    """Actor when a token is sent, None for anonymous callers. A bad token is still a 401."""
    if not token:
        return None
    return Actor.from_user(authenticate_token(db, token))


def get_admin_actor(actor: Actor = Depends(get_current_actor)) -> Actor:
    return require_admin(actor)
