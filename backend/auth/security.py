"""Password hashing (passlib/bcrypt) and signed tokens (PyJWT)."""
import time

import jwt
from passlib.context import CryptContext

from utils.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    BCRYPT_ROUNDS,
    JWT_ALGORITHM,
    JWT_SECRET,
    PASSWORD_RESET_EXPIRE_MINUTES,
)

ACCESS_SCOPE = "access"
RESET_SCOPE = "password_reset"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except ValueError:
        # Unrecognized or malformed hash.
        return False


def _make_token(sub: str, version: int, scope: str, ttl_minutes: float) -> str:
    now = int(time.time())
    payload = {
        "sub": sub,
        "ver": version,
        "scope": scope,
        "iat": now,
        "exp": now + int(ttl_minutes * 60),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def make_access_token(user_id: str, session_version: int) -> str:
    return _make_token(user_id, session_version, ACCESS_SCOPE, ACCESS_TOKEN_EXPIRE_MINUTES)


def make_reset_token(user_id: str, session_version: int) -> str:
    """Short-lived token for the password reset link. Spent once the password changes."""
    return _make_token(user_id, session_version, RESET_SCOPE, PASSWORD_RESET_EXPIRE_MINUTES)


def decode_token(token: str, scope: str) -> dict | None:
    """Return the claims of a valid, unexpired token with the given scope, else None."""
    try:
        data = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None
    if data.get("scope") != scope or "sub" not in data or "ver" not in data:
        return None
    return data
