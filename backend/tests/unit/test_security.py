"""Unit tests: password hashing and token scopes."""
import jwt
import pytest

from auth.security import (
    ACCESS_SCOPE,
    RESET_SCOPE,
    decode_token,
    hash_password,
    make_access_token,
    make_reset_token,
    verify_password,
)
from utils.config import JWT_ALGORITHM, JWT_SECRET

pytestmark = pytest.mark.unit


def test_hash_and_verify():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_against_malformed_hash_is_false():
    assert not verify_password("secret123", "not-a-hash")


def test_access_token_claims():
    claims = decode_token(make_access_token("u-1", 3), ACCESS_SCOPE)
    assert claims["sub"] == "u-1"
    assert claims["ver"] == 3
    assert claims["exp"] > claims["iat"]


def test_scopes_are_not_interchangeable():
    assert decode_token(make_reset_token("u-1", 0), ACCESS_SCOPE) is None
    assert decode_token(make_access_token("u-1", 0), RESET_SCOPE) is None


def test_tampered_and_expired_tokens_rejected():
    assert decode_token("garbage", ACCESS_SCOPE) is None
    forged = jwt.encode({"sub": "u-1", "ver": 0, "scope": ACCESS_SCOPE}, "another-secret-of-enough-length!!", algorithm="HS256")
    assert decode_token(forged, ACCESS_SCOPE) is None
    expired = jwt.encode(
        {"sub": "u-1", "ver": 0, "scope": ACCESS_SCOPE, "iat": 1, "exp": 2},
        JWT_SECRET,
        algorithm=JWT_ALGORITHM,
    )
    assert decode_token(expired, ACCESS_SCOPE) is None
