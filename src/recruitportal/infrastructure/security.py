"""Password hashing and access tokens for the admin portal.

Passwords use Argon2id; access tokens are HS256 JWTs signed with
``RECRUITPORTAL_ACCESS_TOKEN_SECRET``.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import jwt
from argon2 import PasswordHasher
from argon2 import exceptions as argon_exc
from loguru import logger

from recruitportal.config import Settings, get_settings
from recruitportal.domain.errors import AuthenticationError

ALGORITHM = "HS256"

PASSWORD_HASHER = PasswordHasher()


def hash_password(password: str) -> str:
    return PASSWORD_HASHER.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    if not password_hash:
        return False
    try:
        return PASSWORD_HASHER.verify(password_hash, password)
    except argon_exc.VerifyMismatchError:
        return False
    except argon_exc.InvalidHashError:
        logger.warning("Stored password hash is not a valid argon2 hash")
        return False


def encode_access_token(
    user: Dict[str, Any], *, settings: Optional[Settings] = None, now: Optional[int] = None
) -> str:
    settings = settings or get_settings()
    issued = int(now if now is not None else time.time())
    payload = {
        "sub": str(user["id"]),
        "email": user.get("email"),
        "admin": bool(user.get("admin")),
        "iat": issued,
        "exp": issued + int(settings.access_token_ttl_seconds),
    }
    return jwt.encode(payload, settings.access_token_secret, algorithm=ALGORITHM)


def decode_access_token(token: str, *, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Validate signature and expiry; raises AuthenticationError on any failure."""
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.access_token_secret,
            algorithms=[ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("token expired") from None
    except jwt.InvalidTokenError:
        raise AuthenticationError("invalid token") from None
    return payload
