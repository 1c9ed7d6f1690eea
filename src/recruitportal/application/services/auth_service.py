"""Admin login."""

from __future__ import annotations

import logging
from typing import Any, Dict

from recruitportal.application.ports import ApplicantRepositoryPort
from recruitportal.domain.errors import AuthenticationError, NotFoundError
from recruitportal.infrastructure.security import encode_access_token, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, applicants: ApplicantRepositoryPort):
        self._applicants = applicants

    def login(self, email: str, password: str) -> Dict[str, Any]:
        user = self._applicants.get_user_by_email(email, include_password_hash=True)
        if user is None:
            raise NotFoundError("User not found")
        if not verify_password(user.pop("password_hash", ""), password):
            raise AuthenticationError("Invalid password")

        logger.info("Issued access token for user %s (admin=%s)", user["id"], user["admin"])
        return {
            "access_token": encode_access_token(user),
            "token_type": "bearer",
            "user": {
                "id": user["id"],
                "username": user["username"],
                "email": user["email"],
                "admin": user["admin"],
            },
        }
