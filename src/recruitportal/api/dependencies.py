"""Shared FastAPI dependencies and error translation."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from recruitportal.domain.errors import (
    ApplicantStatusError,
    AuthenticationError,
    AuthorizationError,
    InvalidInputError,
    NotFoundError,
    RecruitmentError,
    StoreFailure,
)
from recruitportal.infrastructure.security import decode_access_token
from recruitportal.utils.logging_config import LogFiles, Logger

_bearer_scheme = HTTPBearer(auto_error=False)

# Most specific first: ApplicantStatusError is also an InvalidInputError.
_STATUS_BY_ERROR = (
    (ApplicantStatusError, status.HTTP_409_CONFLICT),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (StoreFailure, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def to_http_exception(exc: RecruitmentError, *, fallback_detail: str = "Request failed") -> HTTPException:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            # Store details stay in the error log.
            detail = fallback_detail if code >= 500 else str(exc)
            return HTTPException(status_code=code, detail=detail)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=fallback_detail)


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Dict[str, Any]:
    """Accept only a valid bearer token whose ``admin`` claim is true."""
    try:
        if credentials is None or credentials.scheme.lower() != "bearer":
            raise AuthenticationError("Authentication required")
        try:
            claims = decode_access_token(credentials.credentials)
        except AuthenticationError:
            Logger.warning("Rejected invalid or expired token", file=LogFiles.AUTH)
            raise AuthenticationError("Invalid or expired token") from None
        if not claims.get("admin"):
            Logger.warning(f"Non-admin token for user {claims.get('sub')}", file=LogFiles.AUTH)
            raise AuthorizationError("Access denied. Admins only.")
    except RecruitmentError as exc:
        raise to_http_exception(exc) from None
    return claims
