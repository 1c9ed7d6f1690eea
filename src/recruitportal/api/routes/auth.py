from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from pydantic import BaseModel, Field

from recruitportal.api.dependencies import to_http_exception
from recruitportal.application.services.auth_service import AuthService
from recruitportal.domain.errors import RecruitmentError
from recruitportal.infrastructure.stores.applicant_store import ApplicantStore
from recruitportal.utils.logging_config import LogFiles, Logger

router = APIRouter()

_auth_service = AuthService(ApplicantStore())


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=256)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: Dict[str, Any]


class LogoutResponse(BaseModel):
    message: str


@router.post("/auth/login", response_model=LoginResponse)
def login(req: LoginRequest):
    try:
        result = _auth_service.login(req.email, req.password)
    except RecruitmentError as exc:
        Logger.warning(f"Login failed for {req.email.strip().lower()}: {exc}", file=LogFiles.AUTH)
        raise to_http_exception(exc, fallback_detail="Internal Server Error") from None
    Logger.info(f"Login succeeded for user {result['user']['id']}", file=LogFiles.AUTH)
    return LoginResponse(**result)


@router.post("/auth/logout", response_model=LogoutResponse)
def logout():
    # Tokens are stateless; the client discards its copy.
    return LogoutResponse(message="Logged out successfully")
