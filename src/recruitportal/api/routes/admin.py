from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from recruitportal.api.dependencies import require_admin, to_http_exception
from recruitportal.application.services.applicant_service import ApplicantService
from recruitportal.application.services.submission_aggregator import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    SubmissionAggregator,
)
from recruitportal.domain.applicant_status import StatusAction
from recruitportal.domain.errors import RecruitmentError
from recruitportal.domain.question_schema import Domain
from recruitportal.infrastructure.stores.applicant_store import ApplicantStore
from recruitportal.infrastructure.stores.submission_store import SubmissionStore
from recruitportal.utils.logging_config import LogFiles, Logger

router = APIRouter(dependencies=[Depends(require_admin)])

_applicant_store = ApplicantStore()
_submission_store = SubmissionStore()
_aggregator = SubmissionAggregator(_applicant_store, _submission_store)
_applicant_service = ApplicantService(_applicant_store)


class SubdomainStatusResponse(BaseModel):
    success: bool = True
    tech: Dict[str, Dict[str, List[str]]]
    design: Dict[str, Dict[str, List[str]]]
    management: Dict[str, Dict[str, List[str]]]


class UserListResponse(BaseModel):
    success: bool = True
    page: int
    limit: int
    data: List[Dict[str, Any]]


class UpdateStatusRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    regno: Optional[str] = None
    tech: Optional[int] = None
    design: Optional[int] = None
    management: Optional[int] = None
    admin_notes: Optional[str] = Field(default=None, alias="adminNotes")


class UpdateStatusResponse(BaseModel):
    success: bool = True
    message: str
    user: Dict[str, Any]


@router.get("/admin/subdomain-status", response_model=SubdomainStatusResponse)
def subdomain_status():
    try:
        report = _aggregator.subdomain_submission_status()
    except RecruitmentError as exc:
        raise to_http_exception(exc, fallback_detail="Error segregating submissions") from None
    return SubdomainStatusResponse(**report)


@router.get("/admin/users", response_model=UserListResponse)
def list_users(
    domain: Optional[str] = None,
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
):
    try:
        users = _aggregator.aggregate_users_with_tasks(domain=domain, page=page, limit=limit)
    except RecruitmentError as exc:
        raise to_http_exception(exc, fallback_detail="Error fetching users") from None
    Logger.info(f"Listed {len(users)} users domain={domain or 'All'} page={page}", file=LogFiles.ADMIN)
    return UserListResponse(page=page, limit=limit, data=users)


def _domain_listing(domain: Domain, page: int, limit: int) -> UserListResponse:
    try:
        users = _aggregator.list_domain_users(domain.value, page=page, limit=limit)
    except RecruitmentError as exc:
        raise to_http_exception(exc, fallback_detail="Error fetching users") from None
    Logger.info(f"Listed {len(users)} {domain.value} users page={page}", file=LogFiles.ADMIN)
    return UserListResponse(page=page, limit=limit, data=users)


@router.get("/admin/users/tech", response_model=UserListResponse)
def list_tech_users(page: int = Query(DEFAULT_PAGE, ge=1), limit: int = Query(DEFAULT_LIMIT, ge=1)):
    return _domain_listing(Domain.TECH, page, limit)


@router.get("/admin/users/design", response_model=UserListResponse)
def list_design_users(page: int = Query(DEFAULT_PAGE, ge=1), limit: int = Query(DEFAULT_LIMIT, ge=1)):
    return _domain_listing(Domain.DESIGN, page, limit)


@router.get("/admin/users/management", response_model=UserListResponse)
def list_management_users(
    page: int = Query(DEFAULT_PAGE, ge=1), limit: int = Query(DEFAULT_LIMIT, ge=1)
):
    return _domain_listing(Domain.MANAGEMENT, page, limit)


@router.put("/admin/updatestatus", response_model=UpdateStatusResponse)
def update_status(req: UpdateStatusRequest):
    fields = req.model_dump(exclude_unset=True, exclude={"regno"})
    try:
        user = _applicant_service.update_user_status(req.regno, fields)
    except RecruitmentError as exc:
        Logger.warning(f"Status update rejected for regno={req.regno}: {exc}", file=LogFiles.ADMIN)
        raise to_http_exception(exc, fallback_detail="Error updating status") from None
    Logger.info(f"Status updated for regno={req.regno} fields={sorted(fields)}", file=LogFiles.ADMIN)
    return UpdateStatusResponse(message="Status updated", user=user)


@router.post("/admin/users/{regno}/{domain}/{action}", response_model=UpdateStatusResponse)
def transition_status(regno: str, domain: Domain, action: StatusAction):
    try:
        user = _applicant_service.apply_transition(regno, domain.value, action.value)
    except RecruitmentError as exc:
        Logger.warning(
            f"{action.value} on {domain.value} refused for regno={regno}: {exc}", file=LogFiles.ADMIN
        )
        raise to_http_exception(exc, fallback_detail="Error updating status") from None
    Logger.info(f"{action.value} {domain.value} for regno={regno}", file=LogFiles.ADMIN)
    return UpdateStatusResponse(message="Status updated", user=user)
