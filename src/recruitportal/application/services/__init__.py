from recruitportal.application.services.applicant_service import ApplicantService
from recruitportal.application.services.auth_service import AuthService
from recruitportal.application.services.submission_aggregator import (
    SubmissionAggregator,
    segregate_by_subdomain,
)

__all__ = [
    "ApplicantService",
    "AuthService",
    "SubmissionAggregator",
    "segregate_by_subdomain",
]
