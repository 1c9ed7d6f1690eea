"""SQLAlchemy-backed stores."""

from recruitportal.infrastructure.stores.applicant_store import ApplicantStore
from recruitportal.infrastructure.stores.submission_store import SubmissionStore

__all__ = ["ApplicantStore", "SubmissionStore"]
