"""Application ports (interfaces) used by the application layer."""

from .submission_ports import ApplicantRepositoryPort, SubmissionRepositoryPort

__all__ = [
    "ApplicantRepositoryPort",
    "SubmissionRepositoryPort",
]
