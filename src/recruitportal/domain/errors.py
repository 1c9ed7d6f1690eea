"""Error taxonomy raised by stores and services and mapped to HTTP at the edge."""

from __future__ import annotations


class RecruitmentError(Exception):
    """Base class for all portal errors."""


class InvalidInputError(RecruitmentError):
    """The caller supplied a request that cannot be served."""


class NotFoundError(RecruitmentError):
    """The addressed record does not exist."""


class StoreFailure(RecruitmentError):
    """The underlying database operation failed."""


class ApplicantStatusError(InvalidInputError):
    """A status transition is not allowed from the current level."""


class AuthenticationError(RecruitmentError):
    """Credentials or bearer token could not be verified."""


class AuthorizationError(RecruitmentError):
    """The caller is authenticated but lacks admin rights."""
