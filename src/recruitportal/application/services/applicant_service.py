"""Status updates on applicants."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from recruitportal.application.ports import ApplicantRepositoryPort
from recruitportal.domain.applicant_status import StatusAction, apply_action
from recruitportal.domain.errors import InvalidInputError, NotFoundError
from recruitportal.domain.question_schema import parse_domain

logger = logging.getLogger(__name__)

LEVEL_FIELDS = ("tech", "design", "management")


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    cleaned: Dict[str, Any] = {}
    for name in LEVEL_FIELDS:
        value = fields.get(name)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError(f"{name} must be an integer")
        cleaned[name] = value
    notes = fields.get("admin_notes")
    if notes is not None:
        if not isinstance(notes, str):
            raise InvalidInputError("admin_notes must be a string")
        cleaned["admin_notes"] = notes
    return cleaned


class ApplicantService:
    def __init__(self, applicants: ApplicantRepositoryPort):
        self._applicants = applicants

    def update_user_status(self, regno: Optional[str], fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply only the provided fields to the user with ``regno``.

        Any integer level is accepted here; the promote/reject/reset rules
        live in ``apply_transition``.
        """
        regno = (regno or "").strip()
        if not regno:
            raise InvalidInputError("regno is required")
        updates = _clean_fields(fields)

        user = self._applicants.update_user_fields(regno, updates)
        if user is None:
            raise NotFoundError(f"no user with regno {regno}")
        logger.info("Status updated for %s: %s", regno, sorted(updates))
        return user

    def apply_transition(self, regno: str, domain: str, action: str) -> Dict[str, Any]:
        """Promote, reject or reset one domain level, then persist it."""
        try:
            field = parse_domain(domain).value
            step = StatusAction(action)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from None

        user = self._applicants.get_user_by_regno(regno)
        if user is None:
            raise NotFoundError(f"no user with regno {regno}")
        new_level = apply_action(step, int(user.get(field) or 0))
        return self.update_user_status(regno, {field: new_level})
