# src/recruitportal/application/services/submission_aggregator.py
"""
Joins applicants with their task submissions and meetings.

Two views are produced:
- per-domain subdomain cohorts (who submitted, who did not), and
- paginated applicant listings enriched with tasks, the first meeting and
  a ``has_submitted`` flag.

The join is done here over owner-id lookups so the stores stay plain
filter/fetch operations.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from recruitportal.application.ports import ApplicantRepositoryPort, SubmissionRepositoryPort
from recruitportal.domain.applicant_status import status_label
from recruitportal.domain.errors import InvalidInputError
from recruitportal.domain.question_schema import DOMAINS, QUESTION_KEYS, parse_domain
from recruitportal.domain.subdomain import UNSPECIFIED, has_submission, resolve_subdomains

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 1000

Cohorts = Dict[str, Dict[str, List[str]]]


def segregate_by_subdomain(
    tasks: Iterable[Mapping[str, Any]],
    question_keys: Sequence[str],
    domain_type: str = "management",
) -> Cohorts:
    """
    Group task owners by subdomain label and submission status.

    A task with several labels places its owner in every label's bucket;
    a task with none goes to ``unspecified``. Buckets are not deduplicated.
    """
    result: Cohorts = {}
    for task in tasks:
        labels = resolve_subdomains(task, domain_type) or [UNSPECIFIED]
        status = "submitted" if has_submission(task, question_keys) else "not_submitted"
        owner = str(task.get("user_id"))
        for label in labels:
            bucket = result.setdefault(label, {"submitted": [], "not_submitted": []})
            bucket[status].append(owner)
    return result


def _check_page(page: int, limit: int) -> int:
    if int(page) < 1:
        raise InvalidInputError("page must be >= 1")
    if int(limit) < 1:
        raise InvalidInputError("limit must be > 0")
    return (int(page) - 1) * int(limit)


def _domain_filter(domain: Optional[str]) -> Optional[str]:
    value = (domain or "").strip()
    if not value or value.lower() == "all":
        return None
    try:
        return parse_domain(value).value
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from None


def _first(items: List[Dict[str, Any]], key: str) -> Any:
    return items[0].get(key) if items else None


def _attach_status_labels(user: Dict[str, Any]) -> None:
    user["status_labels"] = {d: status_label(int(user.get(d) or 0)) for d in DOMAINS}


def _resolve_management_subdomains(tasks: List[Dict[str, Any]]) -> None:
    for task in tasks:
        task["subdomain"] = resolve_subdomains(task, "management")


class SubmissionAggregator:
    def __init__(
        self,
        applicants: ApplicantRepositoryPort,
        submissions: SubmissionRepositoryPort,
        question_keys: Optional[Mapping[str, Sequence[str]]] = None,
    ):
        self._applicants = applicants
        self._submissions = submissions
        self._question_keys = dict(question_keys or QUESTION_KEYS)

    def subdomain_submission_status(self) -> Dict[str, Cohorts]:
        report: Dict[str, Cohorts] = {}
        for domain in DOMAINS:
            tasks = self._submissions.list_tasks(domain)
            report[domain] = segregate_by_subdomain(
                tasks, self._question_keys[domain], domain_type=domain
            )
            logger.info("Segregated %d %s tasks into %d buckets", len(tasks), domain, len(report[domain]))
        return report

    def aggregate_users_with_tasks(
        self,
        domain: Optional[str] = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> List[Dict[str, Any]]:
        """Applicants newest first with all task types, meetings and derived fields."""
        offset = _check_page(page, limit)
        users = self._applicants.list_users(
            domain=_domain_filter(domain), offset=offset, limit=int(limit)
        )
        user_ids = [u["id"] for u in users]

        tasks_by_domain = {
            d: self._submissions.list_tasks_for_users(d, user_ids) for d in DOMAINS
        }
        meetings = self._submissions.list_meetings_for_users(user_ids)

        for user in users:
            uid = user["id"]
            for d in DOMAINS:
                user[f"{d}_tasks"] = list(tasks_by_domain[d].get(uid, []))
            user["meetings"] = list(meetings.get(uid, []))
            user["meeting_time"] = _first(user["meetings"], "scheduled_time")
            user["meet_status"] = _first(user["meetings"], "status")
            _attach_status_labels(user)
            user["has_submitted"] = any(
                has_submission(task, self._question_keys[d])
                for d in DOMAINS
                for task in user[f"{d}_tasks"]
            )
            _resolve_management_subdomains(user["management_tasks"])

        logger.info("Aggregated %d users (domain=%s page=%s limit=%s)", len(users), domain, page, limit)
        return users

    def list_domain_users(
        self,
        domain: str,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> List[Dict[str, Any]]:
        """Applicants of one domain joined with that domain's tasks and their meetings."""
        resolved = _domain_filter(domain)
        if resolved is None:
            raise InvalidInputError("a single domain is required")
        offset = _check_page(page, limit)
        users = self._applicants.list_users(domain=resolved, offset=offset, limit=int(limit))
        user_ids = [u["id"] for u in users]

        tasks = self._submissions.list_tasks_for_users(resolved, user_ids)
        meetings = self._submissions.list_meetings_for_users(user_ids)

        key = f"{resolved}_tasks"
        for user in users:
            uid = user["id"]
            user[key] = list(tasks.get(uid, []))
            user["meetings"] = list(meetings.get(uid, []))
            user["meeting_time"] = _first(user["meetings"], "scheduled_time")
            user["meet_status"] = _first(user["meetings"], "status")
            _attach_status_labels(user)
            if resolved == "management":
                _resolve_management_subdomains(user[key])
        return users
