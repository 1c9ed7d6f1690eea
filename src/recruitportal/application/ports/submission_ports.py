"""Read/write interfaces the application services depend on."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class ApplicantRepositoryPort(Protocol):
    def list_users(
        self,
        *,
        domain: Optional[str] = None,
        offset: int = 0,
        limit: int = 1000,
        admin: Optional[bool] = None,
        oldest_first: bool = False,
    ) -> List[Dict[str, Any]]: ...

    def get_user_by_regno(self, regno: str) -> Optional[Dict[str, Any]]: ...

    def get_user_by_email(
        self, email: str, *, include_password_hash: bool = False
    ) -> Optional[Dict[str, Any]]: ...

    def update_user_fields(
        self, regno: str, fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]: ...


@runtime_checkable
class SubmissionRepositoryPort(Protocol):
    def list_tasks(self, domain: str) -> List[Dict[str, Any]]: ...

    def list_tasks_for_users(
        self, domain: str, user_ids: Iterable[str]
    ) -> Dict[str, List[Dict[str, Any]]]: ...

    def list_meetings_for_users(
        self, user_ids: Iterable[str]
    ) -> Dict[str, List[Dict[str, Any]]]: ...
