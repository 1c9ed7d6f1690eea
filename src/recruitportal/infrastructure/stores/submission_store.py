from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete, select

from recruitportal.domain.question_schema import question_keys_for
from recruitportal.infrastructure.stores.models import (
    MEETING_STATUSES,
    TASK_MODELS,
    Base,
    MeetingModel,
)
from recruitportal.infrastructure.stores.sqlalchemy_db import (
    SessionProvider,
    get_db_url,
    translate_store_errors,
)
from recruitportal.utils.logging_config import LogFiles, Logger


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _task_model(domain: str):
    try:
        return TASK_MODELS[domain]
    except KeyError:
        raise ValueError(f"unknown task domain: {domain!r}") from None


class SubmissionStore:
    """Task questionnaires per domain and interview meetings."""

    def __init__(self, db_url: Optional[str] = None, *, auto_create_schema: bool = True):
        self.db_url = db_url or get_db_url()
        self._provider = SessionProvider(self.db_url)
        if auto_create_schema:
            Base.metadata.create_all(self._provider.engine)

    # ------------------------------------------------------------------ tasks

    def add_task(
        self,
        domain: str,
        *,
        user_id: str,
        answers: Optional[Dict[str, List[Any]]] = None,
        subdomain: Any = None,
        is_done: bool = False,
        created_at: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        model = _task_model(domain)
        now = _utcnow()
        row = model(
            user_id=user_id,
            is_done=bool(is_done),
            created_at=created_at or now,
            updated_at=now,
        )
        row.set_answers(answers or {})
        row.set_subdomain(subdomain)
        with translate_store_errors(f"add_task[{domain}]"), self._provider.session() as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._task_to_dict(domain, row)

    def list_tasks(self, domain: str) -> List[Dict[str, Any]]:
        model = _task_model(domain)
        with translate_store_errors(f"list_tasks[{domain}]"), self._provider.session() as session:
            rows = session.execute(
                select(model).order_by(model.created_at, model.id)
            ).scalars().all()
            Logger.debug(f"Loaded {len(rows)} {domain} tasks", file=LogFiles.STORE)
            return [self._task_to_dict(domain, row) for row in rows]

    def list_tasks_for_users(
        self, domain: str, user_ids: Iterable[str]
    ) -> Dict[str, List[Dict[str, Any]]]:
        """Tasks grouped by owner, earliest first within each owner."""
        ids = list(dict.fromkeys(user_ids))
        grouped: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        if not ids:
            return grouped
        model = _task_model(domain)
        with translate_store_errors(f"list_tasks_for_users[{domain}]"), self._provider.session() as session:
            rows = session.execute(
                select(model)
                .where(model.user_id.in_(ids))
                .order_by(model.created_at, model.id)
            ).scalars().all()
            for row in rows:
                grouped[row.user_id].append(self._task_to_dict(domain, row))
        return grouped

    # --------------------------------------------------------------- meetings

    def add_meeting(
        self,
        *,
        user_id: str,
        scheduled_time: datetime,
        end_time: datetime,
        status: str = "scheduled",
        gmeet_link: Optional[str] = None,
        google_event_id: Optional[str] = None,
        interviewer_emails: Iterable[str] = (),
    ) -> Dict[str, Any]:
        if status not in MEETING_STATUSES:
            raise ValueError(f"unknown meeting status: {status!r}")
        row = MeetingModel(
            user_id=user_id,
            scheduled_time=scheduled_time,
            end_time=end_time,
            status=status,
            gmeet_link=gmeet_link,
            google_event_id=google_event_id,
            created_at=_utcnow(),
        )
        row.set_interviewer_emails(list(interviewer_emails))
        with translate_store_errors("add_meeting"), self._provider.session() as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._meeting_to_dict(row)

    def list_meetings_for_users(self, user_ids: Iterable[str]) -> Dict[str, List[Dict[str, Any]]]:
        ids = list(dict.fromkeys(user_ids))
        grouped: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        if not ids:
            return grouped
        with translate_store_errors("list_meetings_for_users"), self._provider.session() as session:
            rows = session.execute(
                select(MeetingModel)
                .where(MeetingModel.user_id.in_(ids))
                .order_by(MeetingModel.created_at, MeetingModel.id)
            ).scalars().all()
            for row in rows:
                grouped[row.user_id].append(self._meeting_to_dict(row))
        return grouped

    def delete_meetings_for_users(self, user_ids: Iterable[str]) -> int:
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return 0
        with translate_store_errors("delete_meetings_for_users"), self._provider.session() as session:
            result = session.execute(delete(MeetingModel).where(MeetingModel.user_id.in_(ids)))
            session.commit()
            return int(result.rowcount or 0)

    # ---------------------------------------------------------------- helpers

    @staticmethod
    def _task_to_dict(domain: str, row) -> Dict[str, Any]:
        answers = row.get_answers()
        data: Dict[str, Any] = {
            "id": row.id,
            "user_id": row.user_id,
            "subdomain": row.get_subdomain(),
        }
        for key in question_keys_for(domain):
            value = answers.get(key)
            data[key] = list(value) if isinstance(value, list) else []
        data["is_done"] = bool(row.is_done)
        data["created_at"] = _iso(row.created_at)
        data["updated_at"] = _iso(row.updated_at)
        return data

    @staticmethod
    def _meeting_to_dict(row: MeetingModel) -> Dict[str, Any]:
        return {
            "id": row.id,
            "user_id": row.user_id,
            "scheduled_time": _iso(row.scheduled_time),
            "end_time": _iso(row.end_time),
            "status": row.status,
            "gmeet_link": row.gmeet_link,
            "google_event_id": row.google_event_id,
            "interviewer_emails": row.get_interviewer_emails(),
            "created_at": _iso(row.created_at),
        }
