from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


MEETING_STATUSES = ("scheduled", "underway", "completed", "cancelled")


class UserModel(Base):
    """Applicant or admin account with per-domain interview levels."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    username: Mapped[str] = mapped_column(String(128), default="")
    email: Mapped[Optional[str]] = mapped_column(String(256), nullable=True, index=True)
    regno: Mapped[Optional[str]] = mapped_column(String(32), nullable=True, unique=True)
    password_hash: Mapped[str] = mapped_column(Text, default="")
    verified: Mapped[bool] = mapped_column(Boolean, default=False)

    # -1 rejected, 0 pending, 1..3 interview round reached
    tech: Mapped[int] = mapped_column(Integer, default=0)
    design: Mapped[int] = mapped_column(Integer, default=0)
    management: Mapped[int] = mapped_column(Integer, default=0)

    is_core: Mapped[bool] = mapped_column(Boolean, default=False)
    mobile: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    email_personal: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    admin: Mapped[bool] = mapped_column(Boolean, default=False)
    is_profile_done: Mapped[bool] = mapped_column(Boolean, default=False)
    admin_notes: Mapped[str] = mapped_column(Text, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    domains = relationship(
        "UserDomainModel",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="UserDomainModel.id",
    )

    def domain_list(self) -> List[str]:
        return [d.domain for d in self.domains]


class UserDomainModel(Base):
    """Domain membership, one row per (user, domain)."""

    __tablename__ = "user_domains"
    __table_args__ = (UniqueConstraint("user_id", "domain", name="uq_user_domains_user_domain"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id"), index=True)
    domain: Mapped[str] = mapped_column(String(16), index=True)

    user = relationship("UserModel", back_populates="domains")


class _TaskColumns:
    """
    Questionnaire submission stored as a document.

    ``answers_json`` maps ``questionN`` to a list of answer strings.
    ``subdomain_json`` keeps the explicit subdomain exactly as submitted
    (null, a comma-delimited string or a list); normalization happens on read.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id"), index=True)
    subdomain_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    answers_json: Mapped[str] = mapped_column(Text, default="{}")
    is_done: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    def set_answers(self, answers: Dict[str, Any]) -> None:
        self.answers_json = json.dumps(answers or {}, ensure_ascii=False)

    def get_answers(self) -> Dict[str, Any]:
        try:
            data = json.loads(self.answers_json or "{}")
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    def set_subdomain(self, subdomain: Any) -> None:
        self.subdomain_json = None if subdomain is None else json.dumps(subdomain, ensure_ascii=False)

    def get_subdomain(self) -> Any:
        if self.subdomain_json is None:
            return None
        try:
            return json.loads(self.subdomain_json)
        except ValueError:
            return None


class TechTaskModel(_TaskColumns, Base):
    __tablename__ = "tech_tasks"


class DesignTaskModel(_TaskColumns, Base):
    __tablename__ = "design_tasks"


class ManagementTaskModel(_TaskColumns, Base):
    __tablename__ = "management_tasks"


TASK_MODELS: Dict[str, Any] = {
    "tech": TechTaskModel,
    "design": DesignTaskModel,
    "management": ManagementTaskModel,
}


class MeetingModel(Base):
    """Scheduled interview slot."""

    __tablename__ = "meetings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id"), index=True)
    interviewer_emails_json: Mapped[str] = mapped_column(Text, default="[]")
    scheduled_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    gmeet_link: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    google_event_id: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    status: Mapped[str] = mapped_column(String(16), default="scheduled")  # see MEETING_STATUSES
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    def set_interviewer_emails(self, emails: List[str]) -> None:
        self.interviewer_emails_json = json.dumps(list(emails or []), ensure_ascii=False)

    def get_interviewer_emails(self) -> List[str]:
        try:
            data = json.loads(self.interviewer_emails_json or "[]")
        except ValueError:
            return []
        return [str(x) for x in data] if isinstance(data, list) else []
