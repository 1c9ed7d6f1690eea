from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

from sqlalchemy import desc, func, select, update

from recruitportal.domain.question_schema import DOMAINS
from recruitportal.infrastructure.stores.models import Base, UserDomainModel, UserModel
from recruitportal.infrastructure.stores.sqlalchemy_db import (
    SessionProvider,
    get_db_url,
    translate_store_errors,
)
from recruitportal.utils.logging_config import LogFiles, Logger

# Fields an admin may change through a status update.
STATUS_FIELDS = ("tech", "design", "management", "admin_notes")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class ApplicantStore:
    """Users, their domain memberships and interview levels."""

    def __init__(self, db_url: Optional[str] = None, *, auto_create_schema: bool = True):
        self.db_url = db_url or get_db_url()
        self._provider = SessionProvider(self.db_url)
        if auto_create_schema:
            Base.metadata.create_all(self._provider.engine)

    def create_user(
        self,
        *,
        username: str,
        email: Optional[str] = None,
        regno: Optional[str] = None,
        domains: Iterable[str] = (),
        password_hash: str = "",
        admin: bool = False,
        verified: bool = False,
        is_profile_done: bool = False,
        tech: int = 0,
        design: int = 0,
        management: int = 0,
        admin_notes: str = "",
        mobile: Optional[str] = None,
        email_personal: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        now = _utcnow()
        row = UserModel(
            id=uuid4().hex,
            username=(username or "").strip(),
            email=(email or "").strip().lower() or None,
            regno=(regno or "").strip() or None,
            password_hash=password_hash or "",
            admin=bool(admin),
            verified=bool(verified),
            is_profile_done=bool(is_profile_done),
            tech=int(tech),
            design=int(design),
            management=int(management),
            admin_notes=admin_notes or "",
            mobile=mobile,
            email_personal=(email_personal or "").strip().lower() or None,
            created_at=created_at or now,
            updated_at=now,
        )
        seen = set()
        for domain in domains:
            domain = str(domain).strip().lower()
            if domain not in DOMAINS or domain in seen:
                continue
            seen.add(domain)
            row.domains.append(UserDomainModel(domain=domain))

        with translate_store_errors("create_user"), self._provider.session() as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_dict(row)

    def upsert_admin(
        self, *, email: str, username: str, password_hash: str, regno: str
    ) -> Dict[str, Any]:
        """Create the admin account or reset its password and flags."""
        email = email.strip().lower()
        with translate_store_errors("upsert_admin"), self._provider.session() as session:
            row = session.execute(
                select(UserModel).where(UserModel.email == email)
            ).scalar_one_or_none()
            if row is not None:
                row.password_hash = password_hash
                row.admin = True
                row.verified = True
                row.username = username
                row.updated_at = _utcnow()
                session.commit()
                Logger.info(f"Updated admin account {email}", file=LogFiles.STORE)
                return self._to_dict(row)

        Logger.info(f"Creating admin account {email}", file=LogFiles.STORE)
        return self.create_user(
            username=username,
            email=email,
            regno=regno,
            password_hash=password_hash,
            admin=True,
            verified=True,
            is_profile_done=True,
        )

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        with translate_store_errors("get_user"), self._provider.session() as session:
            row = session.get(UserModel, user_id)
            return self._to_dict(row) if row else None

    def get_user_by_regno(self, regno: str) -> Optional[Dict[str, Any]]:
        with translate_store_errors("get_user_by_regno"), self._provider.session() as session:
            row = session.execute(
                select(UserModel).where(UserModel.regno == regno)
            ).scalar_one_or_none()
            return self._to_dict(row) if row else None

    def get_user_by_email(
        self, email: str, *, include_password_hash: bool = False
    ) -> Optional[Dict[str, Any]]:
        email = (email or "").strip().lower()
        with translate_store_errors("get_user_by_email"), self._provider.session() as session:
            row = session.execute(
                select(UserModel).where(UserModel.email == email)
            ).scalar_one_or_none()
            if row is None:
                return None
            data = self._to_dict(row)
            if include_password_hash:
                data["password_hash"] = row.password_hash
            return data

    def list_users(
        self,
        *,
        domain: Optional[str] = None,
        offset: int = 0,
        limit: int = 1000,
        admin: Optional[bool] = None,
        oldest_first: bool = False,
    ) -> List[Dict[str, Any]]:
        """Users newest first (or oldest first), optionally restricted to one domain."""
        stmt = select(UserModel)
        if domain:
            stmt = stmt.where(
                UserModel.id.in_(
                    select(UserDomainModel.user_id).where(UserDomainModel.domain == domain)
                )
            )
        if admin is not None:
            stmt = stmt.where(UserModel.admin.is_(admin))
        if oldest_first:
            stmt = stmt.order_by(UserModel.created_at, UserModel.id)
        else:
            stmt = stmt.order_by(desc(UserModel.created_at), desc(UserModel.id))
        stmt = stmt.offset(max(0, int(offset))).limit(int(limit))
        with translate_store_errors("list_users"), self._provider.session() as session:
            rows = session.execute(stmt).scalars().all()
            return [self._to_dict(row) for row in rows]

    def count_users(self, *, domain: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(UserModel)
        if domain:
            stmt = stmt.where(
                UserModel.id.in_(
                    select(UserDomainModel.user_id).where(UserDomainModel.domain == domain)
                )
            )
        with translate_store_errors("count_users"), self._provider.session() as session:
            return int(session.execute(stmt).scalar_one())

    def update_user_fields(self, regno: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Merge ``fields`` into the user with this regno in one UPDATE statement.

        Returns the updated record, or None when no user has the regno.
        """
        values = {k: v for k, v in fields.items() if k in STATUS_FIELDS}
        values["updated_at"] = _utcnow()
        with translate_store_errors("update_user_fields"), self._provider.session() as session:
            result = session.execute(
                update(UserModel)
                .where(UserModel.regno == regno)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                session.rollback()
                return None
            session.commit()
            row = session.execute(
                select(UserModel).where(UserModel.regno == regno)
            ).scalar_one_or_none()
            Logger.info(
                f"Updated {sorted(k for k in values if k != 'updated_at')} for regno={regno}",
                file=LogFiles.STORE,
            )
            return self._to_dict(row) if row else None

    @staticmethod
    def _to_dict(row: UserModel) -> Dict[str, Any]:
        return {
            "id": row.id,
            "username": row.username,
            "email": row.email,
            "regno": row.regno,
            "domain": row.domain_list(),
            "tech": row.tech,
            "design": row.design,
            "management": row.management,
            "admin_notes": row.admin_notes or "",
            "admin": bool(row.admin),
            "verified": bool(row.verified),
            "is_profile_done": bool(row.is_profile_done),
            "is_core": bool(row.is_core),
            "mobile": row.mobile,
            "email_personal": row.email_personal,
            "created_at": _iso(row.created_at),
            "updated_at": _iso(row.updated_at),
        }
