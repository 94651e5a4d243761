"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update, delete

from member_api.db.models import EmailAuthCode, Member
from member_api.db.session import get_session
from member_api.domain.emails import normalize_email


class MemberRepository:
    """CRUD helpers wrapping the SQLAlchemy session. Email arguments are normalized here."""

    # -------------------------- members --------------------------
    def get_member(self, member_id: int) -> Optional[Member]:
        with get_session() as session:
            return session.get(Member, member_id)

    def get_member_by_email(self, email: str) -> Optional[Member]:
        value = normalize_email(email)
        if not value:
            return None
        with get_session() as session:
            stmt = select(Member).where(Member.email == value)
            return session.execute(stmt).scalar_one_or_none()

    def email_exists(self, email: str) -> bool:
        value = normalize_email(email)
        if not value:
            return False
        with get_session() as session:
            stmt = select(Member.member_id).where(Member.email == value).limit(1)
            return session.execute(stmt).first() is not None

    def nickname_exists(self, nickname: str) -> bool:
        value = (nickname or "").strip()
        if not value:
            return False
        with get_session() as session:
            stmt = select(Member.member_id).where(Member.nickname == value).limit(1)
            return session.execute(stmt).first() is not None

    def create_member(self, member: Member) -> Member:
        """Persist a new member together with its stamp in one transaction."""
        now = datetime.now(timezone.utc)
        member.email = normalize_email(member.email)
        member.created_at = now
        member.updated_at = now
        with get_session() as session:
            session.add(member)
            session.commit()
            session.refresh(member)
            return member

    def update_member(self, member_id: int, values: dict) -> Optional[Member]:
        if values:
            with get_session() as session:
                stmt = (
                    update(Member)
                    .where(Member.member_id == member_id)
                    .values(**values, updated_at=datetime.now(timezone.utc))
                )
                session.execute(stmt)
                session.commit()
        return self.get_member(member_id)

    def delete_member_by_email(self, email: str) -> bool:
        with get_session() as session:
            stmt = select(Member).where(Member.email == normalize_email(email))
            member = session.execute(stmt).scalar_one_or_none()
            if not member:
                return False
            session.delete(member)
            session.commit()
            return True

    def list_members(self) -> list[Member]:
        with get_session() as session:
            return list(session.execute(select(Member).order_by(Member.member_id)).scalars().all())

    # -------------------------- email auth codes --------------------------
    def create_auth_code(self, email: str, code: str) -> EmailAuthCode:
        entity = EmailAuthCode(
            email=normalize_email(email),
            code=code,
            failed_attempts=0,
            created_at=datetime.now(timezone.utc),
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def get_latest_auth_code(self, email: str, code: str) -> Optional[EmailAuthCode]:
        with get_session() as session:
            stmt = (
                select(EmailAuthCode)
                .where(EmailAuthCode.email == normalize_email(email), EmailAuthCode.code == code)
                .order_by(EmailAuthCode.created_at.desc(), EmailAuthCode.id.desc())
            )
            return session.execute(stmt).scalars().first()

    def get_latest_auth_code_for_email(self, email: str) -> Optional[EmailAuthCode]:
        with get_session() as session:
            stmt = (
                select(EmailAuthCode)
                .where(EmailAuthCode.email == normalize_email(email))
                .order_by(EmailAuthCode.created_at.desc(), EmailAuthCode.id.desc())
            )
            return session.execute(stmt).scalars().first()

    def record_failed_attempt(self, code_id: int) -> int:
        """Bump the failure counter of a code and return the new value."""
        with get_session() as session:
            entity = session.get(EmailAuthCode, code_id)
            if not entity:
                return 0
            entity.failed_attempts = int(entity.failed_attempts or 0) + 1
            session.commit()
            return entity.failed_attempts

    def mark_auth_code_verified(self, code_id: int) -> None:
        with get_session() as session:
            stmt = (
                update(EmailAuthCode)
                .where(EmailAuthCode.id == code_id, EmailAuthCode.verified_at.is_(None))
                .values(verified_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)
            session.commit()

    def delete_auth_codes_for_email(self, email: str) -> None:
        with get_session() as session:
            session.execute(delete(EmailAuthCode).where(EmailAuthCode.email == normalize_email(email)))
            session.commit()
