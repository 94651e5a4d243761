"""
Login/logout use cases backing the caller identity of member endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional

from member_api.core.errors import BusinessLogicError, ExceptionCode
from member_api.core.security import verify_password
from member_api.domain.emails import normalize_email
from member_api.repositories.member_repository import MemberRepository
from member_api.services.session_service import delete_session, issue_session

logger = logging.getLogger(__name__)


@dataclass
class LoginSuccess:
    member_id: int
    email: str
    session_token: str


@dataclass
class AuthService:
    """Exchanges member credentials for session tokens."""

    repository: MemberRepository = field(default_factory=MemberRepository)

    def login(self, email: str, password: str) -> LoginSuccess:
        raw_email = normalize_email(email)
        if not raw_email:
            raise BusinessLogicError(ExceptionCode.INVALID_CREDENTIALS)
        member = self.repository.get_member_by_email(raw_email)
        if not member or not verify_password(password, member.password_hash):
            logger.info("Failed login for %s", raw_email)
            raise BusinessLogicError(ExceptionCode.INVALID_CREDENTIALS)
        token = issue_session(member.email)
        return LoginSuccess(member_id=member.member_id, email=member.email, session_token=token)

    def logout(self, session_token: Optional[str]) -> None:
        if not session_token:
            return
        delete_session(session_token)
