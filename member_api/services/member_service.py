"""
Member lifecycle use cases: signup, updates, lookups and deletion.

Every mutating call receives the caller identity explicitly and reconciles
ownership of the target member against it before touching the database.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from member_api.core.errors import BusinessLogicError, ExceptionCode
from member_api.core.security import hash_password, verify_password
from member_api.db.models import Member
from member_api.domain.identity import CallerIdentity
from member_api.repositories.member_repository import MemberRepository

logger = logging.getLogger(__name__)


@dataclass
class MemberService:
    repository: MemberRepository = field(default_factory=MemberRepository)

    # -------------------------------------- helpers --------------------------------------
    def _owned_member(self, member_id: int, caller: CallerIdentity) -> Member:
        member = self.find_member(member_id)
        if not caller.owns(member.email):
            logger.warning("%s tried to modify member %s", caller.email, member_id)
            raise BusinessLogicError(ExceptionCode.MEMBER_NOT_OWNER)
        return member

    def _ensure_nickname_free(self, nickname: str) -> None:
        if self.repository.nickname_exists(nickname):
            raise BusinessLogicError(ExceptionCode.NICKNAME_EXISTS)

    # -------------------------------------- signup --------------------------------------
    def create_member(self, member: Member, password: str) -> Member:
        if self.repository.email_exists(member.email):
            raise BusinessLogicError(ExceptionCode.MEMBER_EXISTS)
        self._ensure_nickname_free(member.nickname)
        member.password_hash = hash_password(password)
        try:
            created = self.repository.create_member(member)
        except IntegrityError as exc:
            # lost a race against a concurrent signup with the same email/nickname
            raise BusinessLogicError(ExceptionCode.MEMBER_EXISTS) from exc
        logger.info("Created member %s", created.member_id)
        return created

    # -------------------------------------- updates --------------------------------------
    def update_member(self, patch: Member, caller: CallerIdentity) -> Member:
        member = self._owned_member(patch.member_id, caller)
        values = {}
        if patch.nickname is not None and patch.nickname != member.nickname:
            self._ensure_nickname_free(patch.nickname)
            values["nickname"] = patch.nickname
        if patch.profile is not None:
            values["profile"] = patch.profile
        try:
            return self.repository.update_member(member.member_id, values)
        except IntegrityError as exc:
            # nickname taken between the check and the write
            raise BusinessLogicError(ExceptionCode.NICKNAME_EXISTS) from exc

    def verify_password(self, member_id: int, password: str, caller: CallerIdentity) -> None:
        member = self._owned_member(member_id, caller)
        if not verify_password(password, member.password_hash):
            raise BusinessLogicError(ExceptionCode.PASSWORD_MISMATCH)

    def update_member_password(self, member_id: int, new_password: str, caller: CallerIdentity) -> Member:
        member = self._owned_member(member_id, caller)
        return self.repository.update_member(member.member_id, {"password_hash": hash_password(new_password)})

    def update_member_profile(self, patch: Member, caller: CallerIdentity) -> Member:
        member = self._owned_member(patch.member_id, caller)
        return self.repository.update_member(member.member_id, {"profile": patch.profile})

    # -------------------------------------- lookups --------------------------------------
    def is_nickname_available(self, nickname: str) -> bool:
        return not self.repository.nickname_exists(nickname)

    def is_email_duplicate(self, email: str) -> bool:
        return self.repository.email_exists(email)

    def find_member(self, member_id: int) -> Member:
        member = self.repository.get_member(member_id)
        if not member:
            raise BusinessLogicError(ExceptionCode.MEMBER_NOT_FOUND)
        return member

    def find_verified_member(self, email: str) -> Optional[Member]:
        return self.repository.get_member_by_email(email)

    # -------------------------------------- deletion --------------------------------------
    def delete_member(self, caller: CallerIdentity) -> None:
        if not self.repository.delete_member_by_email(caller.email):
            logger.info("No member left to delete for %s", caller.email)
            return
        logger.info("Deleted member %s", caller.email)
