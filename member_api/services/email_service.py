"""
Email verification use cases: issue one-time codes and check them at signup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
import secrets
import time

from member_api.core.config import get_settings
from member_api.core.errors import BusinessLogicError, ExceptionCode
from member_api.core.mailer import send_email
from member_api.core.utils import absolute_url
from member_api.domain.emails import normalize_email
from member_api.repositories.member_repository import MemberRepository

logger = logging.getLogger(__name__)

AUTH_CODE_LENGTH = 6
MAX_VERIFY_ATTEMPTS = 5


def generate_auth_code(length: int = AUTH_CODE_LENGTH) -> str:
    return "".join(str(secrets.randbelow(10)) for _ in range(length))


@dataclass
class EmailService:
    """Issues and validates one-time auth codes tied to an email address."""

    repository: MemberRepository = field(default_factory=MemberRepository)

    def __post_init__(self):
        self.settings = get_settings()

    # -------------------------------------- helpers --------------------------------------
    def _now(self) -> int:
        return int(time.time())

    def _expired(self, moment: datetime | int | None, now: int, *, ttl_seconds: int) -> bool:
        if ttl_seconds <= 0:
            return False
        if isinstance(moment, datetime):
            # SQLite hands back naive datetimes; treat them as UTC.
            normalized = moment.astimezone(timezone.utc) if moment.tzinfo else moment.replace(tzinfo=timezone.utc)
            ts = int(normalized.timestamp())
        else:
            ts = int(moment or 0)
        if not ts:
            return True
        return (ts + ttl_seconds) < now

    def _auth_code_html(self, code: str) -> str:
        signup_url = absolute_url("/signup")
        return f"""
        <p>Hello!</p>
        <p>Your verification code is:</p>
        <p style="font-size:24px;letter-spacing:4px;"><b>{code}</b></p>
        <p>Enter it on the <a href="{signup_url}">signup page</a> to finish creating your account.</p>
        """

    # -------------------------------------- issuing --------------------------------------
    def send_auth_code(self, email: str) -> bool:
        raw_email = normalize_email(email)
        if self.repository.email_exists(raw_email):
            raise BusinessLogicError(ExceptionCode.MEMBER_EXISTS)
        self.repository.delete_auth_codes_for_email(raw_email)
        code = generate_auth_code()
        self.repository.create_auth_code(raw_email, code)
        sent = send_email(
            "Your verification code",
            raw_email,
            self._auth_code_html(code),
            f"Your verification code is {code}",
        )
        if not sent:
            logger.warning("Auth code for %s was stored but not delivered", raw_email)
        return sent

    # -------------------------------------- verification --------------------------------------
    def verify_auth_code(self, email: str, code: str) -> None:
        """Mark the outstanding code for ``email`` verified; it is burnt after MAX_VERIFY_ATTEMPTS misses."""
        raw_email = normalize_email(email)
        supplied = (code or "").strip()
        entity = self.repository.get_latest_auth_code_for_email(raw_email)
        if not entity or self._expired(entity.created_at, self._now(), ttl_seconds=self.settings.email_auth_code_ttl_seconds):
            logger.info("Rejected auth code for %s", raw_email)
            raise BusinessLogicError(ExceptionCode.AUTH_CODE_INVALID)
        if not secrets.compare_digest(entity.code.encode(), supplied.encode()):
            attempts = self.repository.record_failed_attempt(entity.id)
            if attempts >= MAX_VERIFY_ATTEMPTS:
                logger.warning("Too many wrong auth codes for %s; code discarded", raw_email)
                self.repository.delete_auth_codes_for_email(raw_email)
            raise BusinessLogicError(ExceptionCode.AUTH_CODE_INVALID)
        # re-verifying must not extend the signup window
        if entity.verified_at is None:
            self.repository.mark_auth_code_verified(entity.id)

    def verify_final_auth_code(self, email: str, code: str) -> bool:
        """True when ``code`` was verified for ``email`` and the signup window is still open."""
        raw_email = normalize_email(email)
        entity = self.repository.get_latest_auth_code(raw_email, (code or "").strip())
        if not entity or not entity.verified_at:
            return False
        return not self._expired(entity.verified_at, self._now(), ttl_seconds=self.settings.email_verified_ttl_seconds)

    def consume_auth_codes(self, email: str) -> None:
        self.repository.delete_auth_codes_for_email(normalize_email(email))
