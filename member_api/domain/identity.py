"""Caller identity passed explicitly into every authenticated use case."""
from __future__ import annotations

from dataclasses import dataclass

from member_api.domain.emails import normalize_email


@dataclass(frozen=True)
class CallerIdentity:
    """The authenticated principal: the email the session was issued for."""

    email: str

    def owns(self, email: str | None) -> bool:
        return bool(email) and normalize_email(email) == normalize_email(self.email)
