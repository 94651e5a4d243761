"""Request-scoped dependencies: configured services and the caller identity."""
from __future__ import annotations

from fastapi import Request

from member_api.core.errors import BusinessLogicError, ExceptionCode
from member_api.domain.identity import CallerIdentity
from member_api.services.auth_service import AuthService
from member_api.services.email_service import EmailService
from member_api.services.member_service import MemberService
from member_api.services.session_service import session_email, session_token


def _state_service(request: Request, name: str):
    svc = getattr(getattr(request.app, "state", None), name, None)
    if not svc:
        raise RuntimeError(f"{name} not configured")
    return svc


def get_member_service(request: Request) -> MemberService:
    return _state_service(request, "member_service")


def get_email_service(request: Request) -> EmailService:
    return _state_service(request, "email_service")


def get_auth_service(request: Request) -> AuthService:
    return _state_service(request, "auth_service")


def current_caller(request: Request) -> CallerIdentity:
    """Resolve the authenticated principal; never taken from the request body."""
    email = session_email(session_token(request))
    if not email:
        raise BusinessLogicError(ExceptionCode.UNAUTHENTICATED)
    return CallerIdentity(email=email)
