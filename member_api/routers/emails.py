from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from member_api.core.rate_limiter import rate_limit_ip
from member_api.routers.deps import get_email_service
from member_api.schemas.member import AuthCodeRequest, AuthCodeSent, AuthCodeVerify, Check, SingleResponse
from member_api.services.email_service import EmailService

router = APIRouter(prefix="/emails", tags=["emails"])


@router.post("/auth-code", response_model=SingleResponse[AuthCodeSent])
def send_auth_code(request: Request, body: AuthCodeRequest, email_service: EmailService = Depends(get_email_service)):
    rate_limit_ip(request, "emails:auth-code", limit=5, window_seconds=300)
    sent = email_service.send_auth_code(str(body.email))
    return SingleResponse[AuthCodeSent](data=AuthCodeSent(sent=sent))


@router.post("/verify", response_model=SingleResponse[Check])
def verify_auth_code(request: Request, body: AuthCodeVerify, email_service: EmailService = Depends(get_email_service)):
    rate_limit_ip(request, "emails:verify", limit=10, window_seconds=300)
    email_service.verify_auth_code(str(body.email), body.auth_code)
    return SingleResponse[Check](data=Check(result=True))
