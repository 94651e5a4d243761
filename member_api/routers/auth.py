from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from member_api.core.rate_limiter import rate_limit_ip
from member_api.routers.deps import get_auth_service
from member_api.schemas.member import LoginRequest, LoginResponse, SingleResponse
from member_api.services.auth_service import AuthService
from member_api.services.session_service import clear_session_cookie, session_token, set_session_cookie

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=SingleResponse[LoginResponse])
def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    rate_limit_ip(request, "auth:login", limit=10, window_seconds=300)
    result = auth_service.login(body.email, body.password)
    set_session_cookie(response, result.session_token)
    return SingleResponse[LoginResponse](
        data=LoginResponse(member_id=result.member_id, access_token=result.session_token)
    )


@router.post("/logout")
def logout(request: Request, auth_service: AuthService = Depends(get_auth_service)):
    auth_service.logout(session_token(request))
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_session_cookie(response)
    return response
