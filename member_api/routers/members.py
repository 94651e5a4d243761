from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Response, status

from member_api.core.errors import BusinessLogicError, ExceptionCode
from member_api.core.utils import create_uri
from member_api.domain.identity import CallerIdentity
from member_api.mappers import member_mapper as mapper
from member_api.routers.deps import current_caller, get_email_service, get_member_service
from member_api.schemas.member import (
    Check,
    EmailCheck,
    MemberMyPageResponse,
    MemberPatch,
    MemberPatchPassword,
    MemberPatchProfile,
    MemberPost,
    MemberResponse,
    NickNameCheck,
    SingleResponse,
)
from member_api.services.email_service import EmailService
from member_api.services.member_service import MemberService

router = APIRouter(prefix="/members", tags=["members"])
MEMBER_DEFAULT_URL = "/api/members"


@router.post("", status_code=status.HTTP_201_CREATED)
def post_member(
    body: MemberPost,
    member_service: MemberService = Depends(get_member_service),
    email_service: EmailService = Depends(get_email_service),
):
    if not email_service.verify_final_auth_code(str(body.email), body.auth_code):
        raise BusinessLogicError(ExceptionCode.EMAIL_NOT_AUTH)

    member = mapper.member_post_to_member(body)
    member.stamp = mapper.new_stamp()
    created = member_service.create_member(member, body.password)
    email_service.consume_auth_codes(created.email)

    location = create_uri(MEMBER_DEFAULT_URL, created.member_id)
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": location})


# static paths must be registered before "/{member_id}"
@router.get("/check-nickName", response_model=SingleResponse[Check])
def nickname_availability(body: NickNameCheck, member_service: MemberService = Depends(get_member_service)):
    available = member_service.is_nickname_available(body.nick_name)
    return SingleResponse[Check](data=Check(result=available))


@router.get("/check-email", response_model=SingleResponse[Check])
def check_email_duplicate(body: EmailCheck, member_service: MemberService = Depends(get_member_service)):
    duplicate = member_service.is_email_duplicate(body.email)
    return SingleResponse[Check](data=Check(result=duplicate))


@router.get("/member-email", response_model=SingleResponse[MemberMyPageResponse])
def get_member_by_email(
    caller: CallerIdentity = Depends(current_caller),
    member_service: MemberService = Depends(get_member_service),
):
    member = member_service.find_verified_member(caller.email)
    if member is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return SingleResponse[MemberMyPageResponse](data=mapper.member_to_member_response_my_page(member))


@router.patch("/{member_id}", response_model=SingleResponse[MemberResponse])
def patch_member(
    body: MemberPatch,
    member_id: int = Path(..., gt=0),
    caller: CallerIdentity = Depends(current_caller),
    member_service: MemberService = Depends(get_member_service),
):
    member = member_service.update_member(mapper.member_patch_to_member(member_id, body), caller)
    return SingleResponse[MemberResponse](data=mapper.member_to_member_response(member))


@router.patch("/{member_id}/password", response_model=SingleResponse[MemberResponse])
def patch_member_password(
    body: MemberPatchPassword,
    member_id: int = Path(..., gt=0),
    caller: CallerIdentity = Depends(current_caller),
    member_service: MemberService = Depends(get_member_service),
):
    member_service.verify_password(member_id, body.password, caller)
    member = member_service.update_member_password(member_id, body.new_password, caller)
    return SingleResponse[MemberResponse](data=mapper.member_to_member_response(member))


@router.patch("/{member_id}/profile")
def set_profile(
    body: MemberPatchProfile,
    member_id: int = Path(..., gt=0),
    caller: CallerIdentity = Depends(current_caller),
    member_service: MemberService = Depends(get_member_service),
):
    member_service.update_member_profile(mapper.member_patch_profile_to_member(member_id, body), caller)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/{member_id}", response_model=SingleResponse[MemberMyPageResponse])
def get_member(
    member_id: int = Path(..., gt=0),
    caller: CallerIdentity = Depends(current_caller),
    member_service: MemberService = Depends(get_member_service),
):
    member = member_service.find_member(member_id)
    if not caller.owns(member.email):
        return Response(status_code=status.HTTP_403_FORBIDDEN)
    return SingleResponse[MemberMyPageResponse](data=mapper.member_to_member_response_my_page(member))


@router.delete("/{member_id}")
def delete_member(
    member_id: int = Path(..., gt=0),
    caller: CallerIdentity = Depends(current_caller),
    member_service: MemberService = Depends(get_member_service),
):
    # Deletion is keyed by the authenticated email; the path id is only validated.
    member_service.delete_member(caller)
    return Response(status_code=status.HTTP_200_OK)
