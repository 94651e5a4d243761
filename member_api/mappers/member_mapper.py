"""Stateless translations between member DTOs and the Member entity."""

from __future__ import annotations

from member_api.db.models import Member, Stamp
from member_api.domain.emails import normalize_email
from member_api.schemas.member import (
    MemberMyPageResponse,
    MemberPatch,
    MemberPatchProfile,
    MemberPost,
    MemberResponse,
)


def member_post_to_member(dto: MemberPost) -> Member:
    """The password stays out of the entity; the service hashes it."""
    return Member(email=normalize_email(str(dto.email)), nickname=dto.nick_name.strip(), profile=dto.profile)


def new_stamp() -> Stamp:
    return Stamp(count=0)


def member_patch_to_member(member_id: int, dto: MemberPatch) -> Member:
    nickname = dto.nick_name.strip() if dto.nick_name is not None else None
    return Member(member_id=member_id, nickname=nickname, profile=dto.profile)


def member_patch_profile_to_member(member_id: int, dto: MemberPatchProfile) -> Member:
    return Member(member_id=member_id, profile=dto.profile)


def member_to_member_response(member: Member) -> MemberResponse:
    return MemberResponse(
        member_id=member.member_id,
        email=member.email,
        nick_name=member.nickname,
        profile=member.profile,
    )


def member_to_member_response_my_page(member: Member) -> MemberMyPageResponse:
    stamp = member.stamp
    return MemberMyPageResponse(
        member_id=member.member_id,
        email=member.email,
        nick_name=member.nickname,
        profile=member.profile,
        stamp_count=int(stamp.count or 0) if stamp else 0,
        created_at=member.created_at,
    )
