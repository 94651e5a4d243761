"""
Smoke tests for the MemberRepository against a temporary SQLite database.
"""
from __future__ import annotations

from member_api.db.models import Member, Stamp
from member_api.repositories.member_repository import MemberRepository


def _member(email: str, nickname: str) -> Member:
    member = Member(email=email, nickname=nickname, password_hash="argon2$hash")
    member.stamp = Stamp(count=0)
    return member


def test_member_and_stamp_are_created_together(db_env):
    repo = MemberRepository()

    created = repo.create_member(_member("a@x.com", "alice"))

    assert created.member_id == 1
    fetched = repo.get_member(1)
    assert fetched.email == "a@x.com"
    assert fetched.stamp.count == 0
    assert fetched.stamp.member_id == 1
    assert repo.email_exists("a@x.com")
    assert repo.nickname_exists("alice")
    assert not repo.nickname_exists("")


def test_update_member_only_touches_given_columns(db_env):
    repo = MemberRepository()
    repo.create_member(_member("a@x.com", "alice"))

    updated = repo.update_member(1, {"profile": "me.png"})

    assert updated.profile == "me.png"
    assert updated.nickname == "alice"
    assert repo.update_member(1, {}).profile == "me.png"


def test_delete_member_by_email(db_env):
    repo = MemberRepository()
    repo.create_member(_member("a@x.com", "alice"))

    assert repo.delete_member_by_email("a@x.com") is True
    assert repo.get_member(1) is None
    assert repo.delete_member_by_email("a@x.com") is False


def test_auth_code_lifecycle(db_env):
    repo = MemberRepository()
    entity = repo.create_auth_code("a@x.com", "123456")

    assert repo.get_latest_auth_code("a@x.com", "123456").verified_at is None
    repo.mark_auth_code_verified(entity.id)
    assert repo.get_latest_auth_code("a@x.com", "123456").verified_at is not None
    repo.delete_auth_codes_for_email("a@x.com")
    assert repo.get_latest_auth_code("a@x.com", "123456") is None
