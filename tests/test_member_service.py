from __future__ import annotations

import pytest

from member_api.core.errors import BusinessLogicError, ExceptionCode
from member_api.core.security import verify_password
from member_api.db.models import Member, Stamp
from member_api.domain.identity import CallerIdentity
from member_api.repositories.member_repository import MemberRepository
from member_api.services.member_service import MemberService


def _new_member(svc: MemberService, email: str, nickname: str, password: str = "s3cret-pass") -> Member:
    member = Member(email=email, nickname=nickname, profile=None)
    member.stamp = Stamp(count=0)
    return svc.create_member(member, password)


def test_create_member_hashes_password_and_attaches_one_stamp(db_env):
    svc = MemberService()

    created = _new_member(svc, "a@x.com", "alice")

    stored = MemberRepository().get_member(created.member_id)
    assert stored.password_hash != "s3cret-pass"
    assert verify_password("s3cret-pass", stored.password_hash)
    assert stored.stamp is not None
    assert stored.stamp.count == 0


def test_create_member_rejects_duplicate_email(db_env):
    svc = MemberService()
    _new_member(svc, "a@x.com", "alice")

    with pytest.raises(BusinessLogicError) as exc:
        _new_member(svc, "a@x.com", "other")

    assert exc.value.code is ExceptionCode.MEMBER_EXISTS
    assert len(MemberRepository().list_members()) == 1


def test_update_member_requires_ownership(db_env):
    svc = MemberService()
    alice = _new_member(svc, "a@x.com", "alice")

    patch = Member(member_id=alice.member_id, nickname="mallory")
    with pytest.raises(BusinessLogicError) as exc:
        svc.update_member(patch, CallerIdentity("b@x.com"))

    assert exc.value.code is ExceptionCode.MEMBER_NOT_OWNER
    assert svc.find_member(alice.member_id).nickname == "alice"


def test_update_member_keeps_fields_not_supplied(db_env):
    svc = MemberService()
    alice = _new_member(svc, "a@x.com", "alice")
    svc.update_member_profile(Member(member_id=alice.member_id, profile="me.png"), CallerIdentity("a@x.com"))

    updated = svc.update_member(Member(member_id=alice.member_id, nickname="alicia"), CallerIdentity("a@x.com"))

    assert updated.nickname == "alicia"
    assert updated.profile == "me.png"


def test_same_nickname_on_own_account_is_not_a_conflict(db_env):
    svc = MemberService()
    alice = _new_member(svc, "a@x.com", "alice")

    updated = svc.update_member(Member(member_id=alice.member_id, nickname="alice"), CallerIdentity("a@x.com"))

    assert updated.nickname == "alice"


def test_verify_password_mismatch(db_env):
    svc = MemberService()
    alice = _new_member(svc, "a@x.com", "alice")

    with pytest.raises(BusinessLogicError) as exc:
        svc.verify_password(alice.member_id, "nope", CallerIdentity("a@x.com"))
    assert exc.value.code is ExceptionCode.PASSWORD_MISMATCH

    svc.verify_password(alice.member_id, "s3cret-pass", CallerIdentity("a@x.com"))


def test_update_member_password_replaces_hash(db_env):
    svc = MemberService()
    alice = _new_member(svc, "a@x.com", "alice")

    updated = svc.update_member_password(alice.member_id, "brand-new-pass", CallerIdentity("a@x.com"))

    assert verify_password("brand-new-pass", updated.password_hash)
    assert not verify_password("s3cret-pass", updated.password_hash)


def test_lookups(db_env):
    svc = MemberService()
    _new_member(svc, "a@x.com", "alice")

    assert svc.is_nickname_available("alice") is False
    assert svc.is_nickname_available("bob") is True
    assert svc.is_email_duplicate("a@x.com") is True
    assert svc.is_email_duplicate("b@x.com") is False
    assert svc.find_verified_member("b@x.com") is None
    with pytest.raises(BusinessLogicError) as exc:
        svc.find_member(99)
    assert exc.value.code is ExceptionCode.MEMBER_NOT_FOUND


def test_delete_member_removes_member_and_stamp(db_env):
    svc = MemberService()
    _new_member(svc, "a@x.com", "alice")

    svc.delete_member(CallerIdentity("a@x.com"))

    assert svc.find_verified_member("a@x.com") is None
    # deleting again is quiet
    svc.delete_member(CallerIdentity("a@x.com"))


def test_nickname_taken_between_check_and_write_is_conflict(db_env, monkeypatch):
    svc = MemberService()
    alice = _new_member(svc, "a@x.com", "alice")
    _new_member(svc, "b@x.com", "bob")
    monkeypatch.setattr(svc.repository, "nickname_exists", lambda nickname: False)

    with pytest.raises(BusinessLogicError) as exc:
        svc.update_member(Member(member_id=alice.member_id, nickname="bob"), CallerIdentity("a@x.com"))

    assert exc.value.code is ExceptionCode.NICKNAME_EXISTS
    assert svc.find_member(alice.member_id).nickname == "alice"


def test_caller_email_matches_regardless_of_case(db_env):
    svc = MemberService()
    alice = _new_member(svc, "Alice@X.com", "alice")

    assert alice.email == "alice@x.com"
    updated = svc.update_member(Member(member_id=alice.member_id, profile="p.png"), CallerIdentity("ALICE@x.com"))
    assert updated.profile == "p.png"
