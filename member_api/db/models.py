"""SQLAlchemy models for members and their verification/session records."""
from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


class Member(Base):
    __tablename__ = "members"

    member_id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    nickname = Column(String(64), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    profile = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    stamp = relationship(
        "Stamp",
        uselist=False,
        back_populates="member",
        cascade="all,delete-orphan",
        lazy="joined",
    )
    sessions = relationship("UserSession", back_populates="member", cascade="all,delete-orphan")

    def __repr__(self) -> str:
        return f"<Member {self.member_id} {self.email}>"


class Stamp(Base):
    __tablename__ = "stamps"

    stamp_id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(Integer, ForeignKey("members.member_id", ondelete="CASCADE"), unique=True, nullable=False)
    count = Column(Integer, default=0, nullable=False)

    member = relationship("Member", back_populates="stamp")


class EmailAuthCode(Base):
    __tablename__ = "email_auth_codes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, index=True)
    code = Column(String(16), nullable=False)
    failed_attempts = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    verified_at = Column(DateTime(timezone=True), nullable=True)


class UserSession(Base):
    __tablename__ = "sessions"

    token = Column(String(128), primary_key=True)
    member_email = Column(
        String(255),
        ForeignKey("members.email", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    member = relationship("Member", back_populates="sessions")
