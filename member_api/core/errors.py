"""Business error codes and their HTTP translation."""

from __future__ import annotations

from enum import Enum
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ExceptionCode(Enum):
    """Domain failure reasons, each bound to an HTTP status and a message."""

    MEMBER_NOT_FOUND = (404, "Member not found")
    MEMBER_EXISTS = (409, "Member already exists")
    NICKNAME_EXISTS = (409, "Nickname already in use")
    EMAIL_NOT_AUTH = (403, "Email has not been verified")
    PASSWORD_MISMATCH = (400, "Password does not match")
    MEMBER_NOT_OWNER = (403, "Member does not belong to the caller")
    AUTH_CODE_INVALID = (400, "Auth code is invalid or expired")
    INVALID_CREDENTIALS = (401, "Invalid credentials")
    UNAUTHENTICATED = (401, "Authentication required")

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.message = message


class BusinessLogicError(Exception):
    def __init__(self, code: ExceptionCode):
        super().__init__(code.message)
        self.code = code


def business_error_body(exc: BusinessLogicError) -> dict:
    return {"status": exc.code.status, "code": exc.code.name, "message": exc.code.message}


async def _business_error_handler(request: Request, exc: BusinessLogicError) -> JSONResponse:
    logger.info("%s %s -> %s", request.method, request.url.path, exc.code.name)
    return JSONResponse(business_error_body(exc), status_code=exc.code.status)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BusinessLogicError, _business_error_handler)
