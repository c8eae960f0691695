"""
Error taxonomy shared by repositories, services and routes.

Repositories and services never raise these across layers; they return them
wrapped in ``Err`` (see ``result.py``). Routes turn them into the uniform
``{"error": {"code", "message", "type"}}`` body with ``error_response``.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi.responses import JSONResponse

from .settings import get_settings

logger = logging.getLogger(__name__)

GENERIC_SERVER_MESSAGE = "An internal error occurred. Please try again later."


class AppError(Exception):
    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, code: str | None = None, details: Any = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.details = details

    @property
    def type(self) -> str:
        return type(self).__name__

    @property
    def is_operational(self) -> bool:
        """True for errors whose message is safe to show to the client."""
        return self.status_code < 500

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "type": self.type}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppError):
            return NotImplemented
        return type(self) is type(other) and self.code == other.code and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.code, self.message))

    def __repr__(self) -> str:
        return f"{self.type}(code={self.code!r}, message={self.message!r})"


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class UnauthorizedError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class StateConflictError(AppError):
    status_code = 409
    code = "STATE_CONFLICT"


class PersistenceError(AppError):
    status_code = 500
    code = "PERSISTENCE_ERROR"


class UnexpectedError(AppError):
    status_code = 500
    code = "UNEXPECTED_ERROR"


def campaign_not_found(identifier: str) -> NotFoundError:
    return NotFoundError(f"Campaign {identifier} not found", code="CAMPAIGN_NOT_FOUND")


def issuer_not_found(campaign_identifier: str) -> NotFoundError:
    return NotFoundError(
        f"Issuer record missing for campaign {campaign_identifier}",
        code="ISSUER_NOT_FOUND",
    )


def error_body(error: AppError) -> dict[str, Any]:
    payload = error.to_dict()
    if not error.is_operational:
        logger.error("%s: %s (details=%s)", error.type, error.message, error.details)
        if get_settings().is_production:
            payload["message"] = GENERIC_SERVER_MESSAGE
    return {"error": payload}


def error_response(error: AppError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error_body(error))
