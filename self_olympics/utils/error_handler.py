# self_olympics/utils/error_handler.py

import logging
from typing import Any, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SelfOlympicsError(Exception):
    """Base error rendered as {"success": false, "error": ..., "details": ...}"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class RegistrationValidationError(SelfOlympicsError):
    """Raised when a registration request is missing or has malformed fields"""
    status_code = status.HTTP_400_BAD_REQUEST


class VerificationError(SelfOlympicsError):
    """Raised when the identity proof is rejected or discloses too little"""
    status_code = status.HTTP_400_BAD_REQUEST


class VerifierUnavailableError(SelfOlympicsError):
    """Raised when the verification service cannot be used"""
    pass


class StorageError(SelfOlympicsError):
    """Raised after a failed database operation has been rolled back"""
    pass


async def self_olympics_error_handler(request: Request, exc: SelfOlympicsError) -> JSONResponse:
    content = {"success": False, "error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.details})")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=content)
