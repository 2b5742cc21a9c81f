# self_olympics/routers/registration.py

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from self_olympics.core.config import settings
from self_olympics.core.security import CORS_HEADERS, limiter
from self_olympics.database.database import get_db
from self_olympics.schemas.registration import (
    ProofRegistrationRequest,
    RegistrationResponse,
    SimpleRegistrationRequest,
)
from self_olympics.services.registration_service import (
    RegistrationService,
    simple_nullifier,
    synthetic_nullifier,
)
from self_olympics.utils.error_handler import RegistrationValidationError
from self_olympics.utils.self_verifier import IdentityVerifier, get_verifier

logger = logging.getLogger(__name__)

router = APIRouter()

PROOF_FIELDS = ("attestationId", "proof", "publicSignals")


def _field_errors(error: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
        for err in error.errors()
    ]


@router.options("/register", include_in_schema=False)
def register_options():
    return JSONResponse(content={}, headers=CORS_HEADERS)


@router.post(
    "/register",
    response_model=RegistrationResponse,
    response_model_exclude_none=True,
    summary="Register a country affiliation",
    description="Accepts either {countryCode, countryName} or a Self identity proof "
                "{attestationId, proof, publicSignals, userContextData}. A repeated nullifier "
                "returns alreadyRegistered with the country of the first registration.",
)
@limiter.limit(settings.REGISTER_RATE_LIMIT)
async def register(
    request: Request,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    verifier: IdentityVerifier = Depends(get_verifier),
):
    if any(field in payload for field in PROOF_FIELDS):
        try:
            proof_request = ProofRegistrationRequest.model_validate(payload)
        except ValidationError as e:
            raise RegistrationValidationError(
                "Proof, publicSignals, attestationId and userContextData are required",
                _field_errors(e),
            )
        result = await RegistrationService.register_with_proof(db, verifier, proof_request)
    else:
        try:
            simple_request = SimpleRegistrationRequest.model_validate(payload)
        except ValidationError as e:
            raise RegistrationValidationError("Missing countryCode or countryName", _field_errors(e))
        country_code = simple_request.country_code.upper()
        nullifier = simple_nullifier(simple_request.nullifier or synthetic_nullifier(country_code))
        result = await run_in_threadpool(
            RegistrationService.register,
            db,
            country_code,
            simple_request.country_name,
            nullifier,
        )

    return result.to_response()
