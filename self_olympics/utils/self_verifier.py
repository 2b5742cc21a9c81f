# self_olympics/utils/self_verifier.py

import httpx
from fastapi import Request
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from self_olympics.core.config import Settings
from self_olympics.utils.error_handler import VerifierUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class VerificationOutcome:
    valid: bool
    nationality: Optional[str] = None
    # per-person nullifier produced by the proof system
    identifier: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


class IdentityVerifier(ABC):
    """
    Verifies a zero-knowledge identity proof and reports what it disclosed.
    The proof system itself is opaque; implementations only relay the result.
    """

    @abstractmethod
    async def verify(
        self,
        attestation_id: Any,
        proof: Dict[str, Any],
        public_signals: List[Any],
        user_context_data: str,
    ) -> VerificationOutcome:
        ...

    async def aclose(self) -> None:
        pass


class SelfVerifierClient(IdentityVerifier):
    """
    Client for the HTTP service wrapping the Self backend verifier.
    Sends the proof bundle with the configured scope and endpoint and maps the
    verification result (isValidDetails / discloseOutput) to a VerificationOutcome.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.verifier_url = settings.SELF_VERIFIER_URL
        self.scope = settings.SELF_SCOPE
        self.endpoint = settings.SELF_ENDPOINT
        self.mock_passport = settings.SELF_MOCK_PASSPORT

        self.client = httpx.AsyncClient(
            timeout=settings.SELF_VERIFIER_TIMEOUT,
            transport=transport,
            event_hooks={
                "request": [self._log_request_url]
            }
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def _log_request_url(self, request: httpx.Request):
        logger.debug(f"Self verifier request url: {request.url}")

    async def aclose(self) -> None:
        await self.client.aclose()

    async def verify(
        self,
        attestation_id: Any,
        proof: Dict[str, Any],
        public_signals: List[Any],
        user_context_data: str,
    ) -> VerificationOutcome:
        payload = {
            "attestationId": attestation_id,
            "proof": proof,
            "publicSignals": public_signals,
            "userContextData": user_context_data,
            "scope": self.scope,
            "endpoint": self.endpoint,
            "mockPassport": self.mock_passport,
        }

        try:
            response = await self.client.post(self.verifier_url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Self verifier request failed: {e}")
            raise VerifierUnavailableError("Identity verification service unavailable", str(e))

        if response.status_code >= 500:
            logger.error(f"Self verifier returned {response.status_code}: {response.text}")
            raise VerifierUnavailableError(
                "Identity verification service unavailable",
                f"HTTP {response.status_code}",
            )

        try:
            data = response.json()
        except ValueError:
            raise VerifierUnavailableError(
                "Identity verification service returned an invalid response",
                response.text[:200],
            )

        if response.status_code >= 400:
            # the verifier could not even parse the proof bundle
            reason = "Malformed proof"
            if isinstance(data, dict):
                reason = data.get("message") or data.get("error") or reason
            return VerificationOutcome(valid=False, details={"reason": reason})

        return self._parse_result(data)

    @staticmethod
    def _parse_result(data: Any) -> VerificationOutcome:
        if not isinstance(data, dict) or not isinstance(data.get("isValidDetails"), dict):
            raise VerifierUnavailableError(
                "Identity verification service returned an invalid response",
                "missing isValidDetails",
            )

        is_valid_details = data["isValidDetails"]
        disclose_output = data.get("discloseOutput") or {}
        if not isinstance(disclose_output, dict):
            raise VerifierUnavailableError(
                "Identity verification service returned an invalid response",
                "discloseOutput is not an object",
            )

        nationality = disclose_output.get("nationality") or None
        if nationality is not None and not isinstance(nationality, str):
            raise VerifierUnavailableError(
                "Identity verification service returned an invalid response",
                "nationality is not a string",
            )
        nullifier = disclose_output.get("nullifier")

        return VerificationOutcome(
            valid=bool(is_valid_details.get("isValid")),
            nationality=nationality,
            identifier=str(nullifier) if nullifier not in (None, "") else None,
            details=is_valid_details,
        )


def init_verifier(settings: Settings) -> IdentityVerifier:
    logger.info(f"Self verifier configured for scope {settings.SELF_SCOPE}")
    return SelfVerifierClient(settings)


# get the verifier created at startup
def get_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.verifier
