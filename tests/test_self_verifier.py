"""Tests for the Self verifier client."""
import asyncio
import json

import httpx
import pytest

from self_olympics.core.config import Settings
from self_olympics.utils.error_handler import VerifierUnavailableError
from self_olympics.utils.self_verifier import SelfVerifierClient

PROOF = {"a": ["1"], "b": [["2"]], "c": ["3"]}
SIGNALS = ["4", "5"]
CONTEXT = "00ab"


def _verify(handler, **overrides):
    settings = Settings(
        SELF_VERIFIER_URL="http://verifier.test/verify",
        SELF_SCOPE="self-olympics-2024",
        SELF_ENDPOINT="https://olympics.example/api/register",
        SELF_MOCK_PASSPORT=True,
        **overrides,
    )

    async def run():
        async with SelfVerifierClient(settings, transport=httpx.MockTransport(handler)) as client:
            return await client.verify(1, PROOF, SIGNALS, CONTEXT)

    return asyncio.run(run())


def test_valid_result_is_mapped():
    sent = {}

    def handler(request):
        sent.update(json.loads(request.content))
        return httpx.Response(
            200,
            json={
                "attestationId": 1,
                "isValidDetails": {"isValid": True, "isMinimumAgeValid": True, "isOfacValid": True},
                "discloseOutput": {"nationality": "BRA", "nullifier": 123456789},
            },
        )

    outcome = _verify(handler)

    assert outcome.valid is True
    assert outcome.nationality == "BRA"
    assert outcome.identifier == "123456789"
    assert sent == {
        "attestationId": 1,
        "proof": PROOF,
        "publicSignals": SIGNALS,
        "userContextData": CONTEXT,
        "scope": "self-olympics-2024",
        "endpoint": "https://olympics.example/api/register",
        "mockPassport": True,
    }


def test_invalid_result():
    def handler(request):
        return httpx.Response(
            200,
            json={"isValidDetails": {"isValid": False}, "discloseOutput": {"nationality": "", "nullifier": ""}},
        )

    outcome = _verify(handler)

    assert outcome.valid is False
    assert outcome.nationality is None
    assert outcome.identifier is None
    assert outcome.details == {"isValid": False}


def test_rejected_bundle_is_invalid():
    def handler(request):
        return httpx.Response(400, json={"message": "Invalid attestation id"})

    outcome = _verify(handler)

    assert outcome.valid is False
    assert outcome.details == {"reason": "Invalid attestation id"}


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, text="unavailable"),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"status": "ok"}),
        httpx.Response(200, json={"isValidDetails": {"isValid": True}, "discloseOutput": "BRA"}),
        httpx.Response(
            200,
            json={"isValidDetails": {"isValid": True}, "discloseOutput": {"nationality": 840, "nullifier": "1"}},
        ),
    ],
)
def test_unusable_responses_raise(response):
    with pytest.raises(VerifierUnavailableError):
        _verify(lambda request: response)


def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(VerifierUnavailableError) as exc_info:
        _verify(handler)

    assert exc_info.value.status_code == 500
