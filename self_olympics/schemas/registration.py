from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SimpleRegistrationRequest(CamelModel):
    country_code: str = Field(..., max_length=10, description="ISO 3166-1 alpha-3 code (e.g., 'BRA')")
    country_name: str = Field(..., max_length=100, description="Display name (e.g., 'Brazil')")
    # namespaced apart from proof nullifiers; a synthetic token is generated when omitted
    nullifier: Optional[str] = Field(None, max_length=240)

    @field_validator("country_code", "country_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value


class ProofRegistrationRequest(CamelModel):
    attestation_id: Union[int, str]
    proof: Dict[str, Any]
    public_signals: List[Any]
    user_context_data: str

    @field_validator("proof", "public_signals")
    @classmethod
    def not_empty(cls, value):
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("user_context_data")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class RegistrationResponse(CamelModel):
    success: bool
    country_code: str
    country_name: str
    message: str
    count: Optional[int] = None
    already_registered: Optional[bool] = None
