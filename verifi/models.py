"""Request models for the Verifi HTTP harness."""

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .credential import CredentialInput

_HEX = re.compile(r'^(0x)?[0-9a-fA-F]*$')


def _check_hex(value: str) -> str:
    if not _HEX.match(value) or len(value.removeprefix("0x")) % 2:
        raise ValueError("must be an even-length hex string")
    return value


class CredentialRecord(BaseModel):
    subject: str
    credential_type: int = Field(ge=0, le=0xFFFFFFFF)
    credential_data: str
    signature: str
    issuer_pubkey: str
    issued_at: int = Field(ge=0, le=0xFFFFFFFFFFFFFFFF)
    expires_at: int = Field(default=0, ge=0, le=0xFFFFFFFFFFFFFFFF)
    current_time: int = Field(ge=0, le=0xFFFFFFFFFFFFFFFF)

    @field_validator("subject", "credential_data", "signature", "issuer_pubkey")
    @classmethod
    def _hex_fields(cls, v: str) -> str:
        return _check_hex(v)

    def to_credential(self) -> CredentialInput:
        return CredentialInput.from_dict(self.model_dump())


class ValidateRequest(BaseModel):
    credential: CredentialRecord
    scheme: Optional[str] = None


class DecodeRequest(BaseModel):
    public_values: str
    expected_subject: Optional[str] = None
    expected_type: Optional[int] = None
    verification_time: Optional[int] = None
