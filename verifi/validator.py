"""
Verifi Credential Validator

Temporal and claims-schema checks. Each check raises ValidationError on
the first violation and returns normally otherwise.

Boundaries are inclusive: current_time == issued_at and
current_time == expires_at both pass.
"""

from typing import Dict

from .credential import CURRENT_VERSION, HEADER_SIZE, CredentialHeader, CredentialType, parse_header
from .errors import ErrorKind, ValidationError

DEFAULT_MINIMUM_CLAIMS = 1

MINIMUM_CLAIMS: Dict[int, int] = {
    CredentialType.KYC: 1,
    CredentialType.ACCREDITED_INVESTOR: 2,
    CredentialType.QUALIFIED_PURCHASER: 2,
    CredentialType.INSTITUTIONAL_INVESTOR: 3,
    CredentialType.AML_CLEARED: 1,
}


def minimum_claims(credential_type: int) -> int:
    """Required claim count for a credential type."""
    return MINIMUM_CLAIMS.get(credential_type, DEFAULT_MINIMUM_CLAIMS)


def validate_credential_type(credential_type: int) -> None:
    if credential_type == 0:
        raise ValidationError(
            ErrorKind.INVALID_CREDENTIAL_TYPE,
            "credential_type must be positive"
        )


def validate_temporal(issued_at: int, expires_at: int, current_time: int) -> None:
    """
    Check the validity window.

    Raises:
        ValidationError(INVALID_ISSUANCE): issued_at is 0
        ValidationError(CLOCK_SKEW): current_time precedes issued_at
        ValidationError(EXPIRED): expires_at is set and already passed
    """
    if issued_at == 0:
        raise ValidationError(ErrorKind.INVALID_ISSUANCE, "issued_at must be set")

    if current_time < issued_at:
        raise ValidationError(
            ErrorKind.CLOCK_SKEW,
            f"current_time {current_time} before issued_at {issued_at}"
        )

    # expires_at == 0 means the credential never expires
    if expires_at != 0 and current_time > expires_at:
        raise ValidationError(
            ErrorKind.EXPIRED,
            f"current_time {current_time} after expires_at {expires_at}"
        )


def validate_claims(credential_data: bytes, credential_type: int) -> CredentialHeader:
    """
    Check the credential header and claim-count policy.

    Returns:
        The parsed CredentialHeader

    Raises:
        ValidationError(MALFORMED_CREDENTIAL): fewer than 8 bytes
        ValidationError(UNSUPPORTED_VERSION): version is not 1
        ValidationError(INSUFFICIENT_CLAIMS): claim_count below the type minimum
    """
    header = parse_header(credential_data)
    if header is None:
        raise ValidationError(
            ErrorKind.MALFORMED_CREDENTIAL,
            f"credential_data is {len(credential_data)} bytes, header needs {HEADER_SIZE}"
        )

    if header.version != CURRENT_VERSION:
        raise ValidationError(
            ErrorKind.UNSUPPORTED_VERSION,
            f"version {header.version} not supported"
        )

    required = minimum_claims(credential_type)
    if header.claim_count < required:
        raise ValidationError(
            ErrorKind.INSUFFICIENT_CLAIMS,
            f"type {credential_type} requires {required} claims, got {header.claim_count}"
        )

    return header
