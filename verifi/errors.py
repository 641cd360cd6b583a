"""
Verifi Error Kinds

Every validation failure is fatal for the run. The first failing check
determines the abort reason; nothing is committed on any failure.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Abort reasons, in the order the pipeline can raise them."""
    INVALID_CREDENTIAL_TYPE = "InvalidCredentialType"
    INVALID_ISSUANCE = "InvalidIssuance"
    CLOCK_SKEW = "ClockSkew"
    EXPIRED = "Expired"
    INVALID_SIGNATURE = "InvalidSignature"
    INVALID_PUBLIC_KEY = "InvalidPublicKey"
    MALFORMED_CREDENTIAL = "MalformedCredential"
    UNSUPPORTED_VERSION = "UnsupportedVersion"
    INSUFFICIENT_CLAIMS = "InsufficientClaims"


class VerifiError(Exception):
    """Base class for all Verifi errors."""


class ValidationError(VerifiError):
    """
    A credential failed one of the circuit checks.

    Attributes:
        kind: The ErrorKind identifying the failed check
        reason: Human-readable detail (never contains witness data)
    """

    def __init__(self, kind: ErrorKind, reason: Optional[str] = None):
        self.kind = kind
        self.reason = reason or kind.value
        super().__init__(f"{kind.value}: {self.reason}")


class EncodingError(VerifiError, ValueError):
    """Public-value bytes do not match the canonical layout."""
