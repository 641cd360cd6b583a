"""
Verifi Public Values Verification

The external-verifier side of the commitment. Given the 72 committed
bytes of a run, a verifier confirms they describe the credential it
expects, without access to the private witness.

Verification steps:
1. Decode the canonical layout
2. Check subject
3. Check credential type (expected value and/or accepted set)
4. Check credential hash (declared value or recomputed from a credential)
5. Check the validity window against the verification time
"""

import hmac
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from .credential import CredentialInput
from .encoding import decode
from .errors import EncodingError
from .hashing import verify_credential_hash
from .output import PublicOutput


class VerificationOutcome(str, Enum):
    VALID = "VALID"
    INVALID = "INVALID"


@dataclass
class VerificationResult:
    """Result of verifying committed public values."""
    outcome: VerificationOutcome
    output: Optional[PublicOutput] = None
    reason: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

    def is_valid(self) -> bool:
        return self.outcome == VerificationOutcome.VALID

    @classmethod
    def valid(cls, output: PublicOutput) -> 'VerificationResult':
        return cls(outcome=VerificationOutcome.VALID, output=output)

    @classmethod
    def invalid(
        cls,
        reason: str,
        details: Dict[str, Any] = None,
        output: Optional[PublicOutput] = None
    ) -> 'VerificationResult':
        return cls(outcome=VerificationOutcome.INVALID, output=output, reason=reason, details=details)


class PublicValuesVerifier:
    """
    Verifier for committed public values.

    Args:
        accepted_types: Credential types this verifier accepts
            (None accepts any type)
    """

    def __init__(self, accepted_types: Optional[Iterable[int]] = None):
        self.accepted_types = frozenset(accepted_types) if accepted_types is not None else None

    def verify(
        self,
        public_values: bytes,
        expected_subject: Optional[bytes] = None,
        expected_type: Optional[int] = None,
        expected_hash: Optional[bytes] = None,
        credential: Optional[CredentialInput] = None,
        verification_time: Optional[int] = None
    ) -> VerificationResult:
        """
        Verify public values.

        Args:
            public_values: The 72 committed bytes
            expected_subject: Subject the credential must be bound to
            expected_type: Exact credential type required
            expected_hash: Credential hash the verifier already knows
            credential: Source credential to recompute the hash from
            verification_time: UNIX time to check expiry at (default: now)
        """
        if verification_time is None:
            verification_time = int(time.time())

        # Step 1: Decode
        try:
            output = decode(public_values)
        except EncodingError as e:
            return VerificationResult.invalid("Malformed public values", {"error": str(e)})

        # Step 2: Subject
        if expected_subject is not None and not hmac.compare_digest(output.subject, bytes(expected_subject)):
            return VerificationResult.invalid(
                "Subject mismatch",
                {"committed": "0x" + output.subject.hex(), "expected": "0x" + bytes(expected_subject).hex()},
                output
            )

        # Step 3: Credential type
        if expected_type is not None and output.credential_type != expected_type:
            return VerificationResult.invalid(
                "Credential type mismatch",
                {"committed": output.credential_type, "expected": expected_type},
                output
            )
        if self.accepted_types is not None and output.credential_type not in self.accepted_types:
            return VerificationResult.invalid(
                "Credential type not accepted",
                {"committed": output.credential_type, "accepted": sorted(self.accepted_types)},
                output
            )

        # Step 4: Credential hash
        if expected_hash is not None and not hmac.compare_digest(output.credential_hash, bytes(expected_hash)):
            return VerificationResult.invalid(
                "Credential hash mismatch",
                {"committed": "0x" + output.credential_hash.hex(), "expected": "0x" + bytes(expected_hash).hex()},
                output
            )
        if credential is not None:
            mismatch = self._check_against_credential(output, credential)
            if mismatch is not None:
                return mismatch

        # Step 5: Validity window
        if output.issued_at > verification_time:
            return VerificationResult.invalid(
                "Credential not yet issued",
                {"issued_at": output.issued_at, "verification_time": verification_time},
                output
            )
        if output.expires_at != 0 and verification_time > output.expires_at:
            return VerificationResult.invalid(
                "Credential expired",
                {"expires_at": output.expires_at, "verification_time": verification_time},
                output
            )

        return VerificationResult.valid(output)

    def _check_against_credential(
        self,
        output: PublicOutput,
        credential: CredentialInput
    ) -> Optional[VerificationResult]:
        hash_ok = verify_credential_hash(
            output.credential_hash,
            output.subject,
            output.credential_type,
            credential.credential_data,
            credential.issuer_pubkey
        )
        if not hash_ok or output.subject != credential.subject or output.credential_type != credential.credential_type:
            return VerificationResult.invalid("Credential hash does not match credential", output=output)

        if (output.issued_at, output.expires_at) != (credential.issued_at, credential.expires_at):
            return VerificationResult.invalid(
                "Validity window mismatch",
                {
                    "committed": [output.issued_at, output.expires_at],
                    "credential": [credential.issued_at, credential.expires_at],
                },
                output
            )
        return None


def verify_public_values(public_values: bytes, **kwargs) -> VerificationResult:
    """
    Convenience function to verify public values.

    Accepts the keyword arguments of PublicValuesVerifier.verify().
    """
    return PublicValuesVerifier().verify(public_values, **kwargs)
