"""
Verifi Credential Circuit

The validation-and-commitment pipeline:

    credential type -> temporal -> signature -> claims -> hash -> assemble -> encode

Single forward pass with two terminal states. COMMITTED: every public
field is produced. ABORTED: the first failing check determines the reason
and nothing is committed. There is no partial success.

The circuit is pure. Identical inputs yield identical outcomes and
identical public-value bytes, so a run can be replayed and proven.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import default_scheme
from .credential import CredentialInput
from .encoding import encode
from .errors import ErrorKind, ValidationError
from .hashing import compute_credential_hash
from .logging_config import audit_log
from .output import PublicOutput, assemble
from .signing import SignatureScheme
from .validator import validate_claims, validate_credential_type, validate_temporal

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    """Terminal states of a run."""
    COMMITTED = "COMMITTED"
    ABORTED = "ABORTED"


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one credential."""
    outcome: Outcome
    output: Optional[PublicOutput] = None
    public_values: Optional[bytes] = None
    failure: Optional[ErrorKind] = None
    reason: Optional[str] = None

    def accepted(self) -> bool:
        return self.outcome == Outcome.COMMITTED

    def unwrap(self) -> PublicOutput:
        """Return the output, or raise the abort as a ValidationError."""
        if not self.accepted():
            raise ValidationError(self.failure, self.reason)
        return self.output

    @classmethod
    def committed(cls, output: PublicOutput) -> 'ValidationResult':
        return cls(outcome=Outcome.COMMITTED, output=output, public_values=encode(output))

    @classmethod
    def aborted(cls, error: ValidationError) -> 'ValidationResult':
        return cls(outcome=Outcome.ABORTED, failure=error.kind, reason=error.reason)

    def to_dict(self) -> Dict[str, Any]:
        if self.accepted():
            return {
                "outcome": self.outcome.value,
                "public_output": self.output.to_dict(),
                "public_values": "0x" + self.public_values.hex(),
            }
        return {
            "outcome": self.outcome.value,
            "failure": self.failure.value,
            "reason": self.reason,
        }


class CommitChannel(ABC):
    """Sink for committed public values. Written at most once per run."""

    @abstractmethod
    def commit(self, data: bytes) -> None:
        pass


class BufferCommitChannel(CommitChannel):
    """Keeps committed bytes in memory."""

    def __init__(self):
        self.committed: Optional[bytes] = None

    def commit(self, data: bytes) -> None:
        if self.committed is not None:
            raise RuntimeError("public values already committed")
        self.committed = bytes(data)


class FileCommitChannel(CommitChannel):
    """Writes committed bytes to a file. The file is never created on abort."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def commit(self, data: bytes) -> None:
        self.path.write_bytes(data)


class CredentialCircuit:
    """
    Credential validation circuit.

    Usage:
        circuit = CredentialCircuit()
        result = circuit.validate(credential)
        if result.accepted():
            public_values = result.public_values
    """

    def __init__(self, scheme: Optional[SignatureScheme] = None):
        self.scheme = scheme or default_scheme()

    def check(self, credential: CredentialInput) -> PublicOutput:
        """
        Run every check and build the public output.

        Raises:
            ValidationError: on the first failing check
        """
        validate_credential_type(credential.credential_type)

        validate_temporal(
            credential.issued_at,
            credential.expires_at,
            credential.current_time
        )

        self.scheme.verify(
            credential.credential_data,
            credential.signature,
            credential.issuer_pubkey
        )

        validate_claims(credential.credential_data, credential.credential_type)

        credential_hash = compute_credential_hash(
            credential.subject,
            credential.credential_type,
            credential.credential_data,
            credential.issuer_pubkey
        )

        return assemble(
            credential.subject,
            credential.credential_type,
            credential_hash,
            credential.issued_at,
            credential.expires_at
        )

    def validate(self, credential: CredentialInput) -> ValidationResult:
        """Validate a credential. Aborts are returned, not raised."""
        subject = "0x" + credential.subject.hex()
        audit_log.validation_request(subject, credential.credential_type, self.scheme.name)

        try:
            output = self.check(credential)
        except ValidationError as e:
            audit_log.validation_decision(subject, False, failure=e.kind.value)
            logger.debug("Run aborted: %s", e.kind.value)
            return ValidationResult.aborted(e)

        result = ValidationResult.committed(output)
        audit_log.validation_decision(subject, True, credential_hash="0x" + output.credential_hash.hex())
        return result

    def run(self, credential: CredentialInput, channel: Optional[CommitChannel] = None) -> bytes:
        """
        Validate and commit.

        Returns:
            The 72-byte public values

        Raises:
            ValidationError: the run aborted; nothing was committed
        """
        result = self.validate(credential)
        result.unwrap()
        if channel is not None:
            channel.commit(result.public_values)
        return result.public_values


def validate(credential: CredentialInput, scheme: Optional[SignatureScheme] = None) -> ValidationResult:
    """Validate a credential with a fresh circuit."""
    return CredentialCircuit(scheme).validate(credential)


def run(
    credential: CredentialInput,
    scheme: Optional[SignatureScheme] = None,
    channel: Optional[CommitChannel] = None
) -> bytes:
    """Validate a credential and return its committed public values."""
    return CredentialCircuit(scheme).run(credential, channel)
