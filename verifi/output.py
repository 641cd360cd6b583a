"""
Verifi Public Output

The minimal derived data that is safe to reveal outside the circuit.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .credential import credential_type_name


@dataclass(frozen=True)
class PublicOutput:
    """
    Public values committed by a successful run.

    Never mutated after construction; validation is complete before
    an instance is assembled.
    """
    subject: bytes
    credential_type: int
    credential_hash: bytes
    issued_at: int
    expires_at: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject": "0x" + self.subject.hex(),
            "credential_type": self.credential_type,
            "credential_type_name": credential_type_name(self.credential_type),
            "credential_hash": "0x" + self.credential_hash.hex(),
            "issued_at": self.issued_at,
            "expires_at": self.expires_at,
        }


def assemble(
    subject: bytes,
    credential_type: int,
    credential_hash: bytes,
    issued_at: int,
    expires_at: int
) -> PublicOutput:
    """Build the public output. No validation."""
    return PublicOutput(
        subject=bytes(subject),
        credential_type=credential_type,
        credential_hash=bytes(credential_hash),
        issued_at=issued_at,
        expires_at=expires_at
    )
