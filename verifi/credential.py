"""
Verifi Credential Input

The private witness handed to the circuit for a single run, plus helpers
for building the credential payload header.
"""

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Iterable, Optional

SUBJECT_SIZE = 20
HEADER_SIZE = 8
CURRENT_VERSION = 1

U32_MAX = 0xFFFFFFFF
U64_MAX = 0xFFFFFFFFFFFFFFFF

# version (u32 BE) + claim_count (u32 BE)
_HEADER = struct.Struct(">II")


class CredentialType(IntEnum):
    """Known credential type tags. Other positive tags are accepted."""
    KYC = 1
    ACCREDITED_INVESTOR = 2
    QUALIFIED_PURCHASER = 3
    INSTITUTIONAL_INVESTOR = 4
    AML_CLEARED = 5


CREDENTIAL_TYPE_NAMES = {
    CredentialType.KYC: "KYC Verified",
    CredentialType.ACCREDITED_INVESTOR: "Accredited Investor",
    CredentialType.QUALIFIED_PURCHASER: "Qualified Purchaser",
    CredentialType.INSTITUTIONAL_INVESTOR: "Institutional Investor",
    CredentialType.AML_CLEARED: "AML Cleared",
}


def credential_type_name(credential_type: int) -> str:
    """Return the display name of a credential type tag."""
    try:
        return CREDENTIAL_TYPE_NAMES[CredentialType(credential_type)]
    except ValueError:
        return f"Custom ({credential_type})"


@dataclass(frozen=True)
class CredentialHeader:
    """Parsed credential_data header."""
    version: int
    claim_count: int
    payload: bytes


def parse_header(credential_data: bytes) -> Optional[CredentialHeader]:
    """
    Parse the 8-byte big-endian header.

    Returns:
        CredentialHeader, or None if the data is shorter than the header
    """
    if len(credential_data) < HEADER_SIZE:
        return None
    version, claim_count = _HEADER.unpack_from(credential_data, 0)
    return CredentialHeader(
        version=version,
        claim_count=claim_count,
        payload=bytes(credential_data[HEADER_SIZE:])
    )


def build_credential_data(claims: Iterable[bytes], version: int = CURRENT_VERSION) -> bytes:
    """
    Build credential_data from a list of claim blobs.

    The claim count in the header is the number of blobs; the blobs are
    concatenated as-is after the header.
    """
    claims = [bytes(c) for c in claims]
    return _HEADER.pack(version, len(claims)) + b"".join(claims)


def _hex_to_bytes(value: str, field_name: str) -> bytes:
    if value.startswith(("0x", "0X")):
        value = value[2:]
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise ValueError(f"{field_name} must be a hex string")


def _bytes_to_hex(value: bytes) -> str:
    return "0x" + value.hex()


@dataclass(frozen=True)
class CredentialInput:
    """
    Credential witness for one circuit run.

    Fields:
    - subject: 20-byte identity the credential is bound to
    - credential_type: positive u32 type tag (0 is rejected by the circuit)
    - credential_data: header (version, claim_count) + claim payload
    - signature: issuer signature over credential_data
    - issuer_pubkey: issuer public key
    - issued_at, expires_at, current_time: u64 UNIX timestamps;
      expires_at == 0 means no expiration

    Construction only enforces field shapes. Semantic invariants are
    checked by the circuit so that failures surface as run aborts.
    """
    subject: bytes
    credential_type: int
    credential_data: bytes
    signature: bytes
    issuer_pubkey: bytes
    issued_at: int
    expires_at: int
    current_time: int

    def __post_init__(self):
        self._validate()

    def _validate(self):
        for name in ("subject", "credential_data", "signature", "issuer_pubkey"):
            value = getattr(self, name)
            if not isinstance(value, (bytes, bytearray)):
                raise ValueError(f"{name} must be bytes")
            # frozen: keep an immutable copy
            object.__setattr__(self, name, bytes(value))

        if len(self.subject) != SUBJECT_SIZE:
            raise ValueError(
                f"subject must be {SUBJECT_SIZE} bytes, got {len(self.subject)}"
            )

        _check_uint("credential_type", self.credential_type, U32_MAX)
        for name in ("issued_at", "expires_at", "current_time"):
            _check_uint(name, getattr(self, name), U64_MAX)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary (bytes as 0x-hex)."""
        return {
            "subject": _bytes_to_hex(self.subject),
            "credential_type": self.credential_type,
            "credential_data": _bytes_to_hex(self.credential_data),
            "signature": _bytes_to_hex(self.signature),
            "issuer_pubkey": _bytes_to_hex(self.issuer_pubkey),
            "issued_at": self.issued_at,
            "expires_at": self.expires_at,
            "current_time": self.current_time,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CredentialInput":
        """Create a CredentialInput from a dictionary produced by to_dict()."""
        required = [
            "subject", "credential_type", "credential_data", "signature",
            "issuer_pubkey", "issued_at", "current_time",
        ]
        missing = [f for f in required if f not in data]
        if missing:
            raise ValueError(f"Missing required fields: {missing}")

        return cls(
            subject=_hex_to_bytes(data["subject"], "subject"),
            credential_type=int(data["credential_type"]),
            credential_data=_hex_to_bytes(data["credential_data"], "credential_data"),
            signature=_hex_to_bytes(data["signature"], "signature"),
            issuer_pubkey=_hex_to_bytes(data["issuer_pubkey"], "issuer_pubkey"),
            issued_at=int(data["issued_at"]),
            expires_at=int(data.get("expires_at", 0)),
            current_time=int(data["current_time"]),
        )


def _check_uint(name: str, value: Any, maximum: int):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer")
    if value < 0 or value > maximum:
        raise ValueError(f"{name} out of range: {value}")


def create_sample_credential(
    current_time: int,
    subject: Optional[bytes] = None,
    credential_type: int = CredentialType.ACCREDITED_INVESTOR,
    validity_seconds: int = 365 * 86400,
) -> CredentialInput:
    """
    Build the sample accredited-investor credential used by the demo driver.

    Two 32-byte claims, a zero signature and a compressed-looking
    33-byte issuer key. Only valid under the structural scheme.
    """
    if subject is None:
        subject = bytes.fromhex("1234567890123456789012345678901234567890")

    return CredentialInput(
        subject=subject,
        credential_type=int(credential_type),
        credential_data=build_credential_data([bytes(32), b"\x01" * 32]),
        signature=bytes(64),
        issuer_pubkey=b"\x02" * 33,
        issued_at=current_time - 86400,
        expires_at=current_time + validity_seconds,
        current_time=current_time,
    )
