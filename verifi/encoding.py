"""
Verifi Public Values Encoding

Fixed 72-byte layout consumed by external verifiers:

    offset  size  field
    0       20    subject (raw)
    20      4     credential_type (u32 little-endian)
    24      32    credential_hash (raw)
    56      8     issued_at (u64 little-endian)
    64      8     expires_at (u64 little-endian)

No padding, no length prefix. The layout must be reproduced bit-for-bit.
"""

import struct

from .errors import EncodingError
from .output import PublicOutput

# '<' disables alignment padding
_LAYOUT = struct.Struct("<20sI32sQQ")

PUBLIC_OUTPUT_SIZE = _LAYOUT.size


def encode(output: PublicOutput) -> bytes:
    """Serialize a PublicOutput into its 72-byte canonical form."""
    if len(output.subject) != 20:
        raise EncodingError(f"subject must be 20 bytes, got {len(output.subject)}")
    if len(output.credential_hash) != 32:
        raise EncodingError(f"credential_hash must be 32 bytes, got {len(output.credential_hash)}")

    try:
        return _LAYOUT.pack(
            output.subject,
            output.credential_type,
            output.credential_hash,
            output.issued_at,
            output.expires_at
        )
    except struct.error as e:
        raise EncodingError(str(e))


def decode(data: bytes) -> PublicOutput:
    """Parse 72 canonical bytes back into a PublicOutput."""
    if len(data) != PUBLIC_OUTPUT_SIZE:
        raise EncodingError(
            f"public values must be {PUBLIC_OUTPUT_SIZE} bytes, got {len(data)}"
        )

    subject, credential_type, credential_hash, issued_at, expires_at = _LAYOUT.unpack(bytes(data))
    return PublicOutput(
        subject=subject,
        credential_type=credential_type,
        credential_hash=credential_hash,
        issued_at=issued_at,
        expires_at=expires_at
    )


def decode_hex(value: str) -> PublicOutput:
    """Decode public values given as (optionally 0x-prefixed) hex."""
    value = value.strip()
    if value.startswith(("0x", "0X")):
        value = value[2:]
    try:
        data = bytes.fromhex(value)
    except ValueError:
        raise EncodingError("public values are not valid hex")
    return decode(data)
