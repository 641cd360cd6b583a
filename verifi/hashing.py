"""
Verifi Credential Hashing

The credential hash is the only public trace of credential content.
SHA-256 over, in order:

    subject (20 bytes) || credential_type (u32 BE) || credential_data || issuer_pubkey

Order and encoding are part of the commitment; changing either changes
every hash.
"""

import hashlib
import hmac
import struct

HASH_SIZE = 32


def compute_credential_hash(
    subject: bytes,
    credential_type: int,
    credential_data: bytes,
    issuer_pubkey: bytes
) -> bytes:
    """
    Compute the 32-byte credential hash.

    Returns:
        Raw SHA-256 digest
    """
    hasher = hashlib.sha256()
    hasher.update(subject)
    hasher.update(struct.pack(">I", credential_type))
    hasher.update(credential_data)
    hasher.update(issuer_pubkey)
    return hasher.digest()


def credential_hash_hex(
    subject: bytes,
    credential_type: int,
    credential_data: bytes,
    issuer_pubkey: bytes
) -> str:
    """Return the credential hash as a 0x-prefixed lowercase hex string."""
    digest = compute_credential_hash(subject, credential_type, credential_data, issuer_pubkey)
    return "0x" + digest.hex()


def verify_credential_hash(
    declared: bytes,
    subject: bytes,
    credential_type: int,
    credential_data: bytes,
    issuer_pubkey: bytes
) -> bool:
    """
    Verify that declared matches the hash recomputed from source fields.

    Verifiers must recompute; the comparison is constant time.
    """
    if len(declared) != HASH_SIZE:
        return False
    computed = compute_credential_hash(subject, credential_type, credential_data, issuer_pubkey)
    return hmac.compare_digest(computed, declared)
