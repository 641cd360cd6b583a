"""
Verifi Issuer Signature Verification

Signature checking is a pluggable strategy. Three schemes are provided:

- structural: length checks only. Placeholder that accepts any
  well-shaped signature without checking it against the message. This is
  the default so that sample inputs replay unchanged.
- secp256k1: ECDSA over SHA-256(message), compact r||s signatures
  (a trailing recovery byte is tolerated), SEC1 public keys.
- ed25519: RFC 8032 over the raw message bytes (PyNaCl).

The signed message is the credential_data.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple, Type

from cryptography.exceptions import InvalidSignature as _CryptoInvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)
from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from .errors import ErrorKind, ValidationError

MIN_SIGNATURE_SIZE = 64
SEC1_KEY_SIZES = (33, 65)
ECDSA_SIGNATURE_SIZES = (64, 65)  # r||s, r||s||v
ED25519_SIGNATURE_SIZE = 64
ED25519_KEY_SIZE = 32


class SignatureScheme(ABC):
    """Verifies an issuer signature. Raises ValidationError, returns None."""

    name: str = ""

    @abstractmethod
    def verify(self, message: bytes, signature: bytes, pubkey: bytes) -> None:
        pass

    def __repr__(self):
        return f"<{type(self).__name__} {self.name}>"


class StructuralScheme(SignatureScheme):
    """
    Structural placeholder.

    Rejects empty or short signatures and public keys that are not
    33 (compressed) or 65 (uncompressed) bytes. Does NOT verify that the
    signature was produced over the message by the key holder.
    """

    name = "structural"

    def verify(self, message: bytes, signature: bytes, pubkey: bytes) -> None:
        if len(signature) < MIN_SIGNATURE_SIZE:
            raise ValidationError(
                ErrorKind.INVALID_SIGNATURE,
                f"signature is {len(signature)} bytes, need at least {MIN_SIGNATURE_SIZE}"
            )
        if len(pubkey) not in SEC1_KEY_SIZES:
            raise ValidationError(
                ErrorKind.INVALID_PUBLIC_KEY,
                f"public key is {len(pubkey)} bytes, expected 33 or 65"
            )


class Secp256k1Scheme(StructuralScheme):
    """ECDSA on secp256k1 with SHA-256 message digest."""

    name = "secp256k1"

    def verify(self, message: bytes, signature: bytes, pubkey: bytes) -> None:
        super().verify(message, signature, pubkey)
        if len(signature) not in ECDSA_SIGNATURE_SIZES:
            raise ValidationError(
                ErrorKind.INVALID_SIGNATURE,
                f"signature is {len(signature)} bytes, expected 64 or 65"
            )

        try:
            key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), bytes(pubkey))
        except ValueError:
            raise ValidationError(ErrorKind.INVALID_PUBLIC_KEY, "not a secp256k1 point")

        r = int.from_bytes(signature[:32], "big")
        s = int.from_bytes(signature[32:64], "big")
        try:
            key.verify(encode_dss_signature(r, s), bytes(message), ec.ECDSA(hashes.SHA256()))
        except _CryptoInvalidSignature:
            raise ValidationError(ErrorKind.INVALID_SIGNATURE, "ECDSA verification failed")


class Ed25519Scheme(SignatureScheme):
    """Ed25519 (RFC 8032)."""

    name = "ed25519"

    def verify(self, message: bytes, signature: bytes, pubkey: bytes) -> None:
        if len(signature) != ED25519_SIGNATURE_SIZE:
            raise ValidationError(
                ErrorKind.INVALID_SIGNATURE,
                f"signature is {len(signature)} bytes, expected {ED25519_SIGNATURE_SIZE}"
            )
        if len(pubkey) != ED25519_KEY_SIZE:
            raise ValidationError(
                ErrorKind.INVALID_PUBLIC_KEY,
                f"public key is {len(pubkey)} bytes, expected {ED25519_KEY_SIZE}"
            )

        try:
            VerifyKey(bytes(pubkey)).verify(bytes(message), bytes(signature))
        except BadSignatureError:
            raise ValidationError(ErrorKind.INVALID_SIGNATURE, "Ed25519 verification failed")


SCHEMES: Dict[str, Type[SignatureScheme]] = {
    StructuralScheme.name: StructuralScheme,
    Secp256k1Scheme.name: Secp256k1Scheme,
    Ed25519Scheme.name: Ed25519Scheme,
}


def get_scheme(name: str) -> SignatureScheme:
    """Instantiate a signature scheme by name."""
    try:
        return SCHEMES[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown signature scheme '{name}': must be one of {sorted(SCHEMES)}")


def verify_signature(
    message: bytes,
    signature: bytes,
    pubkey: bytes,
    scheme: Optional[SignatureScheme] = None
) -> None:
    """Verify an issuer signature with the given scheme (default: structural)."""
    (scheme or StructuralScheme()).verify(message, signature, pubkey)


# Key helpers for samples and tests

def generate_signing_key(scheme: str = "ed25519") -> Tuple[bytes, bytes]:
    """
    Generate a key pair for a real scheme.

    Returns:
        Tuple of (private_key_bytes, public_key_bytes). secp256k1 public
        keys are SEC1 compressed (33 bytes).
    """
    if scheme == Ed25519Scheme.name:
        signing_key = SigningKey.generate()
        return bytes(signing_key), bytes(signing_key.verify_key)

    if scheme == Secp256k1Scheme.name:
        private_key = ec.generate_private_key(ec.SECP256K1())
        private_bytes = private_key.private_numbers().private_value.to_bytes(32, "big")
        public_bytes = private_key.public_key().public_bytes(
            serialization.Encoding.X962,
            serialization.PublicFormat.CompressedPoint
        )
        return private_bytes, public_bytes

    raise ValueError(f"Cannot generate keys for scheme '{scheme}'")


def sign_data(data: bytes, private_key: bytes, scheme: str = "ed25519") -> bytes:
    """Sign data; secp256k1 signatures are returned as compact r||s."""
    if scheme == Ed25519Scheme.name:
        return SigningKey(private_key).sign(data).signature

    if scheme == Secp256k1Scheme.name:
        key = ec.derive_private_key(int.from_bytes(private_key, "big"), ec.SECP256K1())
        r, s = decode_dss_signature(key.sign(data, ec.ECDSA(hashes.SHA256())))
        return r.to_bytes(32, "big") + s.to_bytes(32, "big")

    raise ValueError(f"Cannot sign with scheme '{scheme}'")
