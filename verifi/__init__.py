"""
Verifi Credential Circuit

Version: 1.0.0
License: Apache 2.0

Zero-knowledge credential validation.

Given a private credential (signed by an issuer, bound to a subject, with a
validity window and typed claims), the circuit checks that the credential is
well-formed, correctly timed, signed, and carries enough claims for its
type, then commits a 72-byte public output:

    subject || credential_type || credential_hash || issued_at || expires_at

Any failed check aborts the run and nothing is committed.

Usage:
    from verifi import (
        CredentialCircuit,
        CredentialInput,
        build_credential_data,
        decode,
    )

    credential = CredentialInput(
        subject=bytes.fromhex("1234567890123456789012345678901234567890"),
        credential_type=2,
        credential_data=build_credential_data([claim_a, claim_b]),
        signature=signature,
        issuer_pubkey=issuer_pubkey,
        issued_at=issued_at,
        expires_at=expires_at,
        current_time=now,
    )

    result = CredentialCircuit().validate(credential)

    if result.accepted():
        public_values = result.public_values   # 72 bytes
        output = decode(public_values)
    else:
        reason = result.failure                # ErrorKind
"""

__version__ = "1.0.0"
__license__ = "Apache-2.0"

# Credential input
from .credential import (
    CredentialInput,
    CredentialHeader,
    CredentialType,
    build_credential_data,
    create_sample_credential,
    credential_type_name,
    parse_header,
)

# Errors
from .errors import ErrorKind, VerifiError, ValidationError, EncodingError

# Validation
from .validator import (
    minimum_claims,
    validate_credential_type,
    validate_temporal,
    validate_claims,
)

# Signatures
from .signing import (
    SignatureScheme,
    StructuralScheme,
    Secp256k1Scheme,
    Ed25519Scheme,
    get_scheme,
    verify_signature,
    generate_signing_key,
    sign_data,
)

# Hashing
from .hashing import compute_credential_hash, credential_hash_hex, verify_credential_hash

# Output and encoding
from .output import PublicOutput, assemble
from .encoding import PUBLIC_OUTPUT_SIZE, encode, decode, decode_hex

# Circuit
from .circuit import (
    CredentialCircuit,
    ValidationResult,
    Outcome,
    CommitChannel,
    BufferCommitChannel,
    FileCommitChannel,
    validate,
    run,
)

# Verifier
from .verifier import (
    PublicValuesVerifier,
    VerificationResult,
    VerificationOutcome,
    verify_public_values,
)


__all__ = [
    "__version__",

    # Credential
    "CredentialInput",
    "CredentialHeader",
    "CredentialType",
    "build_credential_data",
    "create_sample_credential",
    "credential_type_name",
    "parse_header",

    # Errors
    "ErrorKind",
    "VerifiError",
    "ValidationError",
    "EncodingError",

    # Validation
    "minimum_claims",
    "validate_credential_type",
    "validate_temporal",
    "validate_claims",

    # Signatures
    "SignatureScheme",
    "StructuralScheme",
    "Secp256k1Scheme",
    "Ed25519Scheme",
    "get_scheme",
    "verify_signature",
    "generate_signing_key",
    "sign_data",

    # Hashing
    "compute_credential_hash",
    "credential_hash_hex",
    "verify_credential_hash",

    # Output
    "PublicOutput",
    "assemble",
    "PUBLIC_OUTPUT_SIZE",
    "encode",
    "decode",
    "decode_hex",

    # Circuit
    "CredentialCircuit",
    "ValidationResult",
    "Outcome",
    "CommitChannel",
    "BufferCommitChannel",
    "FileCommitChannel",
    "validate",
    "run",

    # Verifier
    "PublicValuesVerifier",
    "VerificationResult",
    "VerificationOutcome",
    "verify_public_values",
]
