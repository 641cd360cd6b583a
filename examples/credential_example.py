#!/usr/bin/env python3
"""
Verifi Example: Accredited Investor Credential

An issuer signs an accredited-investor credential with Ed25519, the holder
runs it through the circuit, and a verifier checks the committed public
values without seeing the credential contents.

Run with:
    python examples/credential_example.py
"""

import time

from verifi import (
    CredentialCircuit,
    CredentialInput,
    CredentialType,
    Ed25519Scheme,
    PublicValuesVerifier,
    build_credential_data,
    generate_signing_key,
    sign_data,
)


def main():
    now = int(time.time())

    # Issuer side
    issuer_private, issuer_public = generate_signing_key("ed25519")
    claims = [
        b"net_worth_over_1m".ljust(32, b"\x00"),
        b"jurisdiction_us".ljust(32, b"\x00"),
    ]
    credential_data = build_credential_data(claims)
    signature = sign_data(credential_data, issuer_private, "ed25519")

    # Holder side: private witness
    credential = CredentialInput(
        subject=bytes.fromhex("1234567890123456789012345678901234567890"),
        credential_type=CredentialType.ACCREDITED_INVESTOR,
        credential_data=credential_data,
        signature=signature,
        issuer_pubkey=issuer_public,
        issued_at=now - 86400,
        expires_at=now + 365 * 86400,
        current_time=now,
    )

    result = CredentialCircuit(Ed25519Scheme()).validate(credential)
    print(f"Circuit outcome: {result.outcome.value}")
    if not result.accepted():
        print(f"Abort reason: {result.failure.value} ({result.reason})")
        return 1

    print(f"Public values: 0x{result.public_values.hex()}")

    # Verifier side: only public values
    verifier = PublicValuesVerifier(accepted_types=[CredentialType.ACCREDITED_INVESTOR])
    verification = verifier.verify(
        result.public_values,
        expected_subject=credential.subject,
        verification_time=now,
    )
    print(f"Verification: {verification.outcome.value}")
    return 0 if verification.is_valid() else 1


if __name__ == "__main__":
    raise SystemExit(main())
