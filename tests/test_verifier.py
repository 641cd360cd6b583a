"""
Public Values Verification Tests

The verifier sees only the 72 committed bytes plus what it already knows.
"""

import unittest
from dataclasses import replace

from verifi import (
    CredentialType,
    PublicValuesVerifier,
    StructuralScheme,
    VerificationOutcome,
    create_sample_credential,
    run,
    verify_public_values,
)

T = 1_700_000_000


class TestPublicValuesVerifier(unittest.TestCase):

    def setUp(self):
        self.credential = create_sample_credential(T)
        self.public_values = run(self.credential, StructuralScheme())

    def test_valid(self):
        result = verify_public_values(
            self.public_values,
            expected_subject=self.credential.subject,
            expected_type=CredentialType.ACCREDITED_INVESTOR,
            credential=self.credential,
            verification_time=T
        )
        self.assertTrue(result.is_valid())
        self.assertEqual(result.outcome, VerificationOutcome.VALID)
        self.assertEqual(result.output.subject, self.credential.subject)

    def test_malformed(self):
        result = verify_public_values(self.public_values[:-1], verification_time=T)
        self.assertFalse(result.is_valid())
        self.assertEqual(result.reason, "Malformed public values")

    def test_subject_mismatch(self):
        result = verify_public_values(self.public_values, expected_subject=bytes(20), verification_time=T)
        self.assertEqual(result.reason, "Subject mismatch")

    def test_type_mismatch(self):
        result = verify_public_values(self.public_values, expected_type=1, verification_time=T)
        self.assertEqual(result.reason, "Credential type mismatch")

    def test_accepted_types(self):
        verifier = PublicValuesVerifier(accepted_types=[CredentialType.KYC, CredentialType.AML_CLEARED])
        result = verifier.verify(self.public_values, verification_time=T)
        self.assertEqual(result.reason, "Credential type not accepted")

        verifier = PublicValuesVerifier(accepted_types=[CredentialType.ACCREDITED_INVESTOR])
        self.assertTrue(verifier.verify(self.public_values, verification_time=T).is_valid())

    def test_expected_hash(self):
        result = verify_public_values(self.public_values, expected_hash=bytes(32), verification_time=T)
        self.assertEqual(result.reason, "Credential hash mismatch")

        committed_hash = self.public_values[24:56]
        result = verify_public_values(self.public_values, expected_hash=committed_hash, verification_time=T)
        self.assertTrue(result.is_valid())

    def test_hash_recomputed_from_credential(self):
        other = replace(self.credential, issuer_pubkey=b"\x03" * 33)
        result = verify_public_values(self.public_values, credential=other, verification_time=T)
        self.assertEqual(result.reason, "Credential hash does not match credential")

    def test_window_recomputed_from_credential(self):
        other = replace(self.credential, expires_at=0)
        result = verify_public_values(self.public_values, credential=other, verification_time=T)
        self.assertEqual(result.reason, "Validity window mismatch")

    def test_expired_at_verification_time(self):
        expires_at = self.credential.expires_at
        self.assertTrue(verify_public_values(self.public_values, verification_time=expires_at).is_valid())
        result = verify_public_values(self.public_values, verification_time=expires_at + 1)
        self.assertEqual(result.reason, "Credential expired")

    def test_not_yet_issued(self):
        result = verify_public_values(self.public_values, verification_time=self.credential.issued_at - 1)
        self.assertEqual(result.reason, "Credential not yet issued")

    def test_no_expiry(self):
        public_values = run(replace(self.credential, expires_at=0), StructuralScheme())
        self.assertTrue(verify_public_values(public_values, verification_time=2**63).is_valid())


if __name__ == "__main__":
    unittest.main()
