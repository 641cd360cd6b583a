"""
Signature Scheme Tests

Real schemes must accept genuine issuer signatures and reject anything
else; the structural scheme stays the default.
"""

import unittest
from dataclasses import replace
from unittest.mock import patch

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from verifi import (
    CredentialCircuit,
    Ed25519Scheme,
    ErrorKind,
    Secp256k1Scheme,
    StructuralScheme,
    ValidationError,
    create_sample_credential,
    generate_signing_key,
    get_scheme,
    sign_data,
)
from verifi.config import default_scheme

T = 1_700_000_000
MESSAGE = b"\x00\x00\x00\x01\x00\x00\x00\x02" + bytes(64)


class SchemeTestCase(unittest.TestCase):

    def assertAborts(self, kind, scheme, message, signature, pubkey):
        with self.assertRaises(ValidationError) as ctx:
            scheme.verify(message, signature, pubkey)
        self.assertEqual(ctx.exception.kind, kind)


class TestSecp256k1(SchemeTestCase):

    def setUp(self):
        self.scheme = Secp256k1Scheme()
        self.private_key, self.public_key = generate_signing_key("secp256k1")
        self.signature = sign_data(MESSAGE, self.private_key, "secp256k1")

    def test_key_and_signature_shapes(self):
        self.assertEqual(len(self.private_key), 32)
        self.assertEqual(len(self.public_key), 33)
        self.assertIn(self.public_key[0], (2, 3))
        self.assertEqual(len(self.signature), 64)

    def test_genuine_signature_accepted(self):
        self.scheme.verify(MESSAGE, self.signature, self.public_key)

    def test_recovery_byte_tolerated(self):
        self.scheme.verify(MESSAGE, self.signature + b"\x1b", self.public_key)

    def test_trailing_bytes_rejected(self):
        for extra in (b"\x1b\x00", b"\x00" * 8, bytes(64)):
            self.assertAborts(
                ErrorKind.INVALID_SIGNATURE, self.scheme,
                MESSAGE, self.signature + extra, self.public_key
            )

    def test_uncompressed_key_accepted(self):
        uncompressed = ec.EllipticCurvePublicKey.from_encoded_point(
            ec.SECP256K1(), self.public_key
        ).public_bytes(serialization.Encoding.X962, serialization.PublicFormat.UncompressedPoint)
        self.assertEqual(len(uncompressed), 65)
        self.scheme.verify(MESSAGE, self.signature, uncompressed)

    def test_tampered_message_rejected(self):
        self.assertAborts(
            ErrorKind.INVALID_SIGNATURE, self.scheme,
            MESSAGE + b"\x00", self.signature, self.public_key
        )

    def test_other_key_rejected(self):
        _, other_public = generate_signing_key("secp256k1")
        self.assertAborts(
            ErrorKind.INVALID_SIGNATURE, self.scheme,
            MESSAGE, self.signature, other_public
        )

    def test_structural_checks_still_apply(self):
        self.assertAborts(ErrorKind.INVALID_SIGNATURE, self.scheme, MESSAGE, self.signature[:63], self.public_key)
        self.assertAborts(ErrorKind.INVALID_PUBLIC_KEY, self.scheme, MESSAGE, self.signature, self.public_key[:32])

    def test_off_curve_key_rejected(self):
        # x >= field prime cannot be a point
        self.assertAborts(
            ErrorKind.INVALID_PUBLIC_KEY, self.scheme,
            MESSAGE, self.signature, b"\x02" + b"\xff" * 32
        )


class TestEd25519(SchemeTestCase):

    def setUp(self):
        self.scheme = Ed25519Scheme()
        self.private_key, self.public_key = generate_signing_key("ed25519")
        self.signature = sign_data(MESSAGE, self.private_key, "ed25519")

    def test_genuine_signature_accepted(self):
        self.assertEqual(len(self.public_key), 32)
        self.scheme.verify(MESSAGE, self.signature, self.public_key)

    def test_tampered_signature_rejected(self):
        tampered = bytearray(self.signature)
        tampered[0] ^= 0x01
        self.assertAborts(ErrorKind.INVALID_SIGNATURE, self.scheme, MESSAGE, bytes(tampered), self.public_key)

    def test_tampered_message_rejected(self):
        self.assertAborts(ErrorKind.INVALID_SIGNATURE, self.scheme, MESSAGE[:-1], self.signature, self.public_key)

    def test_lengths(self):
        self.assertAborts(ErrorKind.INVALID_SIGNATURE, self.scheme, MESSAGE, self.signature + b"\x00", self.public_key)
        self.assertAborts(ErrorKind.INVALID_PUBLIC_KEY, self.scheme, MESSAGE, self.signature, b"\x02" * 33)


class TestSchemeRegistry(unittest.TestCase):

    def test_lookup(self):
        self.assertIsInstance(get_scheme("structural"), StructuralScheme)
        self.assertIsInstance(get_scheme("SECP256K1"), Secp256k1Scheme)
        self.assertIsInstance(get_scheme("ed25519"), Ed25519Scheme)

    def test_unknown_scheme(self):
        with self.assertRaises(ValueError):
            get_scheme("rsa")
        with self.assertRaises(ValueError):
            generate_signing_key("structural")

    def test_default_is_structural(self):
        self.assertEqual(CredentialCircuit().scheme.name, "structural")


class TestConfiguredScheme(unittest.TestCase):
    """VERIFI_ENV and VERIFI_SIGNATURE_SCHEME drive default_scheme()."""

    def test_configured_scheme_used_by_circuit(self):
        for name, cls in (("secp256k1", Secp256k1Scheme), ("ed25519", Ed25519Scheme)):
            with patch("verifi.config.SIGNATURE_SCHEME", name):
                self.assertIsInstance(default_scheme(), cls)
                self.assertEqual(CredentialCircuit().scheme.name, name)

    def test_structural_in_prod_warns(self):
        with patch("verifi.config.ENV", "prod"), patch("verifi.config.SIGNATURE_SCHEME", "structural"):
            with self.assertLogs("verifi.config", "WARNING") as logs:
                scheme = default_scheme()
        self.assertIsInstance(scheme, StructuralScheme)
        self.assertIn("not cryptographically verified", logs.output[0])

    def test_unknown_configured_scheme(self):
        with patch("verifi.config.SIGNATURE_SCHEME", "rsa"):
            with self.assertRaises(ValueError):
                default_scheme()


class TestCircuitWithRealSchemes(unittest.TestCase):

    def signed_credential(self, scheme_name):
        credential = create_sample_credential(T)
        private_key, public_key = generate_signing_key(scheme_name)
        signature = sign_data(credential.credential_data, private_key, scheme_name)
        return replace(credential, signature=signature, issuer_pubkey=public_key)

    def test_secp256k1_credential(self):
        credential = self.signed_credential("secp256k1")
        circuit = CredentialCircuit(Secp256k1Scheme())
        self.assertTrue(circuit.validate(credential).accepted())

        tampered = bytearray(credential.signature)
        tampered[40] ^= 0x01
        result = circuit.validate(replace(credential, signature=bytes(tampered)))
        self.assertEqual(result.failure, ErrorKind.INVALID_SIGNATURE)

    def test_ed25519_credential(self):
        credential = self.signed_credential("ed25519")
        circuit = CredentialCircuit(Ed25519Scheme())
        self.assertTrue(circuit.validate(credential).accepted())

        # Structural scheme rejects the 32-byte Ed25519 key
        result = CredentialCircuit(StructuralScheme()).validate(credential)
        self.assertEqual(result.failure, ErrorKind.INVALID_PUBLIC_KEY)

    def test_sample_signature_rejected_by_real_scheme(self):
        credential = create_sample_credential(T)
        result = CredentialCircuit(Ed25519Scheme()).validate(credential)
        self.assertEqual(result.failure, ErrorKind.INVALID_PUBLIC_KEY)


if __name__ == "__main__":
    unittest.main()
