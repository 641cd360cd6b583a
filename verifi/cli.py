#!/usr/bin/env python3
"""
Verifi Command Line Interface

Usage:
    verifi validate --input <file> [--output <file>] [--scheme <name>]
    verifi hash --input <file>
    verifi decode (--file <file> | --hex <hex>)
    verifi sample [--output <file>] [--scheme <name>]
    verifi demo
"""

import argparse
import json
import sys
import time
from dataclasses import replace


def load_json(path: str) -> dict:
    """Load JSON from file."""
    with open(path, 'r') as f:
        return json.load(f)


def save_json(data: dict, path: str):
    """Save JSON to file."""
    with open(path, 'w') as f:
        json.dump(data, f, indent=2)


def load_credential(path: str):
    from verifi import CredentialInput
    return CredentialInput.from_dict(load_json(path))


def _scheme(name):
    from verifi import get_scheme
    from verifi.config import default_scheme
    return get_scheme(name) if name else default_scheme()


def print_public_output(output):
    from verifi import credential_type_name

    print(f"Subject: 0x{output.subject.hex()}")
    print(f"Credential Type: {output.credential_type} ({credential_type_name(output.credential_type)})")
    print(f"Credential Hash: 0x{output.credential_hash.hex()}")
    print(f"Issued At: {output.issued_at} (UNIX timestamp)")
    print(f"Expires At: {output.expires_at} (UNIX timestamp)")


def cmd_validate(args):
    """Run the circuit on one credential record."""
    from verifi import CredentialCircuit, FileCommitChannel

    credential = load_credential(args.input)
    circuit = CredentialCircuit(_scheme(args.scheme))
    result = circuit.validate(credential)

    print(json.dumps(result.to_dict(), indent=2))

    if not result.accepted():
        print(f"\n✗ ABORTED: {result.failure.value}", file=sys.stderr)
        return 1

    if args.output:
        FileCommitChannel(args.output).commit(result.public_values)
        print(f"Public values saved to: {args.output}", file=sys.stderr)

    print(f"\n✓ COMMITTED ({len(result.public_values)} bytes)", file=sys.stderr)
    return 0


def cmd_hash(args):
    """Compute the credential hash of a record."""
    from verifi import credential_hash_hex

    credential = load_credential(args.input)
    h = credential_hash_hex(
        credential.subject,
        credential.credential_type,
        credential.credential_data,
        credential.issuer_pubkey
    )
    print(f"credential_hash: {h}")
    return 0


def cmd_decode(args):
    """Decode committed public values."""
    from verifi import EncodingError, decode, decode_hex

    try:
        if args.hex:
            output = decode_hex(args.hex)
        else:
            with open(args.file, 'rb') as f:
                output = decode(f.read())
    except EncodingError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2

    print_public_output(output)
    return 0


def build_sample(scheme: str, current_time: int):
    """Sample credential; real schemes are signed with a fresh issuer key."""
    from verifi import create_sample_credential, generate_signing_key, sign_data

    credential = create_sample_credential(current_time)
    if scheme == "structural":
        return credential

    private_key, public_key = generate_signing_key(scheme)
    signature = sign_data(credential.credential_data, private_key, scheme)
    return replace(credential, signature=signature, issuer_pubkey=public_key)


def cmd_sample(args):
    """Write a sample credential record."""
    credential = build_sample(args.scheme, args.now or int(time.time()))
    record = credential.to_dict()

    if args.output:
        save_json(record, args.output)
        print(f"Sample credential saved to: {args.output}", file=sys.stderr)
    else:
        print(json.dumps(record, indent=2))
    return 0


def cmd_demo(args):
    """Run a demonstration of the circuit."""
    from verifi import CredentialCircuit, StructuralScheme, build_credential_data, decode

    print("=" * 60)
    print("Verifi Credential Circuit Demonstration")
    print("=" * 60)

    now = int(time.time())
    circuit = CredentialCircuit(StructuralScheme())
    credential = build_sample("structural", now)

    print("\n" + "-" * 60)
    print("Scenario 1: Accredited investor credential")
    print("-" * 60)
    result = circuit.validate(credential)
    print(f"Outcome: {result.outcome.value}")
    if result.accepted():
        print(f"Public values length: {len(result.public_values)} bytes")
        print_public_output(decode(result.public_values))
        print(f"Raw public values (hex): 0x{result.public_values.hex()}")

    print("\n" + "-" * 60)
    print("Scenario 2: Credential checked after expiry")
    print("-" * 60)
    expired = replace(credential, current_time=credential.expires_at + 1)
    result = circuit.validate(expired)
    print(f"Outcome: {result.outcome.value} ({result.failure.value if result.failure else '-'})")

    print("\n" + "-" * 60)
    print("Scenario 3: Accredited investor with a single claim")
    print("-" * 60)
    one_claim = replace(credential, credential_data=build_credential_data([bytes(32)]))
    result = circuit.validate(one_claim)
    print(f"Outcome: {result.outcome.value} ({result.failure.value if result.failure else '-'})")

    print("\n" + "=" * 60)
    print("Demonstration complete.")
    print("=" * 60)
    return 0


def main(argv=None):
    from verifi.config import LOG_FILE, LOG_JSON, LOG_LEVEL, is_debug
    from verifi.logging_config import configure_logging

    parser = argparse.ArgumentParser(
        description="Verifi Credential Circuit CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  verifi demo                               Run demonstration
  verifi sample -o credential.json          Write a sample credential
  verifi validate -i credential.json -o public_values.bin
  verifi decode -f public_values.bin
  verifi hash -i credential.json
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    schemes = ["structural", "secp256k1", "ed25519"]

    validate_parser = subparsers.add_parser("validate", help="Validate a credential record")
    validate_parser.add_argument("-i", "--input", required=True, help="Credential record JSON file")
    validate_parser.add_argument("-o", "--output", help="Output file for public values")
    validate_parser.add_argument("-s", "--scheme", choices=schemes, help="Signature scheme")

    hash_parser = subparsers.add_parser("hash", help="Compute credential hash")
    hash_parser.add_argument("-i", "--input", required=True, help="Credential record JSON file")

    decode_parser = subparsers.add_parser("decode", help="Decode public values")
    source = decode_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-f", "--file", help="Binary public values file")
    source.add_argument("-x", "--hex", help="Public values as hex")

    sample_parser = subparsers.add_parser("sample", help="Write a sample credential record")
    sample_parser.add_argument("-o", "--output", help="Output file")
    sample_parser.add_argument("-s", "--scheme", choices=schemes, default="structural", help="Signature scheme")
    sample_parser.add_argument("-t", "--now", type=int, help="Current UNIX time to build around")

    subparsers.add_parser("demo", help="Run demonstration")

    args = parser.parse_args(argv)

    configure_logging("DEBUG" if is_debug() else LOG_LEVEL, LOG_JSON, LOG_FILE)

    commands = {
        "validate": cmd_validate,
        "hash": cmd_hash,
        "decode": cmd_decode,
        "sample": cmd_sample,
        "demo": cmd_demo,
    }

    if args.command not in commands:
        parser.print_help()
        return 0
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
