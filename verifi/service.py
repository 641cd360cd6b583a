"""
Verifi HTTP harness.

Hosts the circuit behind a small API: one credential record in, public
values or an abort reason out.
"""

from fastapi import FastAPI, HTTPException

from . import __version__
from .circuit import CredentialCircuit
from .config import ENV, SIGNATURE_SCHEME, default_scheme
from .encoding import decode_hex, encode
from .errors import EncodingError
from .logging_config import set_request_id
from .models import DecodeRequest, ValidateRequest
from .signing import get_scheme
from .verifier import PublicValuesVerifier

app = FastAPI(title="Verifi Credential Circuit")


def _hex_bytes(value: str) -> bytes:
    return bytes.fromhex(value.removeprefix("0x"))


@app.get("/health")
def health():
    return {"status": "ok", "version": __version__, "env": ENV, "scheme": SIGNATURE_SCHEME}


@app.post("/validate")
def validate_credential(req: ValidateRequest):
    set_request_id()
    try:
        credential = req.credential.to_credential()
        scheme = get_scheme(req.scheme) if req.scheme else default_scheme()
    except ValueError as e:
        raise HTTPException(400, str(e))

    result = CredentialCircuit(scheme).validate(credential)
    if not result.accepted():
        raise HTTPException(422, {"failure": result.failure.value, "reason": result.reason})
    return result.to_dict()


@app.post("/decode")
def decode_public_values(req: DecodeRequest):
    set_request_id()
    try:
        output = decode_hex(req.public_values)
        expected_subject = _hex_bytes(req.expected_subject) if req.expected_subject else None
    except (EncodingError, ValueError) as e:
        raise HTTPException(400, str(e))

    body = {"public_output": output.to_dict()}
    if expected_subject is not None or req.expected_type is not None or req.verification_time is not None:
        result = PublicValuesVerifier().verify(
            encode(output),
            expected_subject=expected_subject,
            expected_type=req.expected_type,
            verification_time=req.verification_time
        )
        body["verification"] = {"outcome": result.outcome.value, "reason": result.reason}
    return body
