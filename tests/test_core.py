import sys
import os
import binascii
import hashlib

import pytest

# Add src to path
sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from core import canonical_json, ordered_json, encode_payload, decode_payload, hash
from core.exceptions import BlockLedgerError, PayloadDecodeError


def test_canonical_json_deterministic():
    """Logically equal dicts must produce the same bytes regardless of key order."""
    a = {"z": 1, "a": [3, 1]}
    b = {"a": [3, 1], "z": 1}
    assert canonical_json(a) == canonical_json(b)
    assert canonical_json(a) == b'{"a":[3,1],"z":1}'

def test_canonical_json_keeps_unicode():
    assert canonical_json({"name": "Đà Nẵng"}) == '{"name":"Đà Nẵng"}'.encode("utf-8")

def test_canonical_json_rejects_nan():
    with pytest.raises(ValueError):
        canonical_json({"x": float("nan")})

def test_ordered_json_keeps_insertion_order():
    assert ordered_json({"z": 1, "a": None}) == b'{"z":1,"a":null}'

def test_encode_payload_is_hex_of_canonical_json():
    body = encode_payload({"amount": 10})
    assert body == binascii.hexlify(b'{"amount":10}').decode()
    assert body == body.lower()

def test_decode_payload_inverse():
    for value in [{"amount": 10}, [1, "two", None], "text", 42, True, None, {"nested": {"k": [1.5]}}]:
        assert decode_payload(encode_payload(value)) == value

def test_decode_payload_bad_hex():
    with pytest.raises(ValueError):
        decode_payload("not-hex!")

def test_sha256_known_vector():
    assert hash(b"abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert hash(b"block") == hashlib.sha256(b"block").hexdigest()

def test_payload_decode_error_carries_cause():
    cause = ValueError("boom")
    err = PayloadDecodeError("cannot decode", cause=cause)
    assert err.cause is cause
    assert isinstance(err, BlockLedgerError)
