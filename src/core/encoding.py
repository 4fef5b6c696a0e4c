import binascii
import json
from typing import Any


def canonical_json(obj: Any) -> bytes:
    """
    Single byte encoding for structured data:
    - sort_keys=True so logically equal dicts give equal bytes
    - compact separators, no whitespace
    - UTF-8, non-ASCII kept as-is
    - NaN/Infinity rejected (not valid JSON)
    """
    text = json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def ordered_json(obj: Any) -> bytes:
    # Same as canonical_json but keeps dict insertion order.
    # Used for the block field set, whose key order is fixed by Block.to_dict().
    text = json.dumps(
        obj,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def encode_payload(data: Any) -> str:
    return binascii.hexlify(canonical_json(data)).decode()


def decode_payload(body: str) -> Any:
    raw = binascii.unhexlify(body)
    return json.loads(raw.decode("utf-8"))
