from .encoding import canonical_json, ordered_json, encode_payload, decode_payload
from .crypto_layer import sha256_hex as hash
from .exceptions import (
    BlockLedgerError,
    PayloadEncodeError,
    IntegrityCheckError,
    PayloadDecodeError,
    LedgerError,
    ConfigError,
)

__all__ = [
    "canonical_json",
    "ordered_json",
    "encode_payload",
    "decode_payload",
    "hash",
    "BlockLedgerError",
    "PayloadEncodeError",
    "IntegrityCheckError",
    "PayloadDecodeError",
    "LedgerError",
    "ConfigError",
]
