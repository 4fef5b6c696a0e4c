"""
Module Block - a single ledger unit: encoded payload, height, time,
link to the previous block and a content hash binding all of them.
"""

from typing import Any, Optional

from nacl.exceptions import CryptoError

from core.encoding import ordered_json, encode_payload, decode_payload
from core.crypto_layer import sha256_hex
from core.exceptions import PayloadEncodeError, IntegrityCheckError, PayloadDecodeError

GENESIS_DATA = "Genesis Block"


def genesis_payload() -> dict:
    return {"data": GENESIS_DATA}


class Block:
    """
    Block fields are populated by the chain manager (height, time,
    previous_block_hash) and then sealed by assigning hash = compute_hash().
    """

    def __init__(self, data: Any):
        self.hash: Optional[str] = None
        self.height: int = 0
        # body holds hex(UTF-8(canonical JSON)) of the payload, never the raw value
        try:
            self.body: str = encode_payload(data)
        except (TypeError, ValueError, RecursionError) as e:
            raise PayloadEncodeError(f"payload is not serializable: {e}") from e
        self.time: int = 0
        self.previous_block_hash: Optional[str] = None

    def to_dict(self) -> dict:
        # Key names and order are part of the digest input.
        return {
            "hash": self.hash,
            "height": self.height,
            "body": self.body,
            "time": self.time,
            "previousBlockHash": self.previous_block_hash,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Block":
        """Rebuild a block from its stored field set without re-encoding the body."""
        block = cls.__new__(cls)
        block.hash = data["hash"]
        block.height = data["height"]
        block.body = data["body"]
        block.time = data["time"]
        block.previous_block_hash = data["previousBlockHash"]
        return block

    def compute_hash(self) -> str:
        """
        Digest of the whole field set with hash treated as absent.

        hash is cleared for the computation and restored afterwards, so the
        block's observable state is unchanged when this returns or raises.
        """
        saved = self.hash
        self.hash = None
        try:
            return sha256_hex(ordered_json(self.to_dict()))
        finally:
            self.hash = saved

    def validate(self) -> bool:
        """
        Check whether the stored hash still matches the block's current fields.

        Returns False if any field changed since sealing, and also for an
        unsealed block (hash is None). Raises IntegrityCheckError when the
        digest cannot be computed at all.
        """
        saved = self.hash
        try:
            fresh = self.compute_hash()
        except (TypeError, ValueError, RecursionError, CryptoError) as e:
            raise IntegrityCheckError(f"cannot compute block digest: {e}") from e
        if saved is None:
            return False
        return saved == fresh

    def get_payload(self) -> Any:
        """
        Decode body back into the original payload.

        Returns None for the genesis block ({"data": "Genesis Block"}).
        Raises PayloadDecodeError if body is not valid hex / UTF-8 / JSON.
        """
        try:
            obj = decode_payload(self.body)
        except (TypeError, ValueError, RecursionError) as e:
            raise PayloadDecodeError(f"cannot decode block body: {e}", cause=e) from e

        if isinstance(obj, dict) and obj.get("data") == GENESIS_DATA:
            return None
        return obj

    async def validate_async(self) -> bool:
        return self.validate()

    async def get_payload_async(self) -> Any:
        return self.get_payload()

    def __repr__(self) -> str:
        return (
            f"Block(height={self.height}, time={self.time}, "
            f"hash={self.hash}, previous_block_hash={self.previous_block_hash})"
        )
