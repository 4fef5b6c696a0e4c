"""
Module Ledger - chain manager: seals blocks, stores them by height, audits and persists them.

The ledger only audits blocks one by one. It does not check links between
blocks, height sequences or forks.
"""

import json
from pathlib import Path
from typing import Any, List, Optional

from blocklayer.block import Block, genesis_payload
from blocklayer.logging_utils import JsonLinesLogger
from core.exceptions import LedgerError


def seal_block(block: Block) -> Block:
    """Assign the block's hash from its current fields."""
    block.hash = block.compute_hash()
    return block


class Ledger:
    """
    Ledger stores sealed blocks indexed by height.
    """

    def __init__(self, logger: Optional[JsonLinesLogger] = None, ledger_id: str = "main"):
        self.ledger_id = ledger_id
        self.logger = logger
        self.blocks: dict[int, Block] = {}

    def _log(self, event: str, block: Block, height: Optional[int] = None, **extra: Any) -> None:
        # height defaults to the block field; audit passes the storage height instead
        if self.logger is None:
            return
        self.logger.log_event(
            time=block.time,
            ledger_id=self.ledger_id,
            event=event,
            height=block.height if height is None else height,
            block_hash=block.hash,
            extra=extra or None,
        )

    def create_genesis(self, time: int) -> Block:
        """
        Create and seal the genesis block at height 0.

        Raises:
            LedgerError: if the ledger already holds blocks
        """
        if self.blocks:
            raise LedgerError("genesis block already exists")
        block = Block(genesis_payload())
        block.time = time
        seal_block(block)
        self.blocks[0] = block
        self._log("genesis_created", block)
        return block

    def add_block(self, data: Any, time: int) -> Block:
        """
        Build a block for data on top of the latest block, seal it and store it.

        Args:
            data: any JSON-serializable payload
            time: block timestamp (seconds since epoch)

        Returns:
            The sealed block
        """
        block = Block(data)
        parent = self.latest()
        block.height = self.get_height() + 1
        block.previous_block_hash = parent.hash if parent is not None else None
        block.time = time
        seal_block(block)
        self.blocks[block.height] = block
        self._log("block_sealed", block)
        return block

    def get_block(self, height: int) -> Optional[Block]:
        return self.blocks.get(height)

    def latest(self) -> Optional[Block]:
        if not self.blocks:
            return None
        return self.blocks[max(self.blocks.keys())]

    def get_height(self) -> int:
        """Highest block height, or -1 if the ledger is empty."""
        if not self.blocks:
            return -1
        return max(self.blocks.keys())

    def __len__(self) -> int:
        return len(self.blocks)

    def _heights(self) -> List[int]:
        return sorted(self.blocks.keys())

    def _report(self, results: List[tuple]) -> List[int]:
        tampered = []
        last_time = 0
        for height, valid in results:
            block = self.blocks[height]
            last_time = max(last_time, block.time)
            if not valid:
                tampered.append(height)
                self._log("block_tampered", block, height=height)
        if self.logger is not None:
            self.logger.log_event(
                time=last_time,
                ledger_id=self.ledger_id,
                event="audit_complete",
                extra={"checked": len(results), "tampered": tampered},
            )
        return tampered

    def audit(self) -> List[int]:
        """
        Validate every block on its own.

        Returns:
            Heights of blocks whose hash no longer matches their fields, ascending
        """
        results = [(h, self.blocks[h].validate()) for h in self._heights()]
        return self._report(results)

    async def audit_async(self) -> List[int]:
        heights = self._heights()
        results = [(h, await self.blocks[h].validate_async()) for h in heights]
        return self._report(results)

    def payloads(self) -> List[Any]:
        return [self.blocks[h].get_payload() for h in self._heights()]

    # -------- Persistence --------

    def to_json(self) -> str:
        return json.dumps({
            "ledger_id": self.ledger_id,
            "blocks": [self.blocks[h].to_dict() for h in self._heights()],
        }, indent=2)

    @classmethod
    def from_json(cls, json_str: str, logger: Optional[JsonLinesLogger] = None) -> "Ledger":
        """
        Rebuild a ledger from to_json() output. Blocks are loaded as stored,
        neither resealed nor validated.

        Raises:
            LedgerError: if the document or a block record is malformed
        """
        try:
            data = json.loads(json_str)
            ledger = cls(logger=logger, ledger_id=data.get("ledger_id", "main"))
            # Index by position: the stored height field may itself be tampered.
            for position, record in enumerate(data["blocks"]):
                ledger.blocks[position] = Block.from_dict(record)
        except (ValueError, KeyError, TypeError, AttributeError, RecursionError) as e:
            raise LedgerError(f"malformed ledger data: {e}") from e
        return ledger

    def save(self, path) -> None:
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path, logger: Optional[JsonLinesLogger] = None) -> "Ledger":
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise LedgerError(f"cannot read ledger file {path}: {e}") from e
        return cls.from_json(text, logger=logger)
