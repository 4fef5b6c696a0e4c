# logging_utils.py
from __future__ import annotations

import json
from typing import Any, Dict, TextIO, Optional


class JsonLinesLogger:
    """
    JSON Lines event log:
    - One event per line.
    - Never reads the system clock; time is the block timestamp given by the caller.
    - sort_keys=True so the output is deterministic.
    """

    def __init__(self, file: TextIO):
        self._file = file

    def log_event(
        self,
        *,
        time: int,
        ledger_id: str,
        event: str,
        height: Optional[int] = None,
        block_hash: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        # extra goes in first so it can never overwrite the core fields
        record: Dict[str, Any] = dict(extra) if extra else {}
        record.update({
            "time": time,
            "ledger": ledger_id,
            "event": event,
        })
        if height is not None:
            record["height"] = height
        if block_hash is not None:
            record["hash"] = block_hash

        line = json.dumps(record, sort_keys=True)
        self._file.write(line + "\n")
        self._file.flush()
