import copy
import sys
from typing import Any, Dict, List, Optional

import yaml

from blocklayer.ledger import Ledger
from blocklayer.logging_utils import JsonLinesLogger
from core.exceptions import ConfigError

DEFAULT_CONFIG: Dict[str, Any] = {
    "ledger": {"ledger_id": "main", "genesis_time": 1700000000, "block_interval": 10},
    "payloads": [{"amount": 10}, {"amount": 5}],
}

# Config field name -> Block attribute
TAMPER_FIELDS = {
    "body": "body",
    "height": "height",
    "time": "time",
    "previousBlockHash": "previous_block_hash",
}


class ChainSimulator:
    """
    Builds a chain from a YAML config, optionally tampers with one block
    afterwards (without resealing it), then audits every block.
    """

    def __init__(self, config_path="config/default_config.yaml", output_file=sys.stdout):
        self.config: Dict[str, Any] = {}
        self.load_config(config_path)

        ledger_cfg = self.config.get("ledger", {})
        self.genesis_time = ledger_cfg.get("genesis_time", 0)
        self.block_interval = ledger_cfg.get("block_interval", 1)

        self.logger = JsonLinesLogger(output_file)
        self.ledger = Ledger(logger=self.logger, ledger_id=ledger_cfg.get("ledger_id", "main"))

    def load_config(self, path):
        try:
            with open(path, "r") as f:
                self.config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            print(f"Config file not found at {path}, using defaults.", file=sys.stderr)
            self.config = copy.deepcopy(DEFAULT_CONFIG)
        self._check_config()

    def _check_config(self):
        if not isinstance(self.config, dict):
            raise ConfigError("config root must be a mapping")
        ledger_cfg = self.config.get("ledger", {})
        if not isinstance(ledger_cfg, dict):
            raise ConfigError("'ledger' must be a mapping")
        for key in ("genesis_time", "block_interval"):
            value = ledger_cfg.get(key, 0)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigError(f"ledger.{key} must be a non-negative integer, got {value!r}")
        if not isinstance(self.config.get("payloads", []), list):
            raise ConfigError("'payloads' must be a list")
        tamper = self.config.get("tamper")
        if tamper is not None:
            if not isinstance(tamper, dict) or "height" not in tamper or "value" not in tamper:
                raise ConfigError("'tamper' needs 'height', 'field' and 'value'")
            if tamper.get("field") not in TAMPER_FIELDS:
                raise ConfigError(
                    f"tamper.field must be one of {sorted(TAMPER_FIELDS)}, got {tamper.get('field')!r}"
                )

    def build(self) -> Ledger:
        self.ledger.create_genesis(self.genesis_time)
        current_time = self.genesis_time
        for payload in self.config.get("payloads", []):
            current_time += self.block_interval
            self.ledger.add_block(payload, current_time)
        return self.ledger

    def tamper(self) -> Optional[int]:
        """Overwrite one field of a sealed block as configured. Returns the tampered height."""
        cfg = self.config.get("tamper")
        if not cfg:
            return None
        block = self.ledger.get_block(cfg["height"])
        if block is None:
            raise ConfigError(f"tamper.height {cfg['height']} is not in the ledger")
        setattr(block, TAMPER_FIELDS[cfg["field"]], cfg["value"])
        return cfg["height"]

    def run(self) -> List[int]:
        print("Starting chain simulation...", file=sys.stderr)
        self.build()
        self.tamper()
        tampered = self.ledger.audit()
        print(
            f"Simulation finished. Blocks: {len(self.ledger)}, tampered: {tampered}",
            file=sys.stderr,
        )
        return tampered
