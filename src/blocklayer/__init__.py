"""
Blocklayer module - Block, Ledger, and event logging
"""

from .block import Block, GENESIS_DATA, genesis_payload
from .ledger import Ledger, seal_block
from .logging_utils import JsonLinesLogger

__all__ = [
    "Block",
    "GENESIS_DATA",
    "genesis_payload",
    "Ledger",
    "seal_block",
    "JsonLinesLogger",
]
