"""An append-only chain of blocks starting from a genesis block."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any


class ChainError(ValueError):
    """Raised when a block is rejected or the chain is inconsistent."""


@dataclass
class Block:
    """A block of transactions."""

    index: int
    prev_hash: str
    hash: str
    transactions: list[str] = field(default_factory=list)
    timestamp: int = field(default_factory=lambda: int(time.time()))
    nonce: int = 0
    validator: str = ""


class Blockchain:
    """A list of linked blocks, validated on append."""

    def __init__(self, difficulty: int = 2) -> None:
        self.difficulty = difficulty
        self._lock = threading.RLock()
        self.blocks: list[Block] = [
            Block(
                index=0,
                prev_hash="0",
                hash="0",
                transactions=["Genesis Block"],
                validator="system",
            )
        ]

    def add_block(self, block: Block | None) -> None:
        """Append a block that follows the latest one."""
        with self._lock:
            if block is None:
                raise ChainError("block is nil")
            last = self.blocks[-1]
            if block.index != last.index + 1:
                raise ChainError("invalid block index")
            if block.prev_hash != last.hash:
                raise ChainError("invalid previous hash")
            self.blocks.append(block)

    def get_latest_block(self) -> Block | None:
        """Return the last block, or None if the chain is empty."""
        with self._lock:
            return self.blocks[-1] if self.blocks else None

    def get_block(self, index: int) -> Block:
        """Return the block at a position in the chain."""
        with self._lock:
            if not 0 <= index < len(self.blocks):
                raise ChainError("block not found")
            return self.blocks[index]

    def get_block_count(self) -> int:
        """Return the number of blocks."""
        with self._lock:
            return len(self.blocks)

    def validate_chain(self) -> None:
        """Raise ChainError if any block does not follow its predecessor."""
        with self._lock:
            for prev, current in zip(self.blocks, self.blocks[1:]):
                if current.prev_hash != prev.hash:
                    raise ChainError("invalid chain: hash mismatch")
                if current.index != prev.index + 1:
                    raise ChainError("invalid chain: index mismatch")

    def get_blockchain_info(self) -> dict[str, Any]:
        """Return a summary of the chain."""
        with self._lock:
            return {
                "blocks": len(self.blocks),
                "difficulty": self.difficulty,
                "latestHash": self.blocks[-1].hash,
            }