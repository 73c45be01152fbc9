"""Proof-of-Stake consensus: validator registry, stake-weighted selection and block production."""

from __future__ import annotations

import hashlib
import random
import threading
import time
from dataclasses import dataclass, field
from typing import Callable


class ConsensusError(ValueError):
    """Raised when a validator or block operation is rejected."""


@dataclass
class Validator:
    """A participant that stakes coins to produce blocks."""

    address: str
    staked_amount: float
    reward_rate: float = 5.0
    is_active: bool = True
    joined_at: int = field(default_factory=lambda: int(time.time()))


@dataclass
class Block:
    """A block produced by a validator."""

    index: int
    prev_hash: str
    validator: str
    transactions: list[str] = field(default_factory=list)
    timestamp: int = field(default_factory=lambda: int(time.time()))
    nonce: int = 0
    hash: str = ""

    def calculate_hash(self) -> str:
        """Return the SHA-256 hex digest of the block's contents."""
        txs = "[" + " ".join(self.transactions) + "]"
        data = (
            f"{self.index}{self.timestamp}{txs}"
            f"{self.prev_hash}{self.validator}{self.nonce}"
        )
        return hashlib.sha256(data.encode()).hexdigest()


class ProofOfStake:
    """Registry of validators that picks block producers in proportion to their stake."""

    def __init__(
        self,
        *,
        min_stake: float = 1000.0,
        block_time: int = 10,
        reward_per_block: float = 2.0,
        random_source: Callable[[], float] = random.random,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.validators: dict[str, Validator] = {}
        self.min_stake = min_stake
        self.block_time = block_time
        self.reward_per_block = reward_per_block
        self._random = random_source
        self._clock = clock
        self._current_block_index = 0
        self._lock = threading.RLock()

    def register_validator(self, address: str, staked_amount: float) -> None:
        """Register a new active validator with the given stake."""
        with self._lock:
            if not address:
                raise ConsensusError("invalid address")
            if staked_amount < self.min_stake:
                raise ConsensusError(
                    f"insufficient stake: minimum {self.min_stake:f} GLD required"
                )
            if address in self.validators:
                raise ConsensusError("validator already registered")
            self.validators[address] = Validator(
                address=address,
                staked_amount=staked_amount,
                joined_at=int(self._clock()),
            )

    def select_validator(self) -> Validator:
        """Pick an active validator at random, weighted by stake."""
        with self._lock:
            if not self.validators:
                raise ConsensusError("no validators available")
            active = [v for v in self.validators.values() if v.is_active]
            if not active:
                raise ConsensusError("no active validators")
            total = sum(v.staked_amount for v in active)
            target = self._random() * total
            cumulative = 0.0
            for validator in active:
                cumulative += validator.staked_amount
                if cumulative >= target:
                    return validator
            return active[0]

    def create_block(self, transactions: list[str], prev_hash: str) -> Block:
        """Produce the next block with a selected validator, rewarding it."""
        validator = self.select_validator()
        with self._lock:
            self._current_block_index += 1
            index = self._current_block_index

        block = Block(
            index=index,
            prev_hash=prev_hash,
            validator=validator.address,
            transactions=transactions,
            timestamp=int(self._clock()),
        )
        block.hash = block.calculate_hash()
        self._reward_validator(validator.address)
        return block

    def _reward_validator(self, address: str) -> None:
        with self._lock:
            validator = self.validators.get(address)
            if validator is not None:
                validator.staked_amount += self.reward_per_block

    def get_validator_info(self, address: str) -> Validator:
        """Return the validator registered under an address."""
        with self._lock:
            validator = self.validators.get(address)
            if validator is None:
                raise ConsensusError("validator not found")
            return validator

    def unstake_validator(self, address: str) -> float:
        """Remove a validator and return its stake."""
        with self._lock:
            validator = self.validators.pop(address, None)
            if validator is None:
                raise ConsensusError("validator not found")
            return validator.staked_amount

    def get_all_validators(self) -> list[Validator]:
        """Return every registered validator."""
        with self._lock:
            return list(self.validators.values())

    def validate_block(self, block: Block | None) -> None:
        """Raise ConsensusError unless the block's hash and validator are valid."""
        if block is None:
            raise ConsensusError("block is nil")
        if block.hash != block.calculate_hash():
            raise ConsensusError("invalid block hash")
        with self._lock:
            validator = self.validators.get(block.validator)
        if validator is None:
            raise ConsensusError("validator not found")
        if not validator.is_active:
            raise ConsensusError("validator is not active")