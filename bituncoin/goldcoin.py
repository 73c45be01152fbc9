"""The Gold-Coin token: tokenomics, transactions and minting."""

from __future__ import annotations

import hashlib
import time
from dataclasses import dataclass, field
from typing import Any


class GoldCoinError(ValueError):
    """Raised when a transaction or mint request is rejected."""


@dataclass
class Transaction:
    """A transfer of Gold-Coin between two addresses."""

    sender: str
    recipient: str
    amount: float
    fee: float = 0.0
    timestamp: int = field(default_factory=lambda: int(time.time()))
    signature: str = ""
    id: str = ""

    def generate_id(self) -> str:
        """Return the SHA-256 hex digest identifying this transaction."""
        data = f"{self.sender}{self.recipient}{self.amount:f}{self.timestamp}"
        return hashlib.sha256(data.encode()).hexdigest()


@dataclass
class GoldCoin:
    """The token definition together with its circulating supply."""

    name: str = "Gold-Coin"
    symbol: str = "GLD"
    max_supply: int = 100_000_000
    circ_supply: int = 0
    decimals: int = 8
    staking_reward: float = 5.0
    tx_fee: float = 0.001
    version: str = "1.0.0"

    def create_transaction(self, sender: str, recipient: str, amount: float) -> Transaction:
        """Create a transaction charging the standard fee."""
        if amount <= 0:
            raise GoldCoinError("invalid amount: must be greater than 0")
        if not sender or not recipient:
            raise GoldCoinError("invalid addresses: from and to cannot be empty")

        tx = Transaction(
            sender=sender,
            recipient=recipient,
            amount=amount,
            fee=amount * self.tx_fee,
        )
        tx.id = tx.generate_id()
        return tx

    def validate_transaction(self, tx: Transaction | None) -> None:
        """Raise GoldCoinError if the transaction is malformed or its ID is wrong."""
        if tx is None:
            raise GoldCoinError("transaction is nil")
        if tx.amount <= 0:
            raise GoldCoinError("invalid amount")
        if not tx.sender or not tx.recipient:
            raise GoldCoinError("invalid addresses")
        if tx.id != tx.generate_id():
            raise GoldCoinError("invalid transaction ID")

    def mint(self, amount: int) -> None:
        """Add coins to the circulating supply, never beyond the maximum."""
        if amount < 0:
            raise GoldCoinError("cannot mint a negative amount")
        if self.circ_supply + amount > self.max_supply:
            raise GoldCoinError("cannot mint: would exceed max supply")
        self.circ_supply += amount

    def get_tokenomics(self) -> dict[str, Any]:
        """Return the token's parameters and current supply."""
        return {
            "name": self.name,
            "symbol": self.symbol,
            "maxSupply": self.max_supply,
            "circSupply": self.circ_supply,
            "decimals": self.decimals,
            "stakingReward": self.staking_reward,
            "transactionFee": self.tx_fee,
            "version": self.version,
        }