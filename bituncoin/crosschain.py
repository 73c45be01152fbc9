"""A bridge that records transfers between supported blockchains."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass

CROSS_CHAIN_FEE_RATE = 0.01
NETWORK_FEE = 0.001
MIN_CHAIN_ADDRESS_LENGTH = 20


class CrossChainError(ValueError):
    """Raised when a cross-chain operation is rejected."""


@dataclass
class ChainConfig:
    """A blockchain the bridge can send to or receive from."""

    name: str
    symbol: str
    chain_id: int
    rpc_endpoint: str
    active: bool = True


@dataclass
class CrossChainTx:
    """A transfer from one chain to another."""

    id: str
    from_chain: str
    to_chain: str
    from_address: str
    to_address: str
    amount: float
    fee: float
    status: str = "pending"
    timestamp: int = 0
    confirmations: int = 0


def _default_chains() -> dict[str, ChainConfig]:
    return {
        "goldcoin": ChainConfig("Gold-Coin", "GLD", 1, "https://goldcoin-rpc.bituncoin.io"),
        "bitcoin": ChainConfig("Bitcoin", "BTC", 0, "https://bitcoin-rpc.bituncoin.io"),
        "ethereum": ChainConfig("Ethereum", "ETH", 1, "https://mainnet.infura.io"),
        "binance": ChainConfig(
            "Binance Smart Chain", "BNB", 56, "https://bsc-dataseed.binance.org"
        ),
    }


class CrossChainBridge:
    """Keeps the supported chains and the transfers made between them."""

    def __init__(self) -> None:
        self.supported_chains: dict[str, ChainConfig] = _default_chains()
        self.transactions: dict[str, CrossChainTx] = {}
        self._lock = threading.RLock()

    def _check_chains(self, from_chain: str, to_chain: str) -> None:
        if from_chain not in self.supported_chains:
            raise CrossChainError(f"source chain {from_chain} not supported")
        if to_chain not in self.supported_chains:
            raise CrossChainError(f"destination chain {to_chain} not supported")

    def _new_id(self) -> str:
        stamp = time.time_ns()
        while f"ccx_{stamp}" in self.transactions:
            stamp += 1
        return f"ccx_{stamp}"

    def create_cross_chain_transaction(
        self,
        from_chain: str,
        to_chain: str,
        from_address: str,
        to_address: str,
        amount: float,
    ) -> CrossChainTx:
        """Record a pending transfer, charging the cross-chain fee."""
        with self._lock:
            self._check_chains(from_chain, to_chain)
            if amount <= 0:
                raise CrossChainError("amount must be greater than 0")
            tx = CrossChainTx(
                id=self._new_id(),
                from_chain=from_chain,
                to_chain=to_chain,
                from_address=from_address,
                to_address=to_address,
                amount=amount,
                fee=amount * CROSS_CHAIN_FEE_RATE,
                timestamp=int(time.time()),
            )
            self.transactions[tx.id] = tx
            return tx

    def get_transaction_status(self, tx_id: str) -> CrossChainTx:
        """Return the transfer with the given ID."""
        with self._lock:
            tx = self.transactions.get(tx_id)
            if tx is None:
                raise CrossChainError("transaction not found")
            return tx

    def update_transaction_status(self, tx_id: str, status: str) -> None:
        """Set the status of a transfer."""
        with self._lock:
            self.get_transaction_status(tx_id).status = status

    def get_supported_chains(self) -> list[ChainConfig]:
        """Return the active chains."""
        with self._lock:
            return [c for c in self.supported_chains.values() if c.active]

    def estimate_cross_chain_fee(self, from_chain: str, to_chain: str, amount: float) -> float:
        """Return the fee a transfer of this amount would cost, network fee included."""
        with self._lock:
            self._check_chains(from_chain, to_chain)
            return amount * CROSS_CHAIN_FEE_RATE + NETWORK_FEE

    def swap_tokens(self, from_chain: str, to_chain: str, address: str, amount: float) -> str:
        """Move tokens of one address between chains; return the transfer ID."""
        tx = self.create_cross_chain_transaction(from_chain, to_chain, address, address, amount)
        return tx.id

    def get_transaction_history(self, address: str) -> list[CrossChainTx]:
        """Return every transfer sent from or to an address."""
        with self._lock:
            return [
                tx
                for tx in self.transactions.values()
                if address in (tx.from_address, tx.to_address)
            ]

    def validate_chain_address(self, chain: str, address: str) -> None:
        """Raise CrossChainError unless the address suits the chain."""
        with self._lock:
            if chain not in self.supported_chains:
                raise CrossChainError(f"chain {chain} not supported")
            if not address:
                raise CrossChainError("address cannot be empty")
            if len(address) < MIN_CHAIN_ADDRESS_LENGTH:
                raise CrossChainError("invalid address format")