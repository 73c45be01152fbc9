"""Gold-Coin toolkit: tokens, staking, a block chain, proof-of-stake consensus, addresses, storage, cross-chain transfers, wallet security, payments and a node API."""

__version__ = "1.0.0"