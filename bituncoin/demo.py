"""A walk-through of the Gold-Coin features printed to standard output."""

from __future__ import annotations

import argparse
import sys

from bituncoin.consensus import ConsensusError, ProofOfStake
from bituncoin.goldcoin import GoldCoin, GoldCoinError
from bituncoin.identity import AddressManager, IdentityError
from bituncoin.staking import StakingError, StakingPool

_SECONDS_PER_DAY = 24 * 60 * 60


def _run() -> None:
    print("🪙 Gold-Coin Cryptocurrency Demo")
    print("================================\n")

    print("1. Initializing Gold-Coin...")
    gc = GoldCoin()
    tokenomics = gc.get_tokenomics()
    print(f"   Name: {tokenomics['name']} ({tokenomics['symbol']})")
    print(f"   Max Supply: {tokenomics['maxSupply']}")
    print(f"   Staking Reward: {tokenomics['stakingReward']:.1f}%")
    print(f"   Transaction Fee: {tokenomics['transactionFee'] * 100:.1f}%\n")

    print("2. Generating addresses...")
    manager = AddressManager()
    alice = manager.generate_address("Alice")
    print(f"   Alice's address: {alice.address[:20]}...")
    bob = manager.generate_address("Bob")
    print(f"   Bob's address: {bob.address[:20]}...\n")

    print("3. Creating a transaction...")
    tx = gc.create_transaction(alice.address, bob.address, 100.0)
    print(f"   Transaction ID: {tx.id[:16]}...")
    print(f"   From: {tx.sender[:20]}...")
    print(f"   To: {tx.recipient[:20]}...")
    print(f"   Amount: {tx.amount:.2f} GLD")
    print(f"   Fee: {tx.fee:.4f} GLD\n")

    print("4. Initializing Proof-of-Stake consensus...")
    pos = ProofOfStake()
    print(f"   Min Validator Stake: {pos.min_stake:.0f} GLD")
    print(f"   Block Time: {pos.block_time} seconds")
    print(f"   Reward per Block: {pos.reward_per_block:.1f} GLD\n")

    print("5. Registering validators...")
    pos.register_validator(alice.address, 2000.0)
    print(f"   Validator 1 registered: {alice.address[:20]}... (2000 GLD)")
    pos.register_validator(bob.address, 3000.0)
    print(f"   Validator 2 registered: {bob.address[:20]}... (3000 GLD)\n")

    print("6. Creating a block...")
    block = pos.create_block([tx.id], "0000000000")
    print(f"   Block #{block.index} created")
    print(f"   Validator: {block.validator[:20]}...")
    print(f"   Transactions: {len(block.transactions)}")
    print(f"   Hash: {block.hash[:16]}...\n")

    print("7. Creating staking pool...")
    pool = StakingPool()
    pool_info = pool.get_pool_info()
    print(f"   Annual Reward: {pool_info['annualReward']:.1f}%")
    print(f"   Min Stake: {pool_info['minStake']:.0f} GLD")
    print(f"   Lock Period: {pool_info['lockPeriod'] // _SECONDS_PER_DAY} days\n")

    print("8. Creating a stake...")
    pool.create_stake(alice.address, 1000.0)
    print(f"   Staked 1000 GLD from {alice.address[:20]}...")
    stake = pool.get_stake_info(alice.address)
    print(f"   Active: {'true' if stake.is_active else 'false'}")
    print(f"   Amount: {stake.amount:.2f} GLD\n")

    print("9. Calculating staking rewards...")
    rewards = pool.calculate_rewards(alice.address)
    print(f"   Current rewards: {rewards:.6f} GLD\n")

    print("✅ Gold-Coin Demo Complete!")
    print("\nFeatures demonstrated:")
    print("  ✓ Token initialization with tokenomics")
    print("  ✓ Address generation and management")
    print("  ✓ Transaction creation and validation")
    print("  ✓ Proof-of-Stake consensus mechanism")
    print("  ✓ Validator registration and block creation")
    print("  ✓ Staking pool with rewards calculation")
    print("\n🚀 Ready for deployment!")


def main(argv: list[str] | None = None) -> int:
    """Run the demo; return the process exit status."""
    parser = argparse.ArgumentParser(
        prog="bituncoin-demo",
        description="Walk through the Gold-Coin features.",
    )
    parser.parse_args(argv)
    try:
        _run()
    except (GoldCoinError, IdentityError, ConsensusError, StakingError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())