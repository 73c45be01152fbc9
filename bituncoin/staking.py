"""A staking pool that locks Gold-Coin and accrues yearly rewards."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

SECONDS_PER_YEAR = 365.25 * 24 * 60 * 60


class StakingError(ValueError):
    """Raised when a staking operation is rejected."""


@dataclass
class Stake:
    """A staking position held by one address."""

    address: str
    amount: float
    start_time: float
    unlock_time: float
    rewards_claimed: float = 0.0
    is_active: bool = True


class StakingPool:
    """Holds stakes and computes their rewards."""

    def __init__(
        self,
        *,
        annual_reward: float = 5.0,
        min_stake: float = 100.0,
        lock_period: int = 30 * 24 * 60 * 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.stakes: dict[str, Stake] = {}
        self.total_staked = 0.0
        self.annual_reward = annual_reward
        self.min_stake = min_stake
        self.lock_period = lock_period
        self._clock = clock
        self._lock = threading.RLock()

    def _active_stake(self, address: str) -> Stake:
        stake = self.stakes.get(address)
        if stake is None:
            raise StakingError("stake not found")
        if not stake.is_active:
            raise StakingError("stake is not active")
        return stake

    def _outstanding(self, stake: Stake, now: float) -> float:
        years = (now - stake.start_time) / SECONDS_PER_YEAR
        rewards = stake.amount * (self.annual_reward / 100.0) * years
        return rewards - stake.rewards_claimed

    def create_stake(self, address: str, amount: float) -> None:
        """Open a new stake for an address."""
        with self._lock:
            if not address:
                raise StakingError("invalid address")
            if amount < self.min_stake:
                raise StakingError("amount below minimum stake")
            if address in self.stakes:
                raise StakingError("stake already exists for this address")
            now = self._clock()
            self.stakes[address] = Stake(
                address=address,
                amount=amount,
                start_time=now,
                unlock_time=now + self.lock_period,
            )
            self.total_staked += amount

    def calculate_rewards(self, address: str) -> float:
        """Return the rewards accrued and not yet claimed."""
        with self._lock:
            stake = self._active_stake(address)
            return self._outstanding(stake, self._clock())

    def claim_rewards(self, address: str) -> float:
        """Claim the accrued rewards and return how much was claimed."""
        with self._lock:
            stake = self._active_stake(address)
            claimable = self._outstanding(stake, self._clock())
            if claimable <= 0:
                raise StakingError("no rewards to claim")
            stake.rewards_claimed += claimable
            return claimable

    def unstake(self, address: str) -> tuple[float, float]:
        """Close an unlocked stake; return the staked amount and unclaimed rewards."""
        with self._lock:
            stake = self._active_stake(address)
            now = self._clock()
            if now < stake.unlock_time:
                raise StakingError("stake is still locked")
            unclaimed = self._outstanding(stake, now)
            stake.is_active = False
            self.total_staked -= stake.amount
            return stake.amount, unclaimed

    def get_stake_info(self, address: str) -> Stake:
        """Return the stake held by an address."""
        with self._lock:
            stake = self.stakes.get(address)
            if stake is None:
                raise StakingError("stake not found")
            return stake

    def get_pool_info(self) -> dict[str, Any]:
        """Return a summary of the pool."""
        with self._lock:
            return {
                "totalStaked": self.total_staked,
                "annualReward": self.annual_reward,
                "minStake": self.min_stake,
                "lockPeriod": self.lock_period,
                "activeStakes": sum(1 for s in self.stakes.values() if s.is_active),
                "totalStakers": len(self.stakes),
            }

    def increase_stake(self, address: str, amount: float) -> None:
        """Add coins to an existing active stake."""
        with self._lock:
            if amount <= 0:
                raise StakingError("invalid amount")
            stake = self._active_stake(address)
            stake.amount += amount
            self.total_staked += amount