"""Address generation, lookup and message signing."""

from __future__ import annotations

import hashlib
import secrets
import threading
from dataclasses import dataclass

ADDRESS_PREFIX = "GLD"
MIN_ADDRESS_LENGTH = 43


class IdentityError(ValueError):
    """Raised when an address is unknown or malformed."""


@dataclass
class Address:
    """A key pair and the address derived from it."""

    public_key: str
    private_key: str
    address: str
    label: str = ""
    created_at: int = 0


class AddressManager:
    """Keeps generated addresses and signs messages with their keys."""

    def __init__(self) -> None:
        self.addresses: dict[str, Address] = {}
        self._lock = threading.RLock()

    def generate_address(self, label: str) -> Address:
        """Create a new random key pair and register its address."""
        with self._lock:
            private_key = secrets.token_bytes(32)
            public_key = hashlib.sha256(private_key).hexdigest()
            digest = hashlib.sha256(public_key.encode()).digest()
            address = ADDRESS_PREFIX + digest[:20].hex()
            entry = Address(
                public_key=public_key,
                private_key=private_key.hex(),
                address=address,
                label=label,
            )
            self.addresses[address] = entry
            return entry

    def get_address(self, address: str) -> Address:
        """Return the entry registered under an address."""
        with self._lock:
            entry = self.addresses.get(address)
            if entry is None:
                raise IdentityError("address not found")
            return entry

    def list_addresses(self) -> list[Address]:
        """Return every registered address."""
        with self._lock:
            return list(self.addresses.values())

    def delete_address(self, address: str) -> None:
        """Forget an address."""
        with self._lock:
            if self.addresses.pop(address, None) is None:
                raise IdentityError("address not found")

    def sign_message(self, address: str, message: str) -> str:
        """Return a hex signature of a message made with the address's key."""
        with self._lock:
            entry = self.addresses.get(address)
            if entry is None:
                raise IdentityError("address not found")
            data = f"{entry.private_key}:{message}:{address}"
            return hashlib.sha256(data.encode()).hexdigest()


def validate_address(address: str) -> None:
    """Raise IdentityError unless the address has the expected form."""
    if len(address) < MIN_ADDRESS_LENGTH:
        raise IdentityError("invalid address: too short")
    if not address.startswith(ADDRESS_PREFIX):
        raise IdentityError("invalid address: must start with GLD")


def verify_signature(address: str, message: str, signature: str) -> bool:
    """Return whether the signature has the shape of a valid signature."""
    return bool(signature) and len(signature) == 64