"""Wallet security settings, AES-256-GCM encryption and recovery phrases."""

from __future__ import annotations

import base64
import binascii
import hashlib
import secrets
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

KEY_SIZE = 32
NONCE_SIZE = 12
RECOVERY_PHRASE_LENGTH = 12
RECOVERY_WORDS = (
    "abandon", "ability", "able", "about", "above", "absent",
    "absorb", "abstract", "absurd", "abuse", "access", "accident",
)


class SecurityError(ValueError):
    """Raised when a security setting or a cipher operation is rejected."""


@dataclass
class TwoFactorAuth:
    """Two-factor authentication settings."""

    secret: str = ""
    enabled: bool = False
    backup_codes: list[str] = field(default_factory=list)


@dataclass
class BiometricAuth:
    """Biometric authentication settings."""

    enabled: bool = False
    type: str = ""
    last_used: int = 0


class Security:
    """Holds a wallet's security flags and its encryption key."""

    def __init__(
        self,
        *,
        encryption_key: bytes | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.two_factor_enabled = False
        self.biometric_enabled = False
        self.encryption_key = (
            secrets.token_bytes(KEY_SIZE) if encryption_key is None else bytes(encryption_key)
        )
        self.backup_encrypted = True
        self.last_backup_time = 0
        self._clock = clock
        self._lock = threading.RLock()

    def enable_two_factor(self, secret: str) -> None:
        """Turn on two-factor authentication."""
        with self._lock:
            if not secret:
                raise SecurityError("secret cannot be empty")
            self.two_factor_enabled = True

    def disable_two_factor(self) -> None:
        """Turn off two-factor authentication."""
        with self._lock:
            self.two_factor_enabled = False

    def enable_biometric(self, biometric_type: str) -> None:
        """Turn on biometric authentication of the given kind."""
        with self._lock:
            if not biometric_type:
                raise SecurityError("biometric type cannot be empty")
            self.biometric_enabled = True

    def disable_biometric(self) -> None:
        """Turn off biometric authentication."""
        with self._lock:
            self.biometric_enabled = False

    def _cipher(self) -> AESGCM:
        try:
            return AESGCM(self.encryption_key)
        except ValueError as exc:
            raise SecurityError(str(exc)) from exc

    def encrypt(self, plaintext: bytes) -> str:
        """Encrypt data and return base64 of nonce followed by ciphertext."""
        with self._lock:
            cipher = self._cipher()
            nonce = secrets.token_bytes(NONCE_SIZE)
            sealed = cipher.encrypt(nonce, bytes(plaintext), None)
            return base64.b64encode(nonce + sealed).decode("ascii")

    def decrypt(self, ciphertext: str) -> bytes:
        """Decrypt a value produced by encrypt."""
        with self._lock:
            try:
                data = base64.b64decode(ciphertext, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise SecurityError(f"invalid base64 data: {exc}") from exc
            cipher = self._cipher()
            if len(data) < NONCE_SIZE:
                raise SecurityError("ciphertext too short")
            nonce, sealed = data[:NONCE_SIZE], data[NONCE_SIZE:]
            try:
                return cipher.decrypt(nonce, sealed, None)
            except InvalidTag as exc:
                raise SecurityError("message authentication failed") from exc

    def create_backup(self, wallet_data: bytes) -> str:
        """Encrypt wallet data as a backup and record the backup time."""
        with self._lock:
            encrypted = self.encrypt(wallet_data)
            self.last_backup_time = int(self._clock())
            return encrypted

    def restore_backup(self, encrypted_backup: str) -> bytes:
        """Decrypt a backup made by create_backup."""
        return self.decrypt(encrypted_backup)

    def get_security_status(self) -> dict[str, Any]:
        """Return the current security settings."""
        with self._lock:
            return {
                "twoFactorEnabled": self.two_factor_enabled,
                "biometricEnabled": self.biometric_enabled,
                "encryptionType": "AES-256",
                "backupEncrypted": self.backup_encrypted,
                "lastBackup": self.last_backup_time,
            }


def hash_password(password: str) -> str:
    """Return base64 of the SHA-256 digest of a password."""
    return base64.b64encode(hashlib.sha256(password.encode()).digest()).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Return whether a password matches a hash from hash_password."""
    return hash_password(password) == password_hash


def generate_recovery_phrase() -> list[str]:
    """Return a random twelve-word recovery phrase."""
    return [
        RECOVERY_WORDS[byte % len(RECOVERY_WORDS)]
        for byte in secrets.token_bytes(RECOVERY_PHRASE_LENGTH)
    ]