# crypto_logic.py
# -*- coding: utf-8 -*-
"""Core cryptographic primitives: random salt/nonce generation and Argon2id key derivation."""

import os
import logging
from contextlib import contextmanager
from typing import Callable, Iterator

import argon2
from argon2.exceptions import HashingError

from ..utils.constants import (
    KEY_BYTES,
    SALT_BYTES,
    NONCE_BYTES,
    ARGON2_TIME_COST,
    ARGON2_MEMORY_COST_KIB,
    ARGON2_PARALLELISM,
    ARGON2_HASH_LEN,
)
from ..utils.exceptions import EncryptionFailure, KeyDerivationError

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]


def _random(random_bytes: RandomSource, size: int, what: str) -> bytes:
    value = random_bytes(size)
    if len(value) != size:
        raise EncryptionFailure(f"Random source returned {len(value)} bytes for {what}, expected {size}.")
    return bytes(value)

def generate_salt(random_bytes: RandomSource = os.urandom) -> bytes:
    """Generates a fresh random salt (SALT_BYTES long)."""
    return _random(random_bytes, SALT_BYTES, "salt")

def generate_nonce(random_bytes: RandomSource = os.urandom) -> bytes:
    """Generates a fresh random AEAD nonce (NONCE_BYTES long)."""
    return _random(random_bytes, NONCE_BYTES, "nonce")

def derive_key(password: bytes, salt: bytes) -> bytes:
    """
    Derives a symmetric key from the password and salt using Argon2id.

    Args:
        password: The password bytes.
        salt: The salt bytes (must be SALT_BYTES long).

    Returns:
        The first KEY_BYTES bytes of the Argon2id output.

    Raises:
        KeyDerivationError: If the salt has an invalid length or Argon2 fails.
    """
    logger.info("Deriving key using Argon2id...")
    if len(salt) != SALT_BYTES:
        msg = f"Invalid salt length provided for key derivation. Expected {SALT_BYTES}, got {len(salt)}."
        logger.error(msg)
        raise KeyDerivationError(msg)

    try:
        digest = argon2.low_level.hash_secret_raw(
            secret=password,
            salt=salt,
            time_cost=ARGON2_TIME_COST,
            memory_cost=ARGON2_MEMORY_COST_KIB,
            parallelism=ARGON2_PARALLELISM,
            hash_len=ARGON2_HASH_LEN,
            type=argon2.Type.ID,
        )
    except HashingError as e:
        msg = f"Argon2 key derivation failed: {e}"
        logger.error(msg)
        raise KeyDerivationError(msg) from e

    key = digest[:KEY_BYTES]
    if len(key) != KEY_BYTES:
        raise KeyDerivationError(f"Argon2 returned {len(digest)} bytes, need at least {KEY_BYTES}.")
    logger.debug(f"Key derived successfully ({len(key)} bytes).")
    return key

@contextmanager
def scoped_key(password: bytes, salt: bytes) -> Iterator[bytearray]:
    """
    Derives a key and yields it as a mutable buffer that is zeroed when the block exits,
    whether it exits normally or through an exception.
    """
    key = bytearray(derive_key(password, salt))
    try:
        yield key
    finally:
        for i in range(len(key)):
            key[i] = 0
        logger.debug("Derived key wiped.")
