# ciphers.py
# -*- coding: utf-8 -*-
"""
AEAD cipher abstraction over AES-256-GCM and ChaCha20-Poly1305.

Both algorithms expose the same contract: seal() returns ciphertext || tag and
open_sealed() either returns the plaintext or raises AuthenticationFailure.
"""

import enum
import logging

from Crypto.Cipher import AES, ChaCha20_Poly1305

from ..utils.constants import KEY_BYTES, NONCE_BYTES, TAG_BYTES
from ..utils.exceptions import AuthenticationFailure, EncryptionFailure, UnsupportedAlgorithm

logger = logging.getLogger(__name__)

AUTH_FAILURE_MESSAGE = "Decryption failed - check password or file integrity."


class Algorithm(str, enum.Enum):
    """Supported AEAD algorithms. The value is the tag persisted in the container."""

    AES256GCM = "AES256GCM"
    CHACHA20_POLY1305 = "ChaCha20Poly1305"

    @classmethod
    def from_tag(cls, tag) -> "Algorithm":
        """Looks up an algorithm by its exact container tag."""
        for algorithm in cls:
            if algorithm.value == tag:
                return algorithm
        raise UnsupportedAlgorithm(f"Unsupported algorithm: {tag!r}")

    @classmethod
    def parse(cls, value) -> "Algorithm":
        """Accepts an Algorithm, its tag, or a case-insensitive alias such as 'aes' or 'chacha20-poly1305'."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            algorithm = _ALIASES.get(value.strip().lower())
            if algorithm is not None:
                return algorithm
        raise UnsupportedAlgorithm(
            f"Unsupported algorithm: {value!r}. Choose one of: {', '.join(a.value for a in cls)}."
        )

    def __str__(self) -> str:
        return self.value


_ALIASES = {
    "aes256gcm": Algorithm.AES256GCM,
    "aes-256-gcm": Algorithm.AES256GCM,
    "aes": Algorithm.AES256GCM,
    "chacha20poly1305": Algorithm.CHACHA20_POLY1305,
    "chacha20-poly1305": Algorithm.CHACHA20_POLY1305,
    "chacha": Algorithm.CHACHA20_POLY1305,
}


def _new_cipher(algorithm: Algorithm, key, nonce: bytes):
    if len(key) != KEY_BYTES:
        raise EncryptionFailure(f"Invalid key length. Expected {KEY_BYTES}, got {len(key)}.")
    if len(nonce) != NONCE_BYTES:
        raise EncryptionFailure(f"Invalid nonce length. Expected {NONCE_BYTES}, got {len(nonce)}.")
    if algorithm is Algorithm.AES256GCM:
        return AES.new(key, AES.MODE_GCM, nonce=nonce, mac_len=TAG_BYTES)
    if algorithm is Algorithm.CHACHA20_POLY1305:
        return ChaCha20_Poly1305.new(key=key, nonce=nonce)
    raise UnsupportedAlgorithm(f"Unsupported algorithm: {algorithm!r}")


def seal(algorithm: Algorithm, key, nonce: bytes, plaintext: bytes) -> bytes:
    """
    Encrypts and authenticates the whole plaintext as one unit.

    Returns:
        ciphertext || TAG_BYTES authentication tag.
    """
    cipher = _new_cipher(algorithm, key, nonce)
    ciphertext, tag = cipher.encrypt_and_digest(plaintext)
    logger.debug(f"Sealed {len(plaintext)} bytes with {algorithm.value}.")
    return ciphertext + tag


def open_sealed(algorithm: Algorithm, key, nonce: bytes, sealed: bytes) -> bytes:
    """
    Verifies and decrypts ciphertext || tag produced by seal().

    Raises:
        AuthenticationFailure: If the tag does not verify. Wrong key and tampered data
            produce the same error.
    """
    cipher = _new_cipher(algorithm, key, nonce)
    if len(sealed) < TAG_BYTES:
        logger.error("Sealed data is shorter than the authentication tag.")
        raise AuthenticationFailure(AUTH_FAILURE_MESSAGE)
    ciphertext, tag = sealed[:-TAG_BYTES], sealed[-TAG_BYTES:]
    try:
        plaintext = cipher.decrypt_and_verify(ciphertext, tag)
    except ValueError:
        logger.error("MAC check failed: incorrect password or data corrupted.")
        raise AuthenticationFailure(AUTH_FAILURE_MESSAGE) from None
    logger.debug(f"Opened {len(plaintext)} bytes with {algorithm.value}.")
    return plaintext
