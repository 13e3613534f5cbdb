# container.py
# -*- coding: utf-8 -*-
"""
Container codec for encrypted files.

Layout on disk:
    [0..4)    u32 little-endian metadata length L
    [4..4+L)  UTF-8 JSON metadata {algorithm, salt, nonce, original_filename}
    [4+L..)   ciphertext || tag

The metadata is untrusted on decode; every field is validated before any
cryptographic work is attempted.
"""

import base64
import binascii
import json
import logging
import struct
from dataclasses import dataclass

from .ciphers import Algorithm
from ..utils.constants import (
    SALT_BYTES,
    NONCE_BYTES,
    LENGTH_PREFIX_BYTES,
    LENGTH_PREFIX_FORMAT,
)
from ..utils.exceptions import EncryptionFailure, MalformedContainer

logger = logging.getLogger(__name__)

_FIELDS = ("algorithm", "salt", "nonce", "original_filename")
_MAX_METADATA_LEN = 2**32 - 1


def _b64decode(value: str, expected_len: int, field: str) -> bytes:
    try:
        raw = base64.b64decode(value.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise MalformedContainer(f"Invalid file format: {field} is not valid base64.") from e
    if len(raw) != expected_len:
        raise MalformedContainer(
            f"Invalid file format: {field} must decode to {expected_len} bytes, got {len(raw)}."
        )
    return raw


def is_plain_filename(name: str) -> bool:
    """True if name can be stored and later written back as a single path component on any platform."""
    return bool(name) and name not in (".", "..") and not any(c in name for c in ("/", "\\", "\x00"))

def _check_filename(name: str) -> None:
    if not is_plain_filename(name):
        raise MalformedContainer("Invalid file format: original filename is not a plain file name.")


@dataclass(frozen=True)
class ContainerMetadata:
    """Self-describing header stored ahead of the ciphertext."""

    algorithm: Algorithm
    salt: str
    nonce: str
    original_filename: str

    @classmethod
    def create(cls, algorithm: Algorithm, salt: bytes, nonce: bytes, original_filename: str) -> "ContainerMetadata":
        return cls(
            algorithm=algorithm,
            salt=base64.b64encode(salt).decode("ascii"),
            nonce=base64.b64encode(nonce).decode("ascii"),
            original_filename=original_filename,
        )

    def salt_bytes(self) -> bytes:
        return _b64decode(self.salt, SALT_BYTES, "salt")

    def nonce_bytes(self) -> bytes:
        return _b64decode(self.nonce, NONCE_BYTES, "nonce")

    def to_json_bytes(self) -> bytes:
        document = {
            "algorithm": self.algorithm.value,
            "salt": self.salt,
            "nonce": self.nonce,
            "original_filename": self.original_filename,
        }
        return json.dumps(document, ensure_ascii=False, separators=(",", ":")).encode("utf-8")

    @classmethod
    def from_json_bytes(cls, raw: bytes) -> "ContainerMetadata":
        """Parses and validates a metadata block. Raises MalformedContainer on any problem."""
        try:
            document = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError, RecursionError) as e:
            raise MalformedContainer(f"Invalid file format: metadata is not valid JSON ({e}).") from e

        if not isinstance(document, dict) or set(document) != set(_FIELDS):
            raise MalformedContainer(
                f"Invalid file format: metadata must contain exactly the fields {', '.join(_FIELDS)}."
            )
        for field in _FIELDS:
            if not isinstance(document[field], str):
                raise MalformedContainer(f"Invalid file format: {field} must be a string.")

        # Raises UnsupportedAlgorithm, itself a MalformedContainer
        algorithm = Algorithm.from_tag(document["algorithm"])
        metadata = cls(
            algorithm=algorithm,
            salt=document["salt"],
            nonce=document["nonce"],
            original_filename=document["original_filename"],
        )
        metadata.salt_bytes()
        metadata.nonce_bytes()
        _check_filename(metadata.original_filename)
        return metadata


def encode(metadata: ContainerMetadata, ciphertext: bytes) -> bytes:
    """Serializes metadata and ciphertext into a container byte string."""
    metadata_bytes = metadata.to_json_bytes()
    if len(metadata_bytes) > _MAX_METADATA_LEN:
        raise EncryptionFailure("Metadata block is too large for the length prefix.")
    logger.debug(f"Encoding container: {len(metadata_bytes)} metadata bytes, {len(ciphertext)} ciphertext bytes.")
    return struct.pack(LENGTH_PREFIX_FORMAT, len(metadata_bytes)) + metadata_bytes + ciphertext


def decode(data: bytes) -> tuple[ContainerMetadata, bytes]:
    """
    Splits a container into validated metadata and the raw ciphertext || tag.

    Raises:
        MalformedContainer: If the framing or any metadata field is invalid.
        UnsupportedAlgorithm: If the algorithm tag is not recognized.
    """
    if len(data) < LENGTH_PREFIX_BYTES:
        logger.error(f"Container too short: {len(data)} bytes.")
        raise MalformedContainer("Invalid file format: input is shorter than the length prefix.")

    (metadata_len,) = struct.unpack_from(LENGTH_PREFIX_FORMAT, data, 0)
    end = LENGTH_PREFIX_BYTES + metadata_len
    if end > len(data):
        logger.error(f"Declared metadata length {metadata_len} exceeds remaining {len(data) - LENGTH_PREFIX_BYTES} bytes.")
        raise MalformedContainer("Invalid file format: declared metadata length exceeds file size.")

    metadata = ContainerMetadata.from_json_bytes(data[LENGTH_PREFIX_BYTES:end])
    logger.debug(f"Decoded container metadata (algorithm {metadata.algorithm.value}).")
    return metadata, data[end:]
