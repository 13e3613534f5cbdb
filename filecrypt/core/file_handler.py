# filecrypt/core/file_handler.py
# -*- coding: utf-8 -*-
"""
Whole-file encryption and decryption of containers.

Files are read fully into memory, processed, and written with a single atomic
rename once all fallible work has succeeded, so a failed operation never leaves
a partial output file behind.
"""

import logging
import os
import tempfile
from pathlib import Path

from .ciphers import Algorithm, open_sealed, seal
from .container import ContainerMetadata, decode, encode, is_plain_filename
from .crypto_logic import RandomSource, generate_nonce, generate_salt, scoped_key
from ..utils.constants import ENCRYPTED_SUFFIX, UNKNOWN_FILENAME
from ..utils.exceptions import EncryptionFailure, FileCryptError, IoFailure

logger = logging.getLogger(__name__)

# os.umask can only be read by setting it; read once at import.
_UMASK = os.umask(0)
os.umask(_UMASK)
OUTPUT_FILE_MODE = 0o666 & ~_UMASK


def _password_bytes(password: str | bytes) -> bytes:
    if isinstance(password, str):
        return password.encode("utf-8")
    return bytes(password)


def stored_filename(file_path: str | os.PathLike) -> str:
    """
    Returns the base name recorded in the container for file_path.

    Names that are empty or not representable as UTF-8 (undecodable bytes on POSIX)
    are stored as UNKNOWN_FILENAME.

    Raises:
        EncryptionFailure: If the name could not be written back as a single path
            component on decryption (e.g. it contains a backslash).
    """
    name = Path(file_path).name
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        logger.warning(f"Input file name is not valid UTF-8; storing it as '{UNKNOWN_FILENAME}'.")
        return UNKNOWN_FILENAME
    if not name:
        return UNKNOWN_FILENAME
    if not is_plain_filename(name):
        msg = f"Cannot encrypt '{name}': the file name contains characters that are not portable across platforms."
        logger.error(msg)
        raise EncryptionFailure(msg)
    return name


# --- File I/O ---

def read_file_bytes(path: str | os.PathLike) -> bytes:
    """
    Reads a whole file into memory.

    Raises:
        IoFailure: If the file does not exist, is a directory, or cannot be read.
    """
    logger.debug(f"Reading file: {path}")
    try:
        with open(path, "rb") as f:
            data = f.read()
    except FileNotFoundError as e:
        msg = f"Input file not found: {path}"
        logger.error(msg)
        raise IoFailure(msg) from e
    except OSError as e:
        msg = f"Cannot read input file '{path}': {e}"
        logger.error(msg)
        raise IoFailure(msg) from e
    logger.debug(f"Read {len(data)} bytes from {path}.")
    return data

def write_file_bytes(path: str | os.PathLike, data: bytes) -> None:
    """
    Writes data to path atomically: a temporary file in the same directory is
    renamed over the destination once fully written.

    Raises:
        IoFailure: If the output directory is missing or the file cannot be written.
    """
    target = Path(path)
    directory = target.parent
    if not directory.is_dir():
        msg = f"Output directory does not exist: {directory}"
        logger.error(msg)
        raise IoFailure(msg)

    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(dir=directory, prefix=f".{target.name}.", suffix=".tmp", delete=False) as f_out:
            tmp_path = f_out.name
            f_out.write(data)
            f_out.flush()
            os.fsync(f_out.fileno())
        # NamedTemporaryFile creates 0600; give the output the usual umask-derived mode
        os.chmod(tmp_path, OUTPUT_FILE_MODE)
        os.replace(tmp_path, target)
        tmp_path = None
    except OSError as e:
        msg = f"Cannot write output file '{target}': {e}"
        logger.error(msg)
        raise IoFailure(msg) from e
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)
    logger.debug(f"Wrote {len(data)} bytes to {target}.")


# --- Orchestrators ---

def encrypt_file(
    file_path: str | os.PathLike,
    password: str | bytes,
    algorithm: Algorithm | str,
    output_dir: str | os.PathLike,
    *,
    random_bytes: RandomSource = os.urandom,
) -> str:
    """
    Encrypts a file into a container named '<original name>.encrypted' in output_dir.

    Args:
        file_path: File to encrypt. It is never modified.
        password: User password (str is UTF-8 encoded).
        algorithm: Algorithm member, container tag, or alias.
        output_dir: Existing directory that receives the container.
        random_bytes: Source of salt and nonce bytes. Defaults to os.urandom.

    Returns:
        Path of the container that was written.

    Raises:
        IoFailure: Input unreadable or output not writable.
        UnsupportedAlgorithm: Unknown algorithm selector.
        EncryptionFailure: Non-portable file name, or a key derivation, cipher or
            serialization problem. Nothing is derived or written in the first case.
    """
    algorithm = Algorithm.parse(algorithm)
    original_filename = stored_filename(file_path)
    logger.info(f"Encrypting '{file_path}' with {algorithm.value}...")
    plaintext = read_file_bytes(file_path)
    if not plaintext:
        logger.warning("Input data was empty.")

    try:
        salt = generate_salt(random_bytes)
        nonce = generate_nonce(random_bytes)
        with scoped_key(_password_bytes(password), salt) as key:
            sealed = seal(algorithm, key, nonce, plaintext)
        metadata = ContainerMetadata.create(algorithm, salt, nonce, original_filename)
        container = encode(metadata, sealed)
    except FileCryptError:
        raise
    except Exception as e:
        msg = f"Encryption failed: {e}"
        logger.error(msg, exc_info=True)
        raise EncryptionFailure(msg) from e

    output_path = Path(output_dir) / f"{original_filename}{ENCRYPTED_SUFFIX}"
    write_file_bytes(output_path, container)
    logger.info(f"Encrypted {len(plaintext)} bytes to {output_path}.")
    return str(output_path)

def decrypt_file(
    file_path: str | os.PathLike,
    password: str | bytes,
    output_dir: str | os.PathLike,
) -> str:
    """
    Decrypts a container, writing the plaintext to output_dir under the filename
    stored in the container.

    Returns:
        Path of the recovered file.

    Raises:
        IoFailure: Input unreadable or output not writable.
        MalformedContainer: Input is not a valid container (UnsupportedAlgorithm included).
        AuthenticationFailure: Wrong password or tampered ciphertext.
    """
    logger.info(f"Decrypting '{file_path}'...")
    data = read_file_bytes(file_path)
    metadata, sealed = decode(data)
    salt = metadata.salt_bytes()
    nonce = metadata.nonce_bytes()

    with scoped_key(_password_bytes(password), salt) as key:
        plaintext = open_sealed(metadata.algorithm, key, nonce, sealed)

    output_path = Path(output_dir) / metadata.original_filename
    write_file_bytes(output_path, plaintext)
    logger.info(f"Decrypted {len(plaintext)} bytes to {output_path}.")
    return str(output_path)
