# constants.py
# -*- coding: utf-8 -*-
"""Defines constants used throughout the filecrypt package."""

# --- AEAD Parameters ---
KEY_BYTES: int = 32      # 256-bit key for both AES-256-GCM and ChaCha20-Poly1305
NONCE_BYTES: int = 12    # 96-bit nonce, native size for both constructions
TAG_BYTES: int = 16      # Authentication tag appended to the ciphertext (128 bits)

# --- Key Derivation Parameters ---
SALT_BYTES: int = 16     # Fresh random salt per encryption

# Argon2id parameters (argon2-cffi defaults). They are not stored in the container,
# so changing them makes previously written files undecryptable.
ARGON2_TIME_COST: int = 3
ARGON2_MEMORY_COST_KIB: int = 65536  # 64 MiB
ARGON2_PARALLELISM: int = 4
ARGON2_HASH_LEN: int = 32            # Only the first KEY_BYTES are used as the key

# --- Container Format ---
LENGTH_PREFIX_BYTES: int = 4         # u32 little-endian metadata length
LENGTH_PREFIX_FORMAT: str = "<I"
ENCRYPTED_SUFFIX: str = ".encrypted"
UNKNOWN_FILENAME: str = "unknown"    # Used when the input path has no base name

# --- Exit Codes ---
EXIT_SUCCESS: int = 0        # Operation completed successfully
EXIT_GENERIC_ERROR: int = 1  # Encryption failure or unexpected runtime error
EXIT_FILE_ERROR: int = 2     # File access/IO error (not found, permission denied, ...)
EXIT_AUTH_ERROR: int = 3     # Wrong password or corrupted ciphertext
EXIT_ARG_ERROR: int = 4      # Invalid command-line arguments or password source
EXIT_FORMAT_ERROR: int = 5   # Input is not a valid container
EXIT_INTERRUPT: int = 130    # Process interrupted by user (Ctrl+C -> SIGINT)
