# filecrypt/cli/handlers.py
# -*- coding: utf-8 -*-
"""Command handlers for the filecrypt CLI."""

import logging
import os
import sys

from filecrypt.cli.password_utils import get_password
from filecrypt.core.ciphers import Algorithm
from filecrypt.core.file_handler import encrypt_file, decrypt_file
from filecrypt.utils.exceptions import (
    IoFailure,
    EncryptionFailure,
    MalformedContainer,
    UnsupportedAlgorithm,
    AuthenticationFailure,
    ArgumentError,
    FileCryptError,
)
from filecrypt.utils.constants import (
    EXIT_SUCCESS,
    EXIT_GENERIC_ERROR,
    EXIT_FILE_ERROR,
    EXIT_AUTH_ERROR,
    EXIT_ARG_ERROR,
    EXIT_FORMAT_ERROR,
)

logger = logging.getLogger(__name__)

# Most specific first: UnsupportedAlgorithm is a MalformedContainer
_EXIT_CODES = (
    (AuthenticationFailure, EXIT_AUTH_ERROR),
    (MalformedContainer, EXIT_FORMAT_ERROR),
    (IoFailure, EXIT_FILE_ERROR),
    (ArgumentError, EXIT_ARG_ERROR),
    (EncryptionFailure, EXIT_GENERIC_ERROR),
    (FileCryptError, EXIT_GENERIC_ERROR),
)


def _output_dir(args) -> str:
    if args.output_dir:
        return args.output_dir
    return os.path.dirname(os.path.abspath(args.input))

def _exit_code_for(command: str, error: Exception) -> int:
    """Prints a user-facing message for the error and returns the matching exit code."""
    for error_type, exit_code in _EXIT_CODES:
        if isinstance(error, error_type):
            print(f"Error: {error}", file=sys.stderr)
            return exit_code
    logger.critical(f"Unexpected error during {command} handling: {error}", exc_info=True)
    print(f"Error: An unexpected error occurred during {command}. Check logs.", file=sys.stderr)
    return EXIT_GENERIC_ERROR

def handle_encrypt(args) -> int:
    """Handles the 'encrypt' command. Maps exceptions to exit codes."""
    logger.info("Processing 'encrypt' command...")
    try:
        # Checked before prompting for the password
        algorithm = Algorithm.parse(args.algorithm)
    except UnsupportedAlgorithm as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ARG_ERROR

    try:
        password = get_password(args, confirm=True)
        output_path = encrypt_file(args.input, password, algorithm, _output_dir(args))
    except Exception as e:
        logger.error(f"Encryption failed: {type(e).__name__}")
        return _exit_code_for("encryption", e)

    print(output_path)
    logger.info("Encryption process finished successfully.")
    return EXIT_SUCCESS

def handle_decrypt(args) -> int:
    """Handles the 'decrypt' command. Maps exceptions to exit codes."""
    logger.info("Processing 'decrypt' command...")
    try:
        password = get_password(args, confirm=False)
        output_path = decrypt_file(args.input, password, _output_dir(args))
    except Exception as e:
        logger.error(f"Decryption failed: {type(e).__name__}")
        return _exit_code_for("decryption", e)

    print(output_path)
    logger.info("Decryption process finished successfully.")
    return EXIT_SUCCESS
