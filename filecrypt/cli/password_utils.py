# password_utils.py
# -*- coding: utf-8 -*-
"""Utilities for obtaining the password from the supported sources."""

import getpass
import sys
import logging
import os

from ..utils.constants import EXIT_INTERRUPT
from ..utils.exceptions import IoFailure, ArgumentError

logger = logging.getLogger(__name__)

def get_interactive_password(confirm: bool = True) -> bytes:
    """
    Prompts the user interactively for a password, optionally asking for confirmation.

    Returns:
        The password as UTF-8 bytes.

    Raises:
        ArgumentError: If the password is empty, the confirmation does not match,
            or no terminal input is available.
        SystemExit: If the user cancels with Ctrl+C (exits with EXIT_INTERRUPT).
    """
    try:
        password = getpass.getpass(prompt="Enter password: ")
        if not password:
            raise ArgumentError("Password must not be empty.")
        if confirm:
            password_confirm = getpass.getpass(prompt="Confirm password: ")
            if password != password_confirm:
                # Never log the password itself, even on mismatch
                logger.error("Interactive password entry failed: passwords mismatch.")
                raise ArgumentError("Passwords do not match.")
        logger.info("Password obtained interactively.")
        return password.encode("utf-8")
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        logger.warning("Password entry cancelled by user (KeyboardInterrupt).")
        sys.exit(EXIT_INTERRUPT)
    except EOFError:
        msg = "Could not read password from standard input (EOF)."
        logger.error(msg)
        raise ArgumentError(msg) from None

def read_password_file(filepath: str) -> bytes:
    """
    Reads the password from the first line of the specified file.

    Raises:
        IoFailure: If the file cannot be found or read.
        ArgumentError: If the first line is empty.
    """
    logger.debug(f"Attempting to read password from file: {filepath}")
    if not os.path.exists(filepath):
        msg = f"Password file not found: {filepath}"
        logger.error(msg)
        raise IoFailure(msg)
    try:
        with open(filepath, "rb") as f:
            password_bytes = f.readline().strip()
    except OSError as e:
        msg = f"Cannot read password file {filepath}: {e}"
        logger.error(msg)
        raise IoFailure(msg) from e

    if not password_bytes:
        msg = f"Password file is empty: {filepath}"
        logger.error(msg)
        raise ArgumentError(msg)

    logger.info(f"Password read from file: {filepath}")
    return password_bytes

def read_password_stdin() -> bytes:
    """
    Reads the password from the first line of piped standard input.

    Raises:
        ArgumentError: If stdin is a TTY or no data is received.
    """
    logger.debug("Attempting to read password from stdin.")
    if sys.stdin is None or sys.stdin.isatty():
        msg = "Cannot read password from TTY stdin using --password-stdin. Pipe input or use --password-interactive."
        logger.error(msg)
        raise ArgumentError(msg)

    try:
        password_bytes = sys.stdin.buffer.readline().strip()
    except OSError as e:
        msg = f"Error reading password from stdin: {e}"
        logger.error(msg)
        raise IoFailure(msg) from e

    if not password_bytes:
        msg = "No password received from stdin."
        logger.error(msg)
        raise ArgumentError(msg)

    logger.info("Password read from stdin.")
    return password_bytes

def get_password(args, confirm: bool) -> bytes:
    """Returns the password from whichever source was selected on the command line."""
    if args.password_interactive:
        return get_interactive_password(confirm=confirm)
    if args.password_file:
        return read_password_file(args.password_file)
    if args.password_stdin:
        return read_password_stdin()
    raise ArgumentError("No password source selected.")
