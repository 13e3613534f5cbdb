#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Main entry point for the filecrypt CLI application."""

import argparse
import sys
import logging

from .cli.handlers import handle_encrypt, handle_decrypt
from .core.ciphers import Algorithm
from .utils.constants import EXIT_SUCCESS, EXIT_GENERIC_ERROR, EXIT_INTERRUPT

__version__ = "0.1.0"


def _add_password_sources(subparser) -> None:
    group = subparser.add_mutually_exclusive_group(required=True)
    group.add_argument('--password-interactive', action='store_true', help='Prompt for password interactively.')
    group.add_argument('--password-file', type=str, metavar='FILE', help='Read password from the first line of FILE.')
    group.add_argument('--password-stdin', action='store_true', help='Read password from piped stdin.')

def create_parser():
    """Creates and configures the argument parser."""
    parser = argparse.ArgumentParser(
        prog="filecrypt",
        description="Password-based file encryption with AES-256-GCM or ChaCha20-Poly1305.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  filecrypt encrypt report.pdf -o vault/ --password-interactive
  filecrypt encrypt report.pdf -a chacha20-poly1305 --password-file pass.txt
  echo 'mypassword' | filecrypt decrypt vault/report.pdf.encrypted -o out/ --password-stdin
"""
    )
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')

    log_level_group = parser.add_mutually_exclusive_group()
    log_level_group.add_argument(
        '-q', '--quiet',
        action='store_const',
        const=logging.ERROR,
        dest='log_level',
        help='Show only error messages.'
    )
    log_level_group.add_argument(
        '-v', '--verbose',
        action='store_const',
        const=logging.DEBUG,
        dest='log_level',
        help='Show detailed debug messages.'
    )
    parser.set_defaults(log_level=logging.INFO)

    subparsers = parser.add_subparsers(dest='command', help='Available commands (encrypt/decrypt)', required=True)

    parser_encrypt = subparsers.add_parser('encrypt', help='Encrypt a file into a .encrypted container.')
    parser_encrypt.add_argument('input', metavar='FILE', help='File to encrypt.')
    parser_encrypt.add_argument('-o', '--output-dir', default=None, metavar='DIR',
                                help='Directory for the container (default: next to FILE).')
    parser_encrypt.add_argument('-a', '--algorithm', default=Algorithm.AES256GCM.value, metavar='ALGORITHM',
                                help='AES256GCM (default) or ChaCha20Poly1305; aliases such as "aes" and "chacha" are accepted.')
    _add_password_sources(parser_encrypt)
    parser_encrypt.set_defaults(func=handle_encrypt)

    parser_decrypt = subparsers.add_parser('decrypt', help='Decrypt a container, restoring the original file name.')
    parser_decrypt.add_argument('input', metavar='FILE', help='Container to decrypt.')
    parser_decrypt.add_argument('-o', '--output-dir', default=None, metavar='DIR',
                                help='Directory for the recovered file (default: next to FILE).')
    _add_password_sources(parser_decrypt)
    parser_decrypt.set_defaults(func=handle_decrypt)

    return parser

def main(argv=None):
    """Parses arguments, sets up logging and dispatches to the command handler."""
    parser = create_parser()
    exit_code = EXIT_SUCCESS

    try:
        args = parser.parse_args(argv)

        log_level = args.log_level
        log_format = '%(asctime)s - %(levelname)s - %(message)s'
        if log_level <= logging.DEBUG:
            log_format = '%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s'
        logging.basicConfig(level=log_level, format=log_format, stream=sys.stderr, force=True)

        # Never log the args object itself; it may reference password sources.
        logging.debug(f"Command: {args.command}")
        exit_code = args.func(args)

    except SystemExit as e:
        exit_code = e.code if e.code is not None else EXIT_SUCCESS
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        exit_code = EXIT_INTERRUPT
    except Exception as e:
        logging.critical(f"An unhandled exception reached main: {e}", exc_info=True)
        print("\nCritical Error: An unexpected error occurred. Use --verbose for more details.", file=sys.stderr)
        exit_code = EXIT_GENERIC_ERROR
    finally:
        logging.debug(f"Exiting with code: {exit_code}")
    sys.exit(exit_code)

if __name__ == "__main__":
    main()
