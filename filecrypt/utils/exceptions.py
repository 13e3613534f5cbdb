# exceptions.py
# -*- coding: utf-8 -*-
"""Error taxonomy for filecrypt. Every error raised by the package derives from FileCryptError."""

class FileCryptError(Exception):
    """Base class for application-specific errors."""
    pass

class IoFailure(FileCryptError):
    """Input could not be read or output could not be written (not found, permissions, I/O)."""
    pass

class EncryptionFailure(FileCryptError):
    """Internal cipher, key derivation or serialization problem."""
    pass

class KeyDerivationError(EncryptionFailure):
    """Argon2 could not derive a key from the password and salt."""
    pass

class MalformedContainer(FileCryptError):
    """Input to decryption is not a structurally valid container."""
    pass

class UnsupportedAlgorithm(MalformedContainer):
    """Algorithm tag or selector is not one of the supported AEAD algorithms."""
    pass

class AuthenticationFailure(FileCryptError):
    """AEAD tag did not verify: wrong password or tampered data (deliberately not distinguished)."""
    pass

class ArgumentError(FileCryptError):
    """Invalid arguments supplied by the host layer (e.g. empty password source)."""
    pass
