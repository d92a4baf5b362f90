"""
pwomatic.errors
Exceptions raised by the password engine and its collaborators.
"""


class PasswordOMaticError(Exception):
    """Base class for all pwomatic errors."""


class GenerationError(PasswordOMaticError, RuntimeError):
    """A generator could not build a password within its constraints."""


class WordListError(PasswordOMaticError, ValueError):
    """The dictionary could not be read or is too small."""


class CertificateError(PasswordOMaticError, OSError):
    """The self-signed TLS certificate could not be created."""
