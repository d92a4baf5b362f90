"""Password-O-Matic: constraint-satisfying password generation."""

from .errors import CertificateError, GenerationError, PasswordOMaticError, WordListError
from .generator import (
    BatchResult,
    GenerationResult,
    Mode,
    PasswordPolicy,
    generate,
    generate_batch,
    generate_normal,
    generate_random,
    generate_readable,
)
from .selector import SecureSelector
from .wordlist import WordList, load_wordlist

__version__ = "0.1.0"
