"""
pwomatic.charsets
Fixed character classes used by every generation mode.
"""

import string

UPPER = string.ascii_uppercase
LOWER = string.ascii_lowercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()-_=+[]{};:,.<>?"

ALL_ALNUM = UPPER + LOWER
ALL_CHARS = UPPER + LOWER + DIGITS + SYMBOLS
SEPARATORS = DIGITS + SYMBOLS
