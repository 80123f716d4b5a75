#!/usr/bin/env python3
"""
Charset and digit mapping for Base Chain.

A charset is an ordered alphabet: the symbol at index i is digit value i,
and the valid digits of base B are the first B symbols. Every base's
alphabet is therefore a prefix of every larger base's alphabet.
"""

import string
import sys
from typing import List

# =============================
# CONSTANTS
# =============================

DEFAULT_CHARSET = (
    string.digits
    + string.ascii_uppercase
    + string.ascii_lowercase
    + " "
    + string.punctuation
)

# Layout used by the original command-line converter (space is digit 0)
PRINTABLE_CHARSET = "".join(chr(i) for i in range(32, 127))

CHARSETS = {
    "default": DEFAULT_CHARSET,
    "printable": PRINTABLE_CHARSET,
}

MIN_BASE = 2

# Every symbol is a distinct code point
MAX_CHARSET_SIZE = sys.maxunicode + 1


# =============================
# EXCEPTIONS
# =============================

class BaseChainError(Exception):
    """Base exception for Base Chain errors."""
    pass


class InvalidBase(BaseChainError):
    """Raised when a base is outside [2, charset length]."""

    def __init__(self, base, charset_size: int):
        self.base = base
        self.charset_size = charset_size
        super().__init__(
            f"Base {base!r} is invalid: bases must be integers "
            f"between {MIN_BASE} and {charset_size}."
        )


class InvalidSymbol(BaseChainError):
    """Raised when a payload holds symbols outside a base's alphabet."""

    def __init__(self, payload: str, base: int, symbols: List[str]):
        self.payload = payload
        self.base = base
        self.symbols = symbols
        preview = payload if len(payload) <= 40 else payload[:40] + "..."
        super().__init__(
            f"The payload '{preview}' contains invalid characters "
            f"for base {base}: {symbols}"
        )


class MalformedBaseSequence(BaseChainError):
    """Raised when a base sequence holds no usable base."""
    pass


class InvalidCharset(BaseChainError):
    """Raised when a charset is too short or repeats a symbol."""
    pass


# =============================
# CHARSET
# =============================

def resolve_charset(name_or_alphabet: str) -> str:
    """
    Return the alphabet registered under the given name, or the argument
    itself when it is a literal alphabet.
    """

    if not isinstance(name_or_alphabet, str):
        raise InvalidCharset("Charset must be a name or a string of symbols")

    charset = CHARSETS.get(name_or_alphabet, name_or_alphabet)

    if len(charset) < MIN_BASE:
        raise InvalidCharset(
            f"Charset must contain at least {MIN_BASE} symbols"
        )

    if len(set(charset)) != len(charset):
        raise InvalidCharset("Charset symbols must be unique")

    return charset


# =============================
# DIGIT MAPPING
# =============================

def symbol_to_value(charset: str, symbol: str) -> int:
    value = charset.find(symbol) if len(symbol) == 1 else -1

    if value < 0:
        raise InvalidSymbol(symbol, len(charset), [symbol])

    return value


def value_to_symbol(charset: str, value: int) -> str:
    if not 0 <= value < len(charset):
        raise ValueError(
            f"Digit value {value} out of range for a charset "
            f"of {len(charset)} symbols"
        )
    return charset[value]


# =============================
# VALIDATION
# =============================

def is_base_valid(base, charset: str) -> bool:
    if isinstance(base, bool) or not isinstance(base, int):
        return False
    return MIN_BASE <= base <= len(charset)


def validate_payload(payload: str, base: int, charset: str) -> bool:
    allowed = set(charset[:base])
    return all(c in allowed for c in payload)


def find_invalid_symbols(payload: str, base: int, charset: str) -> List[str]:
    """Offending symbols of a payload for a base, sorted and unique."""
    return sorted(set(payload) - set(charset[:base]))


def require_base(base, charset: str) -> None:
    if not is_base_valid(base, charset):
        raise InvalidBase(base, len(charset))


def require_payload(payload: str, base: int, charset: str) -> None:
    if not validate_payload(payload, base, charset):
        raise InvalidSymbol(
            payload, base, find_invalid_symbols(payload, base, charset)
        )
