#!/usr/bin/env python3
"""
Chained base conversion (encrypt / decrypt).

Encrypt: for each base b of the sequence, in order, read the payload in the
full charset base N and render it in base b.
Decrypt: walk the sequence backwards, reading the payload in base b and
rendering it in base N.

Both return a PipelineResult instead of raising, so callers decide how to
report a failure. A leading run of zero-digit symbols in the plaintext does
not survive the chain; restore_leading_zeros() puts it back when the
original length is known.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from base_converter import convert
from digits import (
    MAX_CHARSET_SIZE,
    BaseChainError,
    InvalidBase,
    require_base,
    require_payload,
    value_to_symbol,
)


@dataclass
class PipelineResult:
    payload: Optional[str] = None
    error: Optional[BaseChainError] = None
    steps: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


# =============================
# BASE SEQUENCE
# =============================

def parse_base_sequence(text: str) -> List[int]:
    """
    Parse a whitespace-separated list of bases.
    Tokens that are not non-negative integers are dropped. A number too
    long to be the size of any charset raises InvalidBase.
    """
    max_digits = len(str(MAX_CHARSET_SIZE))

    bases = []
    for token in text.split():
        if not token.isdecimal():
            continue

        significant = token.lstrip("0")
        if len(significant) > max_digits:
            raise InvalidBase(f"{significant[:max_digits]}...", MAX_CHARSET_SIZE)

        bases.append(int(significant or "0"))

    return bases


def validate_base_sequence(bases: Iterable[int], charset: str) -> List[int]:
    bases = list(bases)
    for base in bases:
        require_base(base, charset)
    return bases


# =============================
# PIPELINE
# =============================

def encrypt(payload: str, bases: Iterable[int], charset: str) -> PipelineResult:
    full_base = len(charset)

    try:
        bases = validate_base_sequence(bases, charset)
        require_payload(payload, full_base, charset)
    except BaseChainError as e:
        return PipelineResult(error=e)

    steps = 0
    for base in bases:
        payload = convert(payload, full_base, base, charset)
        steps += 1

    return PipelineResult(payload=payload, steps=steps)


def decrypt(payload: str, bases: Iterable[int], charset: str) -> PipelineResult:
    full_base = len(charset)

    try:
        bases = validate_base_sequence(bases, charset)
        if not bases:
            require_payload(payload, full_base, charset)
    except BaseChainError as e:
        return PipelineResult(error=e)

    steps = 0
    for base in reversed(bases):
        # Output of a previous step may be foreign to this step's base
        # when the sequence does not match the one used to encrypt.
        try:
            require_payload(payload, base, charset)
        except BaseChainError as e:
            return PipelineResult(error=e, steps=steps)

        payload = convert(payload, base, full_base, charset)
        steps += 1

    return PipelineResult(payload=payload, steps=steps)


# =============================
# LEADING ZEROS
# =============================

def restore_leading_zeros(payload: str, length: int, charset: str) -> str:
    """
    Pad a recovered payload with zero-digit symbols up to its original
    length. A lone zero symbol recorded as length 0 was an empty payload.
    """

    zero = value_to_symbol(charset, 0)

    if length == 0 and payload.strip(zero) == "":
        return ""

    if len(payload) >= length:
        return payload

    return zero * (length - len(payload)) + payload
