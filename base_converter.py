#!/usr/bin/env python3
"""
Big-integer base converter.

Reads a payload as the big-endian digits of one base and renders the same
value in another base, using a charset as the digit alphabet. Python ints
are unbounded, so long payloads and small bases never overflow.
"""

from digits import require_base, require_payload, value_to_symbol


# =============================
# INTEGER ENCODING
# =============================

def parse_value(payload: str, base: int, charset: str) -> int:
    # Horner's method, most significant digit first
    lookup = {c: i for i, c in enumerate(charset[:base])}

    value = 0
    for ch in payload:
        value = value * base + lookup[ch]

    return value


def render_value(value: int, base: int, charset: str) -> str:
    if value < 0:
        raise ValueError("Negative integers not supported.")

    if value == 0:
        return value_to_symbol(charset, 0)

    digits = []
    while value > 0:
        value, remainder = divmod(value, base)
        digits.append(charset[remainder])

    return "".join(reversed(digits))


# =============================
# CONVERSION
# =============================

def convert(payload: str, base_from: int, base_to: int, charset: str) -> str:
    """
    Convert a payload from base_from to base_to.

    Bases and payload must already be valid; callers check them. An empty
    payload, or one that encodes zero, yields the single zero-digit symbol,
    so the result is never empty.
    """
    return render_value(parse_value(payload, base_from, charset), base_to, charset)


def checked_convert(payload: str, base_from: int, base_to: int,
                    charset: str) -> str:
    """Same as convert(), raising InvalidBase or InvalidSymbol first."""

    require_base(base_from, charset)
    require_base(base_to, charset)
    require_payload(payload, base_from, charset)

    return convert(payload, base_from, base_to, charset)
