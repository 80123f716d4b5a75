#!/usr/bin/env python3
"""
Binary Encoder for Base Chain

Features:
- Renders arbitrary bytes as a payload over any charset (base N)
- Optional Zstandard compression
- Structured prefix: format marker, byte length
- Leading NUL bytes survive (byte length is stored)
- Marker is never the zero-digit symbol, so chained encryption of an
  encoded payload round-trips exactly
"""

import math

import zstandard as zstd

from base_converter import parse_value, render_value
from digits import require_payload, symbol_to_value, value_to_symbol

# =============================
# CONSTANTS
# =============================

FORMAT_RAW = 1
FORMAT_ZSTD = 2
SUPPORTED_FORMATS = (FORMAT_RAW, FORMAT_ZSTD)

ZSTD_LEVEL = 19


# =============================
# ENCODER
# =============================

def _require_marker_room(charset: str) -> None:
    if len(charset) <= max(SUPPORTED_FORMATS):
        raise ValueError(
            f"Binary encoding needs a charset of at least "
            f"{max(SUPPORTED_FORMATS) + 1} symbols."
        )


def encode_bytes(data: bytes, charset: str, compress: bool = True) -> str:
    """
    Layout (every field in base N = len(charset)):
    [format marker][byte_len_size][byte_len][body]
    """

    base = len(charset)
    _require_marker_room(charset)

    if compress:
        data = zstd.ZstdCompressor(level=ZSTD_LEVEL).compress(data)
        marker = FORMAT_ZSTD
    else:
        marker = FORMAT_RAW

    byte_len_encoded = render_value(len(data), base, charset)
    byte_len_size = len(byte_len_encoded)

    if byte_len_size >= base:
        raise ValueError("Prefix length overflow, input too large.")

    body = render_value(int.from_bytes(data, "big"), base, charset)

    return (
        value_to_symbol(charset, marker) +
        value_to_symbol(charset, byte_len_size) +
        byte_len_encoded +
        body
    )


# =============================
# DECODER
# =============================

def decode_payload(text: str, charset: str) -> bytes:
    base = len(charset)
    _require_marker_room(charset)

    require_payload(text, base, charset)

    if len(text) < 3:
        raise ValueError("Truncated encoded text.")

    marker = symbol_to_value(charset, text[0])
    if marker not in SUPPORTED_FORMATS:
        raise ValueError(f"Unknown format marker: {text[0]!r}")

    byte_len_size = symbol_to_value(charset, text[1])
    pos = 2

    if byte_len_size == 0 or pos + byte_len_size >= len(text):
        raise ValueError("Truncated byte length field.")

    byte_len = parse_value(text[pos:pos + byte_len_size], base, charset)
    pos += byte_len_size

    value = parse_value(text[pos:], base, charset)

    try:
        data = value.to_bytes(byte_len, "big")
    except OverflowError:
        raise ValueError("Decoded integer does not match declared byte length.")

    if marker == FORMAT_ZSTD:
        try:
            data = zstd.ZstdDecompressor().decompress(data)
        except zstd.ZstdError as e:
            raise ValueError(f"Decompression failed: {e}")

    return data


# =============================
# SIZE ESTIMATION
# =============================

def calculate_overhead(charset: str) -> float:
    """
    Theoretical encoding overhead for a charset:
    symbols per byte = 8 / log2(N)
    """
    return 8.0 / math.log2(len(charset))


def estimate_encoded_size(size_bytes: int, charset: str) -> int:
    """
    Rough estimation of encoded size (uncompressed, without prefix).
    """
    return int(math.ceil(size_bytes * calculate_overhead(charset)))
