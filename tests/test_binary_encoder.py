import pytest

import binary_encoder
from chain_pipeline import decrypt, encrypt


@pytest.mark.parametrize("compress", [True, False])
@pytest.mark.parametrize("data", [b"", b"\x00", b"\x00\x00abc", bytes(range(256)) * 4])
def test_bytes_survive_encoding(charset, data, compress):
    encoded = binary_encoder.encode_bytes(data, charset, compress=compress)
    assert binary_encoder.decode_payload(encoded, charset) == data


def test_marker_is_never_zero_symbol(charset):
    for compress in (True, False):
        encoded = binary_encoder.encode_bytes(b"\x00\x00", charset, compress=compress)
        assert encoded[0] != charset[0]


def test_encoded_bytes_survive_the_chain(charset):
    data = b"\x00\x00\x01binary\xff"
    bases = [7, 3, 61]

    payload = binary_encoder.encode_bytes(data, charset, compress=False)
    ciphertext = encrypt(payload, bases, charset).payload
    recovered = decrypt(ciphertext, bases, charset).payload

    assert binary_encoder.decode_payload(recovered, charset) == data


def test_hex_charset_round_trip(hex_charset):
    encoded = binary_encoder.encode_bytes(b"\x00hi", hex_charset, compress=False)
    assert binary_encoder.decode_payload(encoded, hex_charset) == b"\x00hi"


def test_charset_too_small_for_markers():
    with pytest.raises(ValueError):
        binary_encoder.encode_bytes(b"data", "01")


@pytest.mark.parametrize("text", ["", "2", "21", "9111", "111zz", "1011"])
def test_malformed_payloads(charset, text):
    with pytest.raises(ValueError):
        binary_encoder.decode_payload(text, charset)


def test_overhead(hex_charset, charset):
    assert binary_encoder.calculate_overhead(hex_charset) == pytest.approx(2.0)
    assert binary_encoder.estimate_encoded_size(10, hex_charset) == 20
    assert binary_encoder.calculate_overhead(charset) < 1.25
