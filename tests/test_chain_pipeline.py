import pytest

from chain_pipeline import (
    PipelineResult,
    decrypt,
    encrypt,
    parse_base_sequence,
    restore_leading_zeros,
)
from digits import InvalidBase, InvalidSymbol


def test_hello_round_trip(charset):
    bases = [13, 7, 40]
    encrypted = encrypt("Hello", bases, charset)

    assert encrypted.ok
    assert encrypted.steps == 3
    assert encrypted.payload != "Hello"

    decrypted = decrypt(encrypted.payload, bases, charset)
    assert decrypted.ok
    assert decrypted.steps == 3
    assert decrypted.payload == "Hello"


@pytest.mark.parametrize("payload, bases", [
    ("The quick brown fox jumps over the lazy dog.", [2, 95, 3]),
    ("~", [94, 2, 2, 57]),
    ("1 + 1 = 10 {binary}", [11]),
])
def test_round_trip(charset, payload, bases):
    ciphertext = encrypt(payload, bases, charset).payload
    assert decrypt(ciphertext, bases, charset).payload == payload


def test_last_step_uses_target_alphabet(charset):
    result = encrypt("Hello", [40, 2], charset)
    assert set(result.payload) <= {"0", "1"}


def test_pipeline_is_deterministic(charset):
    bases = [5, 17, 33]
    assert encrypt("payload", bases, charset) == encrypt("payload", bases, charset)


def test_order_matters(charset):
    assert encrypt("Hello", [13, 7], charset).payload != encrypt("Hello", [7, 13], charset).payload


def test_empty_sequence_is_identity(charset):
    assert encrypt("Hello", [], charset) == PipelineResult(payload="Hello", steps=0)
    assert decrypt("Hello", [], charset) == PipelineResult(payload="Hello", steps=0)


@pytest.mark.parametrize("bases", [[13, 1, 7], [13, 96], [0]])
def test_invalid_base_aborts_before_any_step(charset, bases):
    for operation in (encrypt, decrypt):
        result = operation("Hello", bases, charset)
        assert not result.ok
        assert isinstance(result.error, InvalidBase)
        assert result.payload is None
        assert result.steps == 0


def test_encrypt_rejects_foreign_symbols(charset):
    result = encrypt("tab\there", [13], charset)
    assert isinstance(result.error, InvalidSymbol)
    assert result.error.base == len(charset)


def test_decrypt_rejects_payload_for_last_base(charset):
    result = decrypt("z", [10], charset)
    assert isinstance(result.error, InvalidSymbol)
    assert result.error.base == 10
    assert result.steps == 0


def test_decrypt_stops_when_step_output_is_foreign(charset):
    result = decrypt("Z", [2, 40], charset)
    assert isinstance(result.error, InvalidSymbol)
    assert result.error.base == 2
    assert result.steps == 1
    assert result.payload is None


def test_leading_zero_symbols_are_lost(charset):
    ciphertext = encrypt("007", [5], charset).payload
    assert decrypt(ciphertext, [5], charset).payload == "7"


def test_empty_payload_becomes_zero_symbol(charset):
    ciphertext = encrypt("", [5], charset).payload
    assert ciphertext == "0"
    assert decrypt(ciphertext, [5], charset).payload == "0"


def test_restore_leading_zeros(charset):
    assert restore_leading_zeros("7", 3, charset) == "007"
    assert restore_leading_zeros("0", 0, charset) == ""
    assert restore_leading_zeros("0", 2, charset) == "00"
    assert restore_leading_zeros("Hello", 5, charset) == "Hello"


def test_parse_base_sequence():
    assert parse_base_sequence("13 7\n40\tabc -5 2.5 x9") == [13, 7, 40]
    assert parse_base_sequence("") == []
    assert parse_base_sequence("no numbers here") == []


def test_overlong_base_token_is_an_invalid_base():
    with pytest.raises(InvalidBase):
        parse_base_sequence("13 " + "9" * 5000)


def test_zero_padded_base_token():
    assert parse_base_sequence("0" * 5000 + "7 13 000") == [7, 13, 0]
