import pytest

from chacha_engine.chacha.key_utils import (
    bytes_from_words,
    format_hex,
    key_from_bytes,
    key_from_hex,
    nonce_from_bytes,
    nonce_from_hex,
    parse_hex,
    words_from_bytes,
)


def test_words_are_little_endian():
    assert words_from_bytes(bytes([0, 1, 2, 3, 4, 5, 6, 7])) == [0x03020100, 0x07060504]
    assert bytes_from_words([0x03020100]) == bytes([0, 1, 2, 3])


def test_words_from_bytes_rejects_partial_word():
    with pytest.raises(ValueError):
        words_from_bytes(b"\x00\x01\x02")


def test_key_and_nonce_from_bytes():
    assert key_from_bytes(bytes(range(32)))[7] == 0x1f1e1d1c
    assert nonce_from_bytes(bytes.fromhex("000000090000004a00000000")) == [0x09000000, 0x4a000000, 0]
    with pytest.raises(ValueError):
        key_from_bytes(bytes(31))
    with pytest.raises(ValueError):
        nonce_from_bytes(bytes(8))


def test_parse_hex_accepts_separators():
    assert parse_hex("0a ff:10") == b"\x0a\xff\x10"
    assert parse_hex("0x0aff") == b"\x0a\xff"


def test_parse_hex_rejects_garbage():
    with pytest.raises(ValueError):
        parse_hex("zz")
    with pytest.raises(ValueError):
        parse_hex("abc")


def test_hex_key_and_nonce():
    assert key_from_hex(bytes(range(32)).hex()) == key_from_bytes(bytes(range(32)))
    assert nonce_from_hex("00" * 12) == [0, 0, 0]
    with pytest.raises(ValueError):
        nonce_from_hex("00" * 11)


def test_format_hex():
    assert format_hex(b"\x0a\xff\x10") == "0a ff 10"
    assert format_hex(b"") == ""
