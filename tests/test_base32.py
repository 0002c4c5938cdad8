import os

import pytest

from otp_generator import base32
from otp_generator.errors import InvalidCharacter, OTPError

RFC4648_VECTORS = [
    (b"", ""),
    (b"f", "MY"),
    (b"fo", "MZXQ"),
    (b"foo", "MZXW6"),
    (b"foob", "MZXW6YQ"),
    (b"fooba", "MZXW6YTB"),
    (b"foobar", "MZXW6YTBOI"),
]


@pytest.mark.parametrize("raw, text", RFC4648_VECTORS)
def test_rfc4648_vectors(raw, text):
    assert base32.encode(raw) == text
    assert base32.decode(text) == raw


def test_decode_is_case_insensitive():
    assert base32.decode("mzxw6ytboi") == b"foobar"
    assert base32.decode("MzXw6YtBoI") == b"foobar"


def test_decode_known_secret():
    assert base32.decode("JBSWY3DPEHPK3PXP") == b"Hello!\xde\xad\xbe\xef"


def test_encode_rfc_key(rfc_key, rfc_secret):
    assert base32.encode(rfc_key) == rfc_secret


def test_empty_string_decodes_to_empty_bytes():
    assert base32.decode("") == b""


@pytest.mark.parametrize("length", range(0, 41))
def test_decoded_length_drops_partial_byte(length):
    assert len(base32.decode("A" * length)) == (5 * length) // 8


def test_trailing_bits_are_discarded_not_rejected():
    # "GF" has non-zero bits past the first byte; they are dropped silently
    assert base32.decode("GF") == base32.decode("GE") == b"1"


@pytest.mark.parametrize("text", ["1", "0", "8", "9", "MY=", "MZ XQ", "MZ-XQ", "ÀA", "ıA", "ſA"])
def test_invalid_characters(text):
    with pytest.raises(InvalidCharacter):
        base32.decode(text)


def test_invalid_character_reports_position():
    with pytest.raises(InvalidCharacter) as excinfo:
        base32.decode("AB1CD")
    assert excinfo.value.char == "1"
    assert excinfo.value.position == 2
    assert isinstance(excinfo.value, OTPError)


def test_encode_is_unpadded_uppercase():
    text = base32.encode(b"\xff" * 7)
    assert "=" not in text
    assert text == text.upper()


@pytest.mark.parametrize("size", [0, 5, 10, 20, 35, 100])
def test_round_trip_multiple_of_five(size):
    raw = os.urandom(size)
    assert base32.decode(base32.encode(raw)) == raw
