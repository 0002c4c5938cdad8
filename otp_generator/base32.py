"""
base32.py - RFC 4648 Base32 codec for OTP secrets.

Authenticator apps hand out secrets as unpadded Base32 text, usually of a
length that is not a multiple of 8, which ``base64.b32decode`` refuses.
``decode`` therefore works on the bit stream directly:

    "GE" -> 00110 00100 -> 00110001 | 00 -> b"1"   (2 leftover bits dropped)

Encoding has no such problem, so ``encode`` wraps the standard library and
strips the padding.
"""

import base64
import logging

from .errors import InvalidCharacter

logger = logging.getLogger(__name__)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_VALUES = {char: value for value, char in enumerate(ALPHABET)}
_VALUES.update({char.lower(): value for char, value in list(_VALUES.items())})


def decode(text: str) -> bytes:
    """
    Decode Base32 text into raw bytes.

    - Case-insensitive.
    - No padding expected: "=" is rejected like any other punctuation.
    - Output length is floor(5 * len(text) / 8); an incomplete trailing byte
      is silently dropped.

    Arguments:
        text: Base32 string, e.g. "JBSWY3DPEHPK3PXP"

    Returns:
        bytes: the decoded key material (b"" for an empty string)

    Raises:
        InvalidCharacter: first character outside A-Z / 2-7
    """
    buffer = 0
    bits = 0
    out = bytearray()
    for position, char in enumerate(text):
        value = _VALUES.get(char)
        if value is None:
            raise InvalidCharacter(char, position)
        buffer = (buffer << 5) | value
        bits += 5
        if bits >= 8:
            bits -= 8
            out.append((buffer >> bits) & 0xFF)
            buffer &= (1 << bits) - 1
    if bits:
        logger.debug("Base32 decode dropped %d trailing bit(s)", bits)
    return bytes(out)


def encode(data: bytes) -> str:
    """Encode bytes as uppercase, unpadded Base32."""
    return base64.b32encode(data).decode("ascii").rstrip("=")
