"""
otp_generator package
=====================

TOTP / HOTP generation and verification per RFC 4226 & RFC 6238, driven by a
Base32 shared secret.

Core algorithm
--------------
- HOTP: code = Truncate(HMAC-SHA1(key=secret, msg=counter)) mod 10^6
- TOTP: HOTP with counter = floor(unix_time / 30)
- Dynamic truncation: 4 bytes of the HMAC at offset (last byte & 0x0F),
  sign bit cleared.

Parameters are fixed: SHA-1, 6 digits, 30 second step.

Quick example
-------------
>>> from otp_generator import generate_base32_secret, current_code, verify_totp
>>> secret = generate_base32_secret()
>>> code = current_code(secret, 1_700_000_000)
>>> verify_totp(secret, code, 1_700_000_000)
True
"""
from .errors import CryptoUnavailable, InvalidCharacter, InvalidSecret, OTPError
from .otp_core import (
    current_code,
    generate_base32_secret,
    hotp,
    timecode,
    totp,
    verify_hotp,
    verify_totp,
)
from .session import OTPSession, VerificationResult

__all__ = [
    "CryptoUnavailable",
    "InvalidCharacter",
    "InvalidSecret",
    "OTPError",
    "OTPSession",
    "VerificationResult",
    "current_code",
    "generate_base32_secret",
    "hotp",
    "timecode",
    "totp",
    "verify_hotp",
    "verify_totp",
]
