"""
otp_core.py - Core library for TOTP / HOTP (RFC 4226 / RFC 6238).

Goals:
- Pure functions only, callable directly by the CLI or any other front end.
- No argparse, no timers, no file I/O: the caller passes the secret and the
  time ("now") explicitly, so every function is trivially testable.

Fixed parameters (not configurable): HMAC-SHA1, 6 digits, 30 second step,
T0 = 0.

Security notes:
- Secrets are generated from the OS CSPRNG (``secrets``), never ``random``.
- Codes are compared with ``hmac.compare_digest``.
- Secrets and codes are never written to the log.
"""

import hmac
import logging
import secrets
import struct
from datetime import datetime
from typing import Tuple, Union

from . import base32
from .errors import CryptoUnavailable, InvalidCharacter, InvalidSecret

logger = logging.getLogger(__name__)

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # RFC 6238 recommendation
DEFAULT_TIME_STEP = 30      # TOTP step (seconds)
SECRET_LENGTH = 16          # Base32 chars -> 80-bit secret
MAX_COUNTER = 0xFFFFFFFFFFFFFFFF

Secret = Union[str, bytes]
Timestamp = Union[int, float, datetime]


# --- Secret generation -----------------------------------------------------
def generate_base32_secret(length: int = SECRET_LENGTH) -> str:
    """
    Generate a random Base32 secret (uppercase, no padding).

    Each character is drawn independently and uniformly from the Base32
    alphabet using ``secrets.choice`` (OS CSPRNG).

    Arguments:
        length: number of Base32 characters (default 16)

    Returns:
        str: Base32 secret, e.g. "JBSWY3DPEHPK3PXP"

    Raises:
        ValueError: if length is not a positive integer
        CryptoUnavailable: if the OS provides no secure randomness source
    """
    if not isinstance(length, int) or length <= 0:
        raise ValueError("length must be a positive integer")
    try:
        secret = "".join(secrets.choice(base32.ALPHABET) for _ in range(length))
    except NotImplementedError as e:
        raise CryptoUnavailable("No secure random source available") from e
    logger.debug("Generated %d-character secret", length)
    return secret


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Convert the counter to the 8-byte big-endian message RFC 4226 requires.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'
    """
    if i < 0 or i > MAX_COUNTER:
        raise ValueError("counter must fit in an unsigned 64-bit integer")
    return struct.pack(">Q", i)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    Apply RFC 4226 dynamic truncation.

    - offset = last byte & 0x0F (0..15)
    - read 4 bytes at offset as a big-endian integer
    - clear the sign bit, giving a 31-bit value

    Arguments:
        hmac_digest: HMAC-SHA1 digest (20 bytes)
    """
    offset = hmac_digest[-1] & 0x0F
    (value,) = struct.unpack(">I", hmac_digest[offset:offset + 4])
    logger.debug("Dynamic truncation offset=%d", offset)
    return value & 0x7FFFFFFF


def secret_bytes(secret: Secret) -> bytes:
    """
    Return the HMAC key for ``secret``.

    Base32 text is decoded; raw bytes are used as they are.

    Raises:
        InvalidSecret: undecodable Base32, or an empty key
        TypeError: secret is neither str nor bytes
    """
    if isinstance(secret, str):
        try:
            key = base32.decode(secret)
        except InvalidCharacter as e:
            raise InvalidSecret(f"Secret is not valid Base32: {e}") from e
    elif isinstance(secret, (bytes, bytearray)):
        key = bytes(secret)
    else:
        raise TypeError(f"secret must be str or bytes, not {type(secret).__name__}")
    if not key:
        raise InvalidSecret("Secret decodes to zero bytes")
    return key


def hmac_sha1(key: bytes, msg: bytes) -> bytes:
    """
    HMAC-SHA1 through the platform's hashlib.

    Raises:
        CryptoUnavailable: SHA-1 is not offered by this Python build
    """
    try:
        return hmac.new(key, msg, "sha1").digest()
    except ValueError as e:
        raise CryptoUnavailable("HMAC-SHA1 is not available on this platform") from e


def hotp(secret: Secret, counter: int) -> str:
    """
    Generate an HOTP code per RFC 4226.

    Steps:
    1. Base32-decode secret -> raw key bytes (raw bytes pass through)
    2. Message = 8-byte counter (big-endian)
    3. HMAC-SHA1(key, message)
    4. Dynamic truncate -> 31-bit value
    5. otp = value % 10^6
    6. Zero-pad to exactly 6 digits

    Arguments:
        secret: Base32 secret or raw key bytes
        counter: non-negative 64-bit counter

    Returns:
        str: 6-digit code, e.g. "042187"

    Raises:
        InvalidSecret: secret is not usable as a key
        CryptoUnavailable: HMAC-SHA1 cannot be computed
        ValueError: counter outside the unsigned 64-bit range
    """
    key = secret_bytes(secret)
    msg = int_to_bytes(counter)
    digest = hmac_sha1(key, msg)
    dbc = dynamic_truncate(digest)
    return str(dbc % (10 ** DEFAULT_DIGITS)).zfill(DEFAULT_DIGITS)


def is_well_formed(candidate) -> bool:
    """True if candidate is a str of exactly 6 ASCII digits."""
    return (
        isinstance(candidate, str)
        and len(candidate) == DEFAULT_DIGITS
        and candidate.isascii()
        and candidate.isdigit()
    )


def codes_equal(expected: str, candidate) -> bool:
    # Malformed input never reaches compare_digest, which rejects non-ASCII str.
    if not is_well_formed(candidate):
        return False
    return hmac.compare_digest(expected, candidate)


def verify_hotp(secret: Secret, candidate: str, counter: int) -> bool:
    """Check ``candidate`` against the HOTP code for exactly ``counter``."""
    return codes_equal(hotp(secret, counter), candidate)


# --- TOTP --------------------------------------------------------------------
def unix_seconds(now: Timestamp) -> float:
    """Seconds since the epoch for an int, float or datetime."""
    if isinstance(now, datetime):
        seconds = now.timestamp()
    elif isinstance(now, (int, float)) and not isinstance(now, bool):
        seconds = now
    else:
        raise TypeError(f"now must be a number or datetime, not {type(now).__name__}")
    if seconds < 0:
        raise ValueError("time before the Unix epoch has no TOTP counter")
    return seconds


def timecode(now: Timestamp) -> int:
    """TOTP counter: floor(unix_seconds / 30)."""
    return int(unix_seconds(now) // DEFAULT_TIME_STEP)


def time_remaining(now: Timestamp) -> int:
    """Whole seconds left in the current window (1..30)."""
    return DEFAULT_TIME_STEP - int(unix_seconds(now)) % DEFAULT_TIME_STEP


def current_code(secret: Secret, now: Timestamp) -> str:
    """
    TOTP code for the 30 second window containing ``now``.

    Two calls whose timestamps fall in the same window return the same code.
    """
    counter = timecode(now)
    logger.debug("TOTP counter=%d", counter)
    return hotp(secret, counter)


def totp(secret: Secret, now: Timestamp) -> Tuple[str, int]:
    """
    Generate a TOTP code per RFC 6238 (HOTP with counter = floor(now / 30)).

    Arguments:
        secret: Base32 secret or raw key bytes
        now: epoch seconds or datetime; never read implicitly

    Returns:
        (code, remaining_seconds)
        - code: 6-digit OTP string
        - remaining_seconds: seconds the code stays valid (1..30)
    """
    return current_code(secret, now), time_remaining(now)


def verify_totp(secret: Secret, candidate: str, now: Timestamp) -> bool:
    """
    Verify a user-supplied TOTP code.

    Only the window containing ``now`` is accepted; adjacent windows
    (clock skew) are not. A candidate that is not exactly 6 ASCII digits
    is simply invalid.

    Raises:
        the same errors as ``current_code``; a wrong code is never an error
    """
    expected = current_code(secret, now)
    return codes_equal(expected, candidate)
