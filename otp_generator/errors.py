"""
errors.py - Exception hierarchy for the OTP core.

Every error is recoverable by the caller: the core never exits the process,
it raises and lets the CLI (or any other front end) decide what to show.
"""


class OTPError(Exception):
    """Base class for every error raised by otp_generator."""


class InvalidCharacter(OTPError, ValueError):
    """A Base32 string contains a character outside A-Z / 2-7."""

    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Invalid Base32 character {char!r} at position {position}")


class InvalidSecret(OTPError, ValueError):
    """The secret cannot be used as an HMAC key (undecodable or empty)."""


class CryptoUnavailable(OTPError):
    """HMAC-SHA1 or the secure random source could not be used."""
