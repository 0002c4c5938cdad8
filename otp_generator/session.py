"""
session.py - Caller-side state for an interactive OTP front end.

The core functions are stateless. Anything that has to be remembered
between refreshes (the secret in use, the code currently shown, whether the
user's last entry was checked) lives here, and every method takes ``now``
explicitly so the caller decides the refresh cadence.
"""

import enum
import logging
import re
from typing import Optional

from . import otp_core

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")


class VerificationResult(enum.Enum):
    NOT_CHECKED = "not-checked"
    VALID = "valid"
    INVALID = "invalid"


def sanitize_candidate(text) -> str:
    """Keep ASCII digits only and cap at 6, like a one-time-code input box."""
    if not isinstance(text, str):
        return ""
    return _NON_DIGITS.sub("", text)[: otp_core.DEFAULT_DIGITS]


class OTPSession:
    """
    One user's view of a TOTP secret.

    Arguments:
        secret: Base32 secret; a fresh one is generated when omitted
    """

    def __init__(self, secret: Optional[str] = None):
        if secret is None:
            secret = otp_core.generate_base32_secret()
        else:
            # Fail fast on a bad secret instead of on the first refresh.
            otp_core.secret_bytes(secret)
        self.secret = secret
        self.code: Optional[str] = None
        self.result = VerificationResult.NOT_CHECKED

    def refresh(self, now) -> str:
        """Recompute the code; a new code clears the previous check result."""
        code = otp_core.current_code(self.secret, now)
        if code != self.code:
            self.code = code
            self.result = VerificationResult.NOT_CHECKED
        return code

    def new_secret(self) -> str:
        self.secret = otp_core.generate_base32_secret()
        self.code = None
        self.result = VerificationResult.NOT_CHECKED
        logger.debug("Session secret replaced")
        return self.secret

    def check(self, candidate: str, now) -> VerificationResult:
        """Verify what the user typed and remember the outcome."""
        ok = otp_core.verify_totp(self.secret, sanitize_candidate(candidate), now)
        self.result = VerificationResult.VALID if ok else VerificationResult.INVALID
        return self.result

    def seconds_remaining(self, now) -> int:
        return otp_core.time_remaining(now)
