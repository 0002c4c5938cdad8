import pytest

from otp_generator.errors import InvalidSecret
from otp_generator.session import OTPSession, VerificationResult, sanitize_candidate


def test_new_session_generates_secret():
    session = OTPSession()
    assert len(session.secret) == 16
    assert session.code is None
    assert session.result is VerificationResult.NOT_CHECKED


def test_bad_secret_rejected_up_front():
    with pytest.raises(InvalidSecret):
        OTPSession("18")


def test_refresh_and_check(rfc_secret):
    session = OTPSession(rfc_secret)
    assert session.refresh(59) == "287082"
    assert session.check("287082", 59) is VerificationResult.VALID
    assert session.result is VerificationResult.VALID


def test_wrong_code_is_invalid(rfc_secret):
    session = OTPSession(rfc_secret)
    session.refresh(59)
    assert session.check("000000", 59) is VerificationResult.INVALID


def test_result_survives_refresh_in_same_window(rfc_secret):
    session = OTPSession(rfc_secret)
    session.refresh(30)
    session.check("287082", 40)
    session.refresh(45)
    assert session.result is VerificationResult.VALID


def test_new_window_resets_result(rfc_secret):
    session = OTPSession(rfc_secret)
    session.refresh(59)
    session.check("287082", 59)
    assert session.refresh(60) == "359152"
    assert session.result is VerificationResult.NOT_CHECKED


def test_new_secret_resets_state(rfc_secret):
    session = OTPSession(rfc_secret)
    session.refresh(59)
    session.check("000000", 59)
    secret = session.new_secret()
    assert secret == session.secret != rfc_secret
    assert session.code is None
    assert session.result is VerificationResult.NOT_CHECKED


@pytest.mark.parametrize(
    "typed, cleaned",
    [("287082", "287082"), ("287 082", "287082"), ("28-70-82", "287082"), ("2870829", "287082"), ("abc", "")],
)
def test_sanitize_candidate(typed, cleaned):
    assert sanitize_candidate(typed) == cleaned


def test_check_sanitizes_input(rfc_secret):
    session = OTPSession(rfc_secret)
    assert session.check(" 287-082 ", 59) is VerificationResult.VALID
    assert session.check("abc", 59) is VerificationResult.INVALID


def test_seconds_remaining(rfc_secret):
    session = OTPSession(rfc_secret)
    assert session.seconds_remaining(59) == 1
    assert session.seconds_remaining(60) == 30


@pytest.mark.parametrize("typed", [None, 287082, b"287082"])
def test_non_string_input_is_invalid(rfc_secret, typed):
    session = OTPSession(rfc_secret)
    assert sanitize_candidate(typed) == ""
    assert session.check(typed, 59) is VerificationResult.INVALID
