import pytest

# RFC 4226 Appendix D / RFC 6238 Appendix B SHA-1 key
RFC_KEY = b"12345678901234567890"
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


@pytest.fixture
def rfc_key():
    return RFC_KEY


@pytest.fixture
def rfc_secret():
    return RFC_SECRET


@pytest.fixture(autouse=True)
def no_secret_env(monkeypatch):
    monkeypatch.delenv("OTP_SECRET", raising=False)
