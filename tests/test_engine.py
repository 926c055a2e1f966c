"""Tests for HOTP/TOTP calculation."""

from unittest.mock import Mock, patch

import pytest
from cryptography.exceptions import UnsupportedAlgorithm

from otp_calc.engine import OtpData, calculate, calculate_otp_data, format_code
from otp_calc.errors import (
    CryptoUnavailableError,
    ImplausibleDigitCountError,
    InvalidEncodingError,
    InvalidRequestError,
    MalformedDigestError,
)
from otp_calc.request import CalculationRequest, ExplicitCounter, TimeDerived


# Base32 encoded "12345678901234567890"
SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"

# RFC 4226 test vectors (Appendix D)
RFC4226_TEST_VECTORS = [
    # (counter, expected_code)
    (0, 755224),
    (1, 287082),
    (2, 359152),
    (3, 969429),
    (4, 338314),
    (5, 254676),
    (6, 287922),
    (7, 162583),
    (8, 399871),
    (9, 520489),
]

# RFC 6238 test vectors (Appendix B), SHA-1 rows, 8 digits, 30 second period
RFC6238_TEST_VECTORS = [
    # (unix_timestamp, expected_code)
    (59, 94287082),
    (1111111109, 7081804),
    (1111111111, 14050471),
    (1234567890, 89005924),
    (2000000000, 69279037),
    (20000000000, 65353130),
]


def test_rfc4226_test_vectors():
    """Test HOTP calculation against RFC 4226 test vectors."""
    for counter, expected_code in RFC4226_TEST_VECTORS:
        code = calculate({"digits": 6, "secret_base32": SECRET, "counter": counter})
        assert code == expected_code, f"Counter {counter}: expected {expected_code}, got {code}"


def test_rfc6238_test_vectors():
    """Test TOTP calculation against RFC 6238 test vectors."""
    for timestamp, expected_code in RFC6238_TEST_VECTORS:
        request = CalculationRequest.totp(SECRET, timestamp, period=30, digits=8)
        code = calculate(request)
        assert code == expected_code, f"Time {timestamp}: expected {expected_code}, got {code}"


def test_calculate_otp_data_intermediate_values():
    """Test that every intermediate value is returned."""
    data = calculate_otp_data(CalculationRequest.hotp(SECRET, 1))

    assert isinstance(data, OtpData)
    assert data.secret_bytes == b"12345678901234567890"
    assert data.counter_value == 1
    assert data.counter_bytes == bytes([0, 0, 0, 0, 0, 0, 0, 1])
    assert data.hmac.hex() == "75a48a19d4cbe100644e8ac1397eea747a2d33ab"
    assert data.expected_otp == 287082
    assert data.code == "287082"


def test_calculate_otp_data_totp_counter():
    """Test the TOTP counter is floor(timestamp / period)."""
    data = calculate_otp_data(
        {"digits": 8, "secret_base32": SECRET, "unix_timestamp": 1111111109, "period": 30}
    )
    assert data.counter_value == 37037036
    assert data.counter_bytes == bytes.fromhex("00000000023523ec")
    assert data.code == "07081804"


def test_describe_formats_bytes():
    """Test the display form of the intermediate values."""
    details = calculate_otp_data(CalculationRequest.hotp(SECRET, 1)).describe()

    assert details["secret_bytes"].startswith("31|32|33|34")
    assert details["counter_value"] == "1"
    assert details["counter_bytes"] == "00|00|00|00|00|00|00|01"
    assert details["hmac"] == "75|a4|8a|19|d4|cb|e1|00|64|4e|8a|c1|39|7e|ea|74|7a|2d|33|ab"
    assert details["expected_otp"] == "287082"


def test_format_code_pads_with_zeros():
    """Test leading zeros are kept."""
    assert format_code(7081804, 8) == "07081804"
    assert format_code(0, 6) == "000000"
    assert format_code(755224, 6) == "755224"


def test_calculate_is_idempotent():
    """Test that identical requests give identical codes."""
    request = {"digits": 6, "secret_base32": SECRET, "counter": 42}
    assert calculate(request) == calculate(dict(request))


def test_calculate_different_digits():
    """Test that a shorter code is a suffix of a longer one."""
    code_6 = calculate(CalculationRequest.hotp(SECRET, 0, digits=6))
    code_10 = calculate(CalculationRequest.hotp(SECRET, 0, digits=10))
    assert format_code(code_10, 10).endswith(format_code(code_6, 6))


def test_request_not_a_mapping():
    """Test that a bare scalar is rejected."""
    with pytest.raises(InvalidRequestError, match="No named argument object"):
        calculate(42)
    with pytest.raises(InvalidRequestError, match="No named argument object"):
        calculate("GEZDGNBV")


def test_request_both_counter_and_timestamp():
    """Test that giving both counter sources is rejected."""
    request = {
        "digits": 6,
        "secret_base32": SECRET,
        "counter": 1,
        "unix_timestamp": 59,
        "period": 30,
    }
    with pytest.raises(InvalidRequestError, match="but not both"):
        calculate(request)


def test_request_neither_counter_nor_timestamp():
    """Test that giving no counter source is rejected."""
    with pytest.raises(InvalidRequestError, match="but not both"):
        calculate({"digits": 6, "secret_base32": SECRET})
    with pytest.raises(InvalidRequestError, match="but not both"):
        calculate({"digits": 6, "secret_base32": SECRET, "counter": None})


def test_request_timestamp_without_period():
    """Test that TOTP requires a period."""
    with pytest.raises(InvalidRequestError, match="refresh time"):
        calculate({"digits": 6, "secret_base32": SECRET, "unix_timestamp": 59})


@pytest.mark.parametrize("counter", [-1, 2**64, True, 1.5, "1"])
def test_request_bad_counter(counter):
    """Test that counters outside the unsigned 64-bit range are rejected."""
    with pytest.raises(InvalidRequestError, match="HOTP counter"):
        calculate({"digits": 6, "secret_base32": SECRET, "counter": counter})


def test_request_bad_timestamp_and_period():
    """Test timestamp and period value checks."""
    with pytest.raises(InvalidRequestError, match="unix timestamp"):
        calculate(CalculationRequest.totp(SECRET, -1))
    with pytest.raises(InvalidRequestError, match="token period"):
        calculate(CalculationRequest.totp(SECRET, 59, period=0))


def test_request_derived_counter_out_of_range():
    """Test that a TOTP counter beyond 64 bits is rejected."""
    with pytest.raises(InvalidRequestError, match="must fit in 64 bits"):
        calculate(CalculationRequest.totp(SECRET, 2**64, period=1))
    with pytest.raises(InvalidRequestError, match="must fit in 64 bits"):
        calculate({"digits": 6, "secret_base32": SECRET, "unix_timestamp": 2**70, "period": 30})

    data = calculate_otp_data(CalculationRequest.totp(SECRET, 2**64 - 1, period=1))
    assert data.counter_bytes == b"\xff" * 8


def test_request_bad_secret_type():
    """Test that the secret must be text."""
    with pytest.raises(InvalidRequestError, match="must be a string"):
        calculate({"digits": 6, "secret_base32": b"GEZDGNBV", "counter": 0})


def test_request_missing_digits():
    """Test that the digit count must be given."""
    with pytest.raises(InvalidRequestError, match="digit count"):
        calculate({"secret_base32": SECRET, "counter": 0})


@pytest.mark.parametrize("digits", [5, 11])
def test_implausible_digits(digits):
    """Test that digit counts outside 6 to 10 surface from truncation."""
    with pytest.raises(ImplausibleDigitCountError):
        calculate(CalculationRequest.hotp(SECRET, 0, digits=digits))


def test_invalid_secret_encoding():
    """Test that a non-base32 secret is rejected with the offending character."""
    with pytest.raises(InvalidEncodingError, match="'8' at position 2"):
        calculate(CalculationRequest.hotp("A8", 0))


@pytest.mark.parametrize("secret", ["", "====", "A"])
def test_empty_secret(secret):
    """Test that a secret decoding to zero bytes is rejected."""
    with pytest.raises(InvalidRequestError, match="at least one byte"):
        calculate(CalculationRequest.hotp(secret, 0))


def test_injected_provider():
    """Test that the HMAC provider is called with the decoded key and counter bytes."""
    provider = Mock(return_value=bytes.fromhex("1f8698690e02ca16618550ef7f19da8e945b555a"))

    data = calculate_otp_data(CalculationRequest.hotp(SECRET, 7), hmac_provider=provider)

    provider.assert_called_once_with(b"12345678901234567890", bytes(7) + b"\x07")
    assert data.expected_otp == 872921


@pytest.mark.parametrize("result", [bytes(19), bytes(21), None, 20, "x" * 20, list(range(20))])
def test_malformed_digest_from_provider(result):
    """Test that a provider returning anything but a 20-byte digest is reported."""
    provider = Mock(return_value=result)
    with pytest.raises(MalformedDigestError):
        calculate(CalculationRequest.hotp(SECRET, 0), hmac_provider=provider)


@patch("otp_calc.hmac_provider.hmac.HMAC")
def test_crypto_unavailable(mock_hmac):
    """Test that a missing SHA-1 implementation is reported."""
    mock_hmac.side_effect = UnsupportedAlgorithm("sha1 is not supported")
    with pytest.raises(CryptoUnavailableError):
        calculate(CalculationRequest.hotp(SECRET, 0))


def test_request_types_are_exclusive():
    """Test that a request holds exactly one counter source."""
    hotp = CalculationRequest.hotp(SECRET, 3)
    totp = CalculationRequest.totp(SECRET, 95, period=30)

    assert hotp.source == ExplicitCounter(3)
    assert totp.source == TimeDerived(95, 30)
    assert hotp.counter_value == 3
    assert totp.counter_value == 3
    assert calculate(hotp) == calculate(totp)
