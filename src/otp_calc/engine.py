"""HOTP/TOTP calculation with intermediate results (RFC 4226, RFC 6238)."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union

from otp_calc import base32
from otp_calc.counter import encode_counter
from otp_calc.errors import InvalidRequestError, MalformedDigestError
from otp_calc.hmac_provider import HmacProvider, hmac_sha1
from otp_calc.request import CalculationRequest, TimeDerived, coerce_request
from otp_calc.truncate import truncate


log = logging.getLogger(__name__)

RequestLike = Union[CalculationRequest, Mapping[str, Any]]


def format_code(code: int, digits: int) -> str:
    """Zero-pad an OTP code to exactly ``digits`` characters."""
    return f"{code:0{digits}d}"


def _hex_bytes(data: bytes) -> str:
    return "|".join(f"{byte:02x}" for byte in data)


@dataclass(frozen=True)
class OtpData:
    """Every value produced on the way from secret and counter to the code."""

    secret_bytes: bytes
    counter_value: int
    counter_bytes: bytes
    hmac: bytes
    expected_otp: int
    digits: int

    @property
    def code(self) -> str:
        return format_code(self.expected_otp, self.digits)

    def describe(self) -> Dict[str, str]:
        """Render the intermediate values for display, bytes as ``xx|xx|..``."""
        return {
            "secret_bytes": _hex_bytes(self.secret_bytes),
            "counter_value": str(self.counter_value),
            "counter_bytes": _hex_bytes(self.counter_bytes),
            "hmac": _hex_bytes(self.hmac),
            "expected_otp": self.code,
        }


def calculate_otp_data(
    request: RequestLike, hmac_provider: HmacProvider = hmac_sha1
) -> OtpData:
    """
    Calculate an HOTP or TOTP code and keep the intermediate values.

    Args:
        request: A CalculationRequest, or a mapping with ``digits``,
            ``secret_base32`` and either ``counter`` or ``unix_timestamp``
            plus ``period``.
        hmac_provider: Callable computing HMAC-SHA1 over (key, message).

    Returns:
        OtpData holding the decoded secret, counter, counter bytes, HMAC and
        the resulting code.

    Raises:
        InvalidRequestError: If the request is malformed.
        InvalidEncodingError: If the secret is not valid base32.
        CryptoUnavailableError: If no HMAC-SHA1 implementation is available.
        MalformedDigestError: If the provider returns something other than a
            20-byte digest.
        ImplausibleDigitCountError: If digits is outside 6 to 10.
    """
    request = coerce_request(request)

    secret = base32.decode(request.secret_base32)
    if not secret:
        raise InvalidRequestError("The secret must decode to at least one byte.")

    counter_value = request.counter_value
    if isinstance(request.source, TimeDerived):
        log.debug(
            "TOTP counter %d from timestamp %d and period %d",
            counter_value,
            request.source.unix_timestamp,
            request.source.period,
        )

    counter_bytes = encode_counter(counter_value)
    digest = hmac_provider(secret, counter_bytes)
    if not isinstance(digest, (bytes, bytearray, memoryview)):
        raise MalformedDigestError(
            f"HMAC provider returned {type(digest).__name__}, expected bytes"
        )
    digest = bytes(digest)
    expected_otp = truncate(digest, request.digits)

    return OtpData(
        secret_bytes=secret,
        counter_value=counter_value,
        counter_bytes=counter_bytes,
        hmac=digest,
        expected_otp=expected_otp,
        digits=request.digits,
    )


def calculate(request: RequestLike, hmac_provider: HmacProvider = hmac_sha1) -> int:
    """Calculate an HOTP or TOTP code. See calculate_otp_data."""
    return calculate_otp_data(request, hmac_provider).expected_otp
