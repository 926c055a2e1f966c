"""HOTP/TOTP one-time password calculation (RFC 4226, RFC 6238)."""

from otp_calc.engine import OtpData, calculate, calculate_otp_data, format_code
from otp_calc.errors import (
    CryptoUnavailableError,
    ImplausibleDigitCountError,
    InvalidEncodingError,
    InvalidRequestError,
    MalformedDigestError,
    MissingPeriodError,
    OtpError,
)
from otp_calc.request import CalculationRequest, ExplicitCounter, TimeDerived
from otp_calc.secret import random_secret
from otp_calc.timer import timer

__all__ = [
    "CalculationRequest",
    "CryptoUnavailableError",
    "ExplicitCounter",
    "ImplausibleDigitCountError",
    "InvalidEncodingError",
    "InvalidRequestError",
    "MalformedDigestError",
    "MissingPeriodError",
    "OtpData",
    "OtpError",
    "TimeDerived",
    "calculate",
    "calculate_otp_data",
    "format_code",
    "random_secret",
    "timer",
]
