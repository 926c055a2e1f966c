"""Exceptions raised by otp-calc."""


class OtpError(Exception):
    """Base class for every error raised while computing a one-time password."""


class InvalidEncodingError(OtpError, ValueError):
    """A base32 string contains a character outside the RFC 4648 alphabet."""

    def __init__(self, character: str, position: int):
        self.character = character
        self.position = position
        super().__init__(
            f"Invalid base32 character '{character}' at position {position}"
        )


class InvalidRequestError(OtpError, ValueError):
    """The calculation request is malformed or its counter source is ambiguous."""


class MalformedDigestError(OtpError, ValueError):
    """The HMAC provider returned a digest that is not 20 bytes long."""


class ImplausibleDigitCountError(OtpError, ValueError):
    """The requested number of code digits is outside the supported range."""

    def __init__(self, digits: object):
        self.digits = digits
        super().__init__(
            f"HOTP truncation digits implausible: {digits!r} (expected 6 to 10)"
        )


class MissingPeriodError(OtpError, ValueError):
    """A TOTP timer was requested without a refresh period."""


class CryptoUnavailableError(OtpError, RuntimeError):
    """No HMAC-SHA1 implementation is available in this environment."""
