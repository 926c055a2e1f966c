"""RFC 4226 dynamic truncation."""

import logging

from otp_calc.errors import ImplausibleDigitCountError, MalformedDigestError


log = logging.getLogger(__name__)

DIGEST_SIZE = 20
MIN_DIGITS = 6
MAX_DIGITS = 10


def truncate(digest: bytes, digits: int) -> int:
    """
    Reduce an HMAC-SHA1 digest to a numeric code (RFC 4226, Section 5.3).

    Args:
        digest: The 20-byte HMAC-SHA1 value.
        digits: Number of decimal digits in the code, 6 to 10.

    Returns:
        The code as an integer in ``[0, 10**digits)``. Callers pad it with
        leading zeros for display.

    Raises:
        MalformedDigestError: If the digest is not 20 bytes long.
        ImplausibleDigitCountError: If digits is outside 6 to 10.
    """
    if digest is None or len(digest) != DIGEST_SIZE:
        length = "no" if digest is None else len(digest)
        raise MalformedDigestError(
            f"HMAC values must be {DIGEST_SIZE} bytes (160-bit) long, got {length}"
        )
    if (
        isinstance(digits, bool)
        or not isinstance(digits, int)
        or digits < MIN_DIGITS
        or digits > MAX_DIGITS
    ):
        raise ImplausibleDigitCountError(digits)

    # Low nibble of the last byte selects where the 4-byte window starts
    offset = digest[19] & 0x0F
    binary = (
        ((digest[offset] & 0x7F) << 24)
        | ((digest[offset + 1] & 0xFF) << 16)
        | ((digest[offset + 2] & 0xFF) << 8)
        | (digest[offset + 3] & 0xFF)
    )
    log.debug("Truncation offset %d selected value %d", offset, binary)

    return binary % (10**digits)
