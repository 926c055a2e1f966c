"""HMAC-SHA1 backed by the cryptography package."""

from typing import Callable

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac

from otp_calc.errors import CryptoUnavailableError


# (key, message) -> 20-byte digest
HmacProvider = Callable[[bytes, bytes], bytes]


def hmac_sha1(key: bytes, message: bytes) -> bytes:
    """
    Compute HMAC-SHA1 over a message.

    Args:
        key: Raw secret bytes.
        message: The encoded counter.

    Returns:
        The 20-byte digest.

    Raises:
        CryptoUnavailableError: If the cryptography backend refuses SHA-1,
            for example under a FIPS-restricted OpenSSL build.

    The cryptography package itself is a hard dependency: without it this
    module, and therefore ``otp_calc``, fails to import with ImportError
    rather than raising CryptoUnavailableError.
    """
    try:
        signer = hmac.HMAC(key, hashes.SHA1())
    except UnsupportedAlgorithm as e:
        raise CryptoUnavailableError(
            f"No crypto/SHA1 calculator available: {e}"
        ) from e

    signer.update(message)
    return signer.finalize()
