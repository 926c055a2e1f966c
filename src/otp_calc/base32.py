"""RFC 4648 base32 decoding for OTP secrets."""

from otp_calc.errors import InvalidEncodingError


ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_VALUES = {char: index for index, char in enumerate(ALPHABET)}


def decode(value: str) -> bytes:
    """
    Decode a base32 string into raw bytes.

    Trailing ``=`` padding is stripped first. Bits left over after the last
    full byte are dropped without checking that they are zero.

    Args:
        value: Upper-case base32 text.

    Returns:
        The decoded bytes.

    Raises:
        InvalidEncodingError: If a character is outside ``A-Z2-7``. The
            reported position is 1-based.
    """
    stripped = value.rstrip("=")

    out = bytearray()
    buffer = 0
    buffered_bits = 0
    for position, char in enumerate(stripped, start=1):
        bits = _VALUES.get(char)
        if bits is None:
            raise InvalidEncodingError(char, position)

        buffer = (buffer << 5) | bits
        buffered_bits += 5
        if buffered_bits >= 8:
            buffered_bits -= 8
            out.append((buffer >> buffered_bits) & 0xFF)
            # Keep only the bits not yet emitted
            buffer &= (1 << buffered_bits) - 1

    return bytes(out)


def encode(data: bytes) -> str:
    """Encode bytes as unpadded base32 text."""
    chars = []
    buffer = 0
    buffered_bits = 0
    for byte in data:
        buffer = (buffer << 8) | byte
        buffered_bits += 8
        while buffered_bits >= 5:
            buffered_bits -= 5
            chars.append(ALPHABET[(buffer >> buffered_bits) & 0x1F])
        buffer &= (1 << buffered_bits) - 1

    if buffered_bits:
        chars.append(ALPHABET[(buffer << (5 - buffered_bits)) & 0x1F])

    return "".join(chars)
