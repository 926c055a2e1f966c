"""Counter encoding for the HOTP moving factor."""

COUNTER_BYTES = 8
MAX_COUNTER = 2**64 - 1


def encode_counter(counter: int) -> bytes:
    """
    Encode a counter as the 8-byte big-endian value fed to the HMAC.

    Args:
        counter: Unsigned 64-bit counter value.

    Returns:
        Exactly 8 bytes, zero-padded on the left.
    """
    return counter.to_bytes(COUNTER_BYTES, byteorder="big")
