"""Random base32 secrets for trying things out."""

import random
from typing import Optional

from otp_calc.base32 import ALPHABET


MIN_SECRET_PAIRS = 3
MAX_SECRET_PAIRS = 8


def random_secret(rng: Optional[random.Random] = None) -> str:
    """
    Generate a random base32 secret of 6 to 16 characters (even length).

    Only meant for demos. Provision real secrets from a dedicated key
    management process with at least 160 bits of entropy.

    Args:
        rng: Random source. Defaults to ``random.SystemRandom``.

    Returns:
        The secret as base32 text.
    """
    rng = rng or random.SystemRandom()
    length = rng.randint(MIN_SECRET_PAIRS, MAX_SECRET_PAIRS) * 2
    return "".join(rng.choice(ALPHABET) for _ in range(length))
