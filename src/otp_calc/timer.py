"""Countdown arithmetic for TOTP windows."""

from typing import Any, Mapping, Union

from otp_calc.errors import InvalidRequestError, MissingPeriodError
from otp_calc.request import CalculationRequest, TimeDerived, is_integer


def timer(request: Union[CalculationRequest, Mapping[str, Any]]) -> int:
    """
    Seconds until the current TOTP code is replaced.

    Args:
        request: A CalculationRequest, or a mapping with ``unix_timestamp``
            and ``period``.

    Returns:
        Remaining seconds in ``[0, period]``. HOTP requests, which carry no
        timestamp, return 0.

    Raises:
        MissingPeriodError: If a timestamp is given without a period.
        InvalidRequestError: If the request is not a set of named fields, or
            the timestamp or period is not a usable integer.
    """
    if isinstance(request, CalculationRequest):
        if not isinstance(request.source, TimeDerived):
            return 0
        timestamp = request.source.unix_timestamp
        period = request.source.period
    elif isinstance(request, Mapping):
        timestamp = request.get("unix_timestamp")
        period = request.get("period")
        if timestamp is None:
            return 0
    else:
        raise InvalidRequestError("No named argument object given.")

    if period is None or (is_integer(period) and period == 0):
        raise MissingPeriodError("HOTP refresh time unspecified.")
    if not is_integer(period) or period < 0:
        raise InvalidRequestError(
            f"The token period must be a positive integer, got {period!r}."
        )
    if not is_integer(timestamp) or timestamp < 0:
        raise InvalidRequestError(
            f"The unix timestamp must be a non-negative integer, got {timestamp!r}."
        )

    counter = timestamp // period
    remaining = period - (timestamp - counter * period)
    return max(min(remaining, period), 0)
