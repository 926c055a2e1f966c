"""Calculation request types."""

from dataclasses import dataclass
from typing import Any, Mapping, Union

from otp_calc.counter import MAX_COUNTER
from otp_calc.errors import InvalidRequestError


@dataclass(frozen=True)
class ExplicitCounter:
    """HOTP: the caller supplies the counter."""

    value: int


@dataclass(frozen=True)
class TimeDerived:
    """TOTP: the counter is ``unix_timestamp // period``."""

    unix_timestamp: int
    period: int

    @property
    def counter(self) -> int:
        return self.unix_timestamp // self.period


CounterSource = Union[ExplicitCounter, TimeDerived]


@dataclass(frozen=True)
class CalculationRequest:
    """Parameters for one HOTP or TOTP calculation."""

    digits: int
    secret_base32: str
    source: CounterSource

    @classmethod
    def hotp(
        cls, secret_base32: str, counter: int, digits: int = 6
    ) -> "CalculationRequest":
        return cls(digits, secret_base32, ExplicitCounter(counter))

    @classmethod
    def totp(
        cls, secret_base32: str, unix_timestamp: int, period: int = 30, digits: int = 6
    ) -> "CalculationRequest":
        return cls(digits, secret_base32, TimeDerived(unix_timestamp, period))

    @property
    def counter_value(self) -> int:
        if isinstance(self.source, TimeDerived):
            return self.source.counter
        return self.source.value


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate(request: CalculationRequest) -> CalculationRequest:
    if not isinstance(request.secret_base32, str):
        raise InvalidRequestError("The base32 secret must be a string.")
    if not is_integer(request.digits):
        raise InvalidRequestError(
            f"The digit count must be an integer, got {request.digits!r}."
        )

    source = request.source
    if isinstance(source, ExplicitCounter):
        if not is_integer(source.value) or not 0 <= source.value <= MAX_COUNTER:
            raise InvalidRequestError(
                "The HOTP counter must be an integer in [0, 2^64), "
                f"got {source.value!r}."
            )
    elif isinstance(source, TimeDerived):
        if not is_integer(source.unix_timestamp) or source.unix_timestamp < 0:
            raise InvalidRequestError(
                "The unix timestamp must be a non-negative integer, "
                f"got {source.unix_timestamp!r}."
            )
        if not is_integer(source.period) or source.period <= 0:
            raise InvalidRequestError(
                f"The token period must be a positive integer, got {source.period!r}."
            )
        if source.counter > MAX_COUNTER:
            raise InvalidRequestError(
                "The TOTP counter derived from the timestamp must fit in 64 bits, "
                f"got {source.counter}."
            )
    else:
        raise InvalidRequestError(f"Unknown counter source: {source!r}.")

    return request


def coerce_request(
    request: Union[CalculationRequest, Mapping[str, Any]]
) -> CalculationRequest:
    """
    Turn a request object or a mapping of named fields into a validated request.

    Mapping keys are ``digits``, ``secret_base32`` and either ``counter`` or
    ``unix_timestamp`` together with ``period``. A key set to ``None`` counts
    as absent.

    Args:
        request: A CalculationRequest or a mapping of named fields.

    Returns:
        A validated CalculationRequest.

    Raises:
        InvalidRequestError: If the request is not a set of named fields, if
            both or neither counter sources are given, if a timestamp comes
            without a period, or if a field has an unusable value.
    """
    if isinstance(request, CalculationRequest):
        return _validate(request)

    if not isinstance(request, Mapping):
        raise InvalidRequestError("No named argument object given.")

    counter = request.get("counter")
    timestamp = request.get("unix_timestamp")
    period = request.get("period")

    if (counter is None) == (timestamp is None):
        raise InvalidRequestError(
            "One of a HOTP counter or a unix timestamp (for TOTP) has to be "
            "specified, but not both."
        )
    if timestamp is not None and period is None:
        raise InvalidRequestError("TOTP requires specifying a refresh time in seconds.")

    if counter is not None:
        source: CounterSource = ExplicitCounter(counter)
    else:
        source = TimeDerived(timestamp, period)

    return _validate(
        CalculationRequest(
            digits=request.get("digits"),
            secret_base32=request.get("secret_base32"),
            source=source,
        )
    )
