"""Go-style duration strings.

ginkgo and the kubetest2 ecosystem speak Go's ``time.Duration`` syntax on the
command line (``24h``, ``1h30m``, ``90s``), so flags accept that syntax and
``--ginkgo.timeout`` is rendered back in Go's canonical ``Duration.String()``
form.
"""

import re
from datetime import timedelta
from fractions import Fraction

__all__ = ["format_duration", "parse_duration"]

_NANOSECOND = 1
_MICROSECOND = 1_000 * _NANOSECOND
_MILLISECOND = 1_000 * _MICROSECOND
_SECOND = 1_000 * _MILLISECOND
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE

_UNITS: dict[str, int] = {
    "ns": _NANOSECOND,
    "us": _MICROSECOND,
    "µs": _MICROSECOND,  # U+00B5 micro sign
    "μs": _MICROSECOND,  # U+03BC greek mu
    "ms": _MILLISECOND,
    "s": _SECOND,
    "m": _MINUTE,
    "h": _HOUR,
}

# "ms" must be tried before "m" and "s"
_COMPONENT_RE = re.compile(r"(\d*(?:\.\d*)?)(ns|us|µs|μs|ms|s|m|h)")


def _to_nanos(value: timedelta) -> int:
    return ((value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds) * 1_000


def parse_duration(text: str) -> timedelta:
    """Parse a Go duration string such as ``"1h15m30.5s"``.

    Durations that do not fit a timedelta, or that are not a whole number
    of microseconds, are rejected rather than truncated.

    Raises:
        ValueError: If the string is not a valid duration.
    """
    raw = text.strip()
    if not raw:
        raise ValueError("empty duration")

    body = raw
    negative = False
    if body[0] in "+-":
        negative = body[0] == "-"
        body = body[1:]

    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration {text!r}")

    total = Fraction(0)
    pos = 0
    while pos < len(body):
        match = _COMPONENT_RE.match(body, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        number, unit = match.groups()
        if number in ("", "."):
            raise ValueError(f"invalid duration {text!r}: missing number before {unit!r}")
        total += Fraction(number) * _UNITS[unit]
        pos = match.end()

    # timedelta has microsecond resolution
    if total % _MICROSECOND:
        raise ValueError(f"invalid duration {text!r}: finer than one microsecond")

    try:
        result = timedelta(microseconds=int(total // _MICROSECOND))
    except OverflowError as exc:
        raise ValueError(f"invalid duration {text!r}: out of range") from exc
    return -result if negative else result


def _format_fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    digits = str(frac).rjust(width, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_duration(value: timedelta) -> str:
    """Render ``value`` the way Go's ``Duration.String()`` does.

    >>> format_duration(timedelta(hours=24))
    '24h0m0s'
    >>> format_duration(timedelta(milliseconds=1500))
    '1.5s'
    """
    nanos = _to_nanos(value)
    if nanos == 0:
        return "0s"

    sign = "-" if nanos < 0 else ""
    remaining = abs(nanos)

    if remaining < _SECOND:
        if remaining < _MICROSECOND:
            return f"{sign}{remaining}ns"
        if remaining < _MILLISECOND:
            return f"{sign}{_format_fraction(remaining, _MICROSECOND)}µs"
        return f"{sign}{_format_fraction(remaining, _MILLISECOND)}ms"

    hours, remaining = divmod(remaining, _HOUR)
    minutes, remaining = divmod(remaining, _MINUTE)
    out = f"{_format_fraction(remaining, _SECOND)}s"
    if hours or minutes:
        out = f"{minutes}m{out}"
    if hours:
        out = f"{hours}h{out}"
    return sign + out
