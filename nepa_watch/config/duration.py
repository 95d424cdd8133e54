"""Polling interval parsing ("6h", "90m", "PT6H", "P1D")."""

import re


class DurationParseError(ValueError):
    """Raised when a duration string cannot be parsed."""


_ISO_PATTERN = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?$")
_HUMAN_PATTERN = re.compile(r"(\d+)([smhd])")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(duration_str: str) -> int:
    """Parse a duration string to seconds.

    Accepts ISO-8601 (``PT6H``, ``P1D``, ``PT1H30M``) and compact
    human-readable forms (``6h``, ``90m``, ``1h30m``).

    Raises:
        DurationParseError: If the string is empty, malformed, or zero

    Examples:
        >>> parse_duration("6h")
        21600
        >>> parse_duration("PT1H30M")
        5400
    """
    text = (duration_str or "").strip()
    if not text:
        raise DurationParseError("Duration string cannot be empty")

    if text.upper().startswith("P"):
        match = _ISO_PATTERN.match(text.upper())
        if not match:
            raise DurationParseError(
                f"Invalid ISO-8601 duration format: '{text}'. Expected e.g. 'PT6H' or 'P1D'"
            )
        days, hours, minutes, seconds = (int(g) if g else 0 for g in match.groups())
        total = days * 86400 + hours * 3600 + minutes * 60 + seconds
    else:
        compact = re.sub(r"\s+", "", text.lower())
        pieces = _HUMAN_PATTERN.findall(compact)
        if not pieces or "".join(n + u for n, u in pieces) != compact:
            raise DurationParseError(
                f"Invalid duration format: '{text}'. Expected e.g. '6h', '90m' or '1h30m'"
            )
        total = sum(int(n) * _UNIT_SECONDS[u] for n, u in pieces)

    if total == 0:
        raise DurationParseError(f"Duration cannot be zero: '{text}'")
    return total


def validate_duration_range(
    duration_seconds: int,
    min_seconds: int = 900,  # 15 minutes
    max_seconds: int = 7 * 86400,  # 1 week
) -> None:
    """Reject polling intervals that would hammer or starve the upstream.

    Raises:
        DurationParseError: If the duration falls outside the range
    """
    if duration_seconds < min_seconds:
        raise DurationParseError(
            f"Poll interval too short: {duration_seconds}s. Minimum is {min_seconds}s."
        )
    if duration_seconds > max_seconds:
        raise DurationParseError(
            f"Poll interval too long: {duration_seconds}s. Maximum is {max_seconds}s."
        )
