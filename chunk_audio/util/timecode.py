from __future__ import annotations

import math


def format_number(value: float) -> str:
    """Render a number the way the composition side prints it.

    Integral values have no trailing ".0" (2.0 -> "2"), everything else uses
    the shortest representation that round-trips.
    """

    v = float(value)
    if math.isfinite(v) and v.is_integer() and abs(v) < 1e16:
        return str(int(v))
    return repr(v)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +inf (JS Math.round)."""
    return int(math.floor(float(value) + 0.5))


def stringify_trim(seconds: float) -> str:
    """Convert seconds to an ffmpeg duration literal in microseconds.

    0.25 -> "250000us". Sub-microsecond magnitudes (including -0.0) are float
    residue from upstream arithmetic and become "0us"; ffmpeg rejects the
    scientific notation they would otherwise print as.
    """

    value = float(seconds) * 1_000_000
    if abs(value) < 1:
        return "0us"
    as_string = format_number(value)
    if "e-" in as_string:
        return "0us"
    return f"{as_string}us"
