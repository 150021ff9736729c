from __future__ import annotations

import math

from chunk_audio.util.limits import ATEMPO_MAX, ATEMPO_MIN
from chunk_audio.util.validate import FilterValidationError


def calculate_atempo(playback_rate: float) -> str | None:
    """Return an atempo chain for `playback_rate`, or None when it is a no-op.

    Rates outside [0.5, 2] are split into two equal sqrt(rate) halves,
    recursively, so every single atempo stays inside the range:

        calculate_atempo(1.5) -> "atempo=1.50000"
        calculate_atempo(4)   -> "atempo=2.00000,atempo=2.00000"
    """

    rate = float(playback_rate)
    if rate == 1:
        return None
    if rate <= 0 or not math.isfinite(rate):
        raise FilterValidationError(f"playback_rate must be a positive finite number (got {playback_rate})")

    if ATEMPO_MIN <= rate <= ATEMPO_MAX:
        return f"atempo={rate:.5f}"

    half = calculate_atempo(math.sqrt(rate))
    return f"{half},{half}"
