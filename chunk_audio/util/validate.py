from __future__ import annotations

from chunk_audio.model.types import AssetPlacement
from chunk_audio.util.limits import MAX_TONE_FREQUENCY


class FilterValidationError(ValueError):
    """A placement request that cannot be turned into a filter chain."""


class UnreachableOrderingError(AssertionError):
    """Trim/tempo ordering was neither seamless nor default."""


def validate_tone_frequency(tone_frequency: float | None) -> None:
    if tone_frequency is None:
        return
    if tone_frequency <= 0 or tone_frequency > MAX_TONE_FREQUENCY:
        raise FilterValidationError(
            f"tone_frequency must be a positive number not greater than {MAX_TONE_FREQUENCY:g} "
            f"(got {tone_frequency})"
        )


def validate_placement(p: AssetPlacement) -> None:
    """Reject requests the timing arithmetic cannot handle.

    An asset trimmed entirely past its end is *not* rejected here; the builder
    reports it as "no fragment".
    """

    if p.fps <= 0:
        raise FilterValidationError(f"fps must be > 0 (got {p.fps})")
    if p.channels < 1:
        raise FilterValidationError(f"channels must be >= 1 (got {p.channels})")
    if p.playback_rate <= 0:
        raise FilterValidationError(f"playback_rate must be > 0 (got {p.playback_rate})")
    if p.trim_left < 0:
        raise FilterValidationError(f"trim_left must be >= 0 (got {p.trim_left})")
    validate_tone_frequency(p.tone_frequency)
