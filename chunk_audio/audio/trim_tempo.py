from __future__ import annotations

from typing import Callable, Optional

from chunk_audio.audio.atempo import calculate_atempo
from chunk_audio.model.types import OrderingMode, TrimTempoPlan
from chunk_audio.util.timecode import stringify_trim
from chunk_audio.util.validate import UnreachableOrderingError

TempoGenerator = Callable[[float], Optional[str]]


def _atrim(left: float, right: float) -> str:
    return f"atrim={stringify_trim(left)}:{stringify_trim(right)}"


def _stages(*clauses: str | None) -> tuple[str, ...]:
    return tuple(c for c in clauses if c)


def _seamless(
    *, playback_rate: float, trim_left: float, trim_right: float, tempo: TempoGenerator
) -> TrimTempoPlan:
    # atempo is not sample-exact and shifts its output slightly. For chunks that are
    # concatenated afterwards every chunk must see the same shift, so tempo runs on
    # the untrimmed stream and the trim bounds move into the tempo-adjusted time base.
    actual_trim_left = trim_left / playback_rate
    actual_trim_right = trim_right / playback_rate
    return TrimTempoPlan(
        stages=_stages(tempo(playback_rate), _atrim(actual_trim_left, actual_trim_right)),
        actual_trim_left=actual_trim_left,
        audible_duration=actual_trim_right - actual_trim_left,
    )


def _default(
    *, playback_rate: float, trim_left: float, trim_right: float, tempo: TempoGenerator
) -> TrimTempoPlan:
    # Trim first so atempo has less audio to process.
    return TrimTempoPlan(
        stages=_stages(_atrim(trim_left, trim_right), tempo(playback_rate)),
        actual_trim_left=trim_left,
        audible_duration=(trim_right - trim_left) / playback_rate,
    )


_PLANNERS = {
    OrderingMode.SEAMLESS: _seamless,
    OrderingMode.DEFAULT: _default,
}


def trim_and_set_tempo(
    *,
    playback_rate: float,
    trim_left: float,
    trim_right: float,
    mode: OrderingMode,
    asset_duration: float | None,
    tempo: TempoGenerator = calculate_atempo,
) -> TrimTempoPlan:
    """Order the atrim and atempo stages and work out the audible duration.

    `actual_trim_left` is expressed in the time base of whichever stage runs
    first, which is what the volume envelope has to be aligned to.
    """

    # Never ask for audio past the physical end of the source. A zero duration
    # means the probe failed and is treated as unknown.
    right = min(trim_right, asset_duration) if asset_duration else trim_right

    planner = _PLANNERS.get(mode)
    if planner is None:
        raise UnreachableOrderingError(f"unknown ordering mode: {mode!r}")

    return planner(playback_rate=playback_rate, trim_left=trim_left, trim_right=right, tempo=tempo)
