from __future__ import annotations

import logging
from typing import Callable

from chunk_audio.audio.atempo import calculate_atempo
from chunk_audio.audio.padding import OUTPUT_LABEL, pad_end_directive, pad_start_directive
from chunk_audio.audio.trim_tempo import TempoGenerator, trim_and_set_tempo
from chunk_audio.audio.volume import ffmpeg_volume_expression
from chunk_audio.model.types import AssetPlacement, FilterFragment, TrimTempoPlan, VolumeExpression
from chunk_audio.util.config import RenderConfig
from chunk_audio.util.timecode import format_number
from chunk_audio.util.validate import validate_placement

logger = logging.getLogger(__name__)

INPUT_LABEL = "[0:a]"

VolumeGenerator = Callable[..., VolumeExpression]


class FilterGraphBuilder:
    """Build the per-asset audio chain for one render chunk.

    The builder holds no per-call state; one instance can serve any number of
    assets, from any number of threads.
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        *,
        tempo: TempoGenerator = calculate_atempo,
        volume: VolumeGenerator = ffmpeg_volume_expression,
    ) -> None:
        self.config = config or RenderConfig()
        self._tempo = tempo
        self._volume = volume

    @property
    def sample_rate(self) -> int:
        return int(self.config.sample_rate)

    # Stage producers. Each returns one clause (possibly comma-joined) or None.

    def _format_stage(self, p: AssetPlacement, plan: TrimTempoPlan, vol: VolumeExpression) -> str | None:
        # Every asset leaves with the same format so the mixer never converts.
        return f"aformat=sample_fmts={self.config.sample_format}:sample_rates={self.sample_rate}"

    def _trim_tempo_stage(self, p: AssetPlacement, plan: TrimTempoPlan, vol: VolumeExpression) -> str | None:
        return ",".join(plan.stages) or None

    def _volume_stage(self, p: AssetPlacement, plan: TrimTempoPlan, vol: VolumeExpression) -> str | None:
        if vol.is_identity:
            return None
        return f"volume={vol.value}:eval={vol.eval}"

    def _tone_stage(self, p: AssetPlacement, plan: TrimTempoPlan, vol: VolumeExpression) -> str | None:
        tf = p.tone_frequency
        if tf is None or tf == 1:
            return None
        # Resample at a shifted rate to move the pitch, then restore the duration.
        f = format_number(tf)
        return f"asetrate={self.sample_rate}*{f},aresample={self.sample_rate},atempo=1/{f}"

    def _stage_producers(self):
        return (
            self._format_stage,
            self._trim_tempo_stage,
            self._volume_stage,
            self._tone_stage,
        )

    def build(self, placement: AssetPlacement) -> FilterFragment | None:
        """Return the fragment for `placement`, or None if nothing of it is audible.

        Raises FilterValidationError for an invalid tone frequency or a
        malformed request.
        """

        p = placement
        if p.asset_duration and p.trim_left >= p.asset_duration:
            logger.debug("asset trimmed past its end (trim_left=%s, duration=%s); omitting", p.trim_left, p.asset_duration)
            return None

        validate_placement(p)

        plan = trim_and_set_tempo(
            playback_rate=p.playback_rate,
            trim_left=p.trim_left,
            trim_right=p.trim_right,
            mode=p.ordering_mode,
            asset_duration=p.asset_duration,
            tempo=self._tempo,
        )
        # Volume timings follow whichever of atrim/atempo runs first.
        vol = self._volume(
            volume=p.volume,
            fps=p.fps,
            trim_left=plan.actual_trim_left,
            allow_amplification_during_render=p.allow_amplification_during_render,
        )

        # Redundant adjacent filters are audible, so skipped stages leave no trace.
        clauses = [c for c in (produce(p, plan, vol) for produce in self._stage_producers()) if c]

        start_seconds = p.start_in_video_seconds
        pad_at_end = p.chunk_length_in_seconds - plan.audible_duration - start_seconds

        fragment = FilterFragment(
            filter=INPUT_LABEL + ",".join(clauses) + OUTPUT_LABEL,
            pad_start=pad_start_directive(start_seconds, p.channels),
            pad_end=pad_end_directive(pad_at_end, self.sample_rate),
        )
        logger.debug(
            "mode=%s audible=%.6fs start=%.6fs pad_end=%.6fs -> %s",
            p.ordering_mode.value,
            plan.audible_duration,
            start_seconds,
            pad_at_end,
            fragment.filter,
        )
        return fragment


def stringify_ffmpeg_filter(
    placement: AssetPlacement,
    *,
    config: RenderConfig | None = None,
) -> FilterFragment | None:
    """Convenience wrapper around a default FilterGraphBuilder."""
    return FilterGraphBuilder(config).build(placement)
