from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence, Union

# A single static level, or one level per composition frame.
AssetVolume = Union[float, Sequence[float]]


def _pick(d: dict[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    if snake in d:
        return d[snake]
    return d.get(camel, default)


class OrderingMode(Enum):
    """Relative order of the trim and tempo stages."""

    # tempo first, trim bounds remapped into the tempo-adjusted time base
    SEAMLESS = "seamless"
    # trim first on raw bounds, then tempo
    DEFAULT = "default"

    @staticmethod
    def from_flag(for_seamless_aac_concatenation: bool) -> "OrderingMode":
        return OrderingMode.SEAMLESS if for_seamless_aac_concatenation else OrderingMode.DEFAULT


@dataclass(frozen=True)
class AssetPlacement:
    """How one audio asset is treated inside one render chunk.

    Times are in seconds except `start_in_video`, which is a frame index
    converted with `fps`. `trim_right` is the point after trimming but before
    the playback rate is applied. `asset_duration` is None when unknown.
    """

    trim_left: float
    trim_right: float
    chunk_length_in_seconds: float
    fps: float
    playback_rate: float = 1.0
    asset_duration: float | None = None
    start_in_video: int = 0
    channels: int = 2
    volume: AssetVolume = 1.0
    tone_frequency: float | None = None
    allow_amplification_during_render: bool = False
    for_seamless_aac_concatenation: bool = False

    @property
    def ordering_mode(self) -> OrderingMode:
        return OrderingMode.from_flag(self.for_seamless_aac_concatenation)

    @property
    def start_in_video_seconds(self) -> float:
        return self.start_in_video / self.fps

    def to_dict(self) -> dict[str, Any]:
        vol = self.volume if isinstance(self.volume, (int, float)) else list(self.volume)
        return {
            "trim_left": self.trim_left,
            "trim_right": self.trim_right,
            "chunk_length_in_seconds": self.chunk_length_in_seconds,
            "fps": self.fps,
            "playback_rate": self.playback_rate,
            "asset_duration": self.asset_duration,
            "start_in_video": self.start_in_video,
            "channels": self.channels,
            "volume": vol,
            "tone_frequency": self.tone_frequency,
            "allow_amplification_during_render": self.allow_amplification_during_render,
            "for_seamless_aac_concatenation": self.for_seamless_aac_concatenation,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "AssetPlacement":
        """Build from snake_case or camelCase keys (the renderer emits camelCase)."""

        for snake, camel in (
            ("trim_left", "trimLeft"),
            ("trim_right", "trimRight"),
            ("chunk_length_in_seconds", "chunkLengthInSeconds"),
            ("fps", "fps"),
        ):
            if snake not in d and camel not in d:
                raise ValueError(f"placement missing required field: {snake}")

        duration = _pick(d, "asset_duration", "assetDuration")
        tone = _pick(d, "tone_frequency", "toneFrequency")
        start = float(_pick(d, "start_in_video", "startInVideo", 0))
        if not start.is_integer():
            raise ValueError(f"start_in_video must be a whole frame index (got {start:g})")
        start_in_video = int(start)
        vol = d.get("volume", 1.0)
        if isinstance(vol, (list, tuple)):
            vol = tuple(float(v) for v in vol)
        else:
            vol = float(vol)

        return AssetPlacement(
            trim_left=float(_pick(d, "trim_left", "trimLeft")),
            trim_right=float(_pick(d, "trim_right", "trimRight")),
            chunk_length_in_seconds=float(_pick(d, "chunk_length_in_seconds", "chunkLengthInSeconds")),
            fps=float(d["fps"]),
            playback_rate=float(_pick(d, "playback_rate", "playbackRate", 1.0)),
            asset_duration=None if duration is None else float(duration),
            start_in_video=start_in_video,
            channels=int(d.get("channels", 2)),
            volume=vol,
            tone_frequency=None if tone is None else float(tone),
            allow_amplification_during_render=bool(
                _pick(d, "allow_amplification_during_render", "allowAmplificationDuringRender", False)
            ),
            for_seamless_aac_concatenation=bool(
                _pick(d, "for_seamless_aac_concatenation", "forSeamlessAacConcatenation", False)
            ),
        )


@dataclass(frozen=True)
class TrimTempoPlan:
    # 0-2 clauses, already in execution order
    stages: tuple[str, ...]
    actual_trim_left: float
    audible_duration: float


@dataclass(frozen=True)
class VolumeExpression:
    value: str
    eval: str  # "once" | "frame"

    @property
    def is_identity(self) -> bool:
        return self.value == "1"


@dataclass(frozen=True)
class FilterFragment:
    """A single-input/single-output audio chain plus its padding directives.

    `filter` reads `[0:a]` and writes `[a0]`. The pads are spliced in by the
    caller and are never part of `filter` itself.
    """

    filter: str
    pad_start: str | None = None
    pad_end: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "filter": self.filter,
            "pad_start": self.pad_start,
            "pad_end": self.pad_end,
        }
