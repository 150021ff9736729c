from __future__ import annotations

import math
from collections import Counter

from chunk_audio.model.types import AssetVolume, VolumeExpression
from chunk_audio.util.limits import VOLUME_DECIMALS
from chunk_audio.util.timecode import format_number


def _clamp(v: float, max_volume: float) -> float:
    return max(0.0, min(max_volume, float(v)))


def _ts(seconds: float) -> str:
    return format_number(round(seconds, 6))


def _frame_ranges(levels: list[float]) -> dict[float, list[tuple[int, int]]]:
    """Group consecutive frames with the same level into inclusive (first, last) ranges."""

    out: dict[float, list[tuple[int, int]]] = {}
    start = 0
    for i in range(1, len(levels) + 1):
        if i == len(levels) or levels[i] != levels[start]:
            out.setdefault(levels[start], []).append((start, i - 1))
            start = i
    return out


def ffmpeg_volume_expression(
    *,
    volume: AssetVolume,
    fps: float,
    trim_left: float,
    allow_amplification_during_render: bool,
) -> VolumeExpression:
    """Turn a volume envelope into the arguments of ffmpeg's volume filter.

    A static level evaluates once. A per-frame envelope becomes a nested
    if(between(t,..)) expression evaluated per audio frame, where frame i is
    centred on `trim_left + i / fps`. The most common level is the fallback
    branch so the expression stays as short as possible.
    """

    max_volume = math.inf if allow_amplification_during_render else 1.0

    if isinstance(volume, (int, float)):
        return VolumeExpression(value=format_number(_clamp(volume, max_volume)), eval="once")

    levels = [round(_clamp(v, max_volume), VOLUME_DECIMALS) for v in volume]
    if not levels:
        return VolumeExpression(value="1", eval="once")
    if len(set(levels)) == 1:
        return VolumeExpression(value=format_number(levels[0]), eval="once")

    # The last frame lasts a full 1/fps; repeat it so its window reaches the end of the asset.
    padded = levels + [levels[-1]]
    ranges = _frame_ranges(padded)
    fallback = Counter(padded).most_common(1)[0][0]

    expression = format_number(fallback)
    others = [lv for lv in ranges if lv != fallback]
    for level in reversed(others):
        cond = "+".join(
            f"between(t,{_ts(trim_left + (first - 0.5) / fps)},{_ts(trim_left + (last + 0.5) / fps)})"
            for first, last in ranges[level]
        )
        expression = f"if({cond},{format_number(level)},{expression})"

    return VolumeExpression(value=f"'{expression}'", eval="frame")
