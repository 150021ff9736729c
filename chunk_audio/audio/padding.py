from __future__ import annotations

from chunk_audio.model.types import FilterFragment
from chunk_audio.util.limits import PAD_TOLERANCE_SECONDS
from chunk_audio.util.timecode import round_half_up

OUTPUT_LABEL = "[a0]"


def pad_end_directive(pad_at_end: float, sample_rate: int) -> str | None:
    """Silence to append so the asset fills the rest of the chunk, in samples."""
    if pad_at_end > PAD_TOLERANCE_SECONDS:
        return f"apad=pad_len={round_half_up(pad_at_end * sample_rate)}"
    return None


def pad_start_directive(start_in_video_seconds: float, channels: int) -> str | None:
    """Per-channel delay placing the asset at its start offset inside the chunk.

    Lists channels + 1 values: probed channel counts are sometimes one short,
    and adelay silently ignores delays for channels that do not exist.
    """

    if start_in_video_seconds == 0:
        return None
    ms = str(round_half_up(start_in_video_seconds * 1000))
    return "adelay=" + "|".join([ms] * (channels + 1))


def apply_padding(fragment: FilterFragment) -> str:
    """Splice a fragment's pads onto the end of its chain, keeping the [a0] output.

    The delay goes first so the end pad is measured after the start offset.
    """

    if not fragment.filter.endswith(OUTPUT_LABEL):
        raise ValueError(f"filter does not end with {OUTPUT_LABEL}: {fragment.filter!r}")

    extra = [d for d in (fragment.pad_start, fragment.pad_end) if d]
    if not extra:
        return fragment.filter
    chain = fragment.filter[: -len(OUTPUT_LABEL)]
    return chain + "," + ",".join(extra) + OUTPUT_LABEL
