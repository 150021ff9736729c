from __future__ import annotations

"""Fixed audio constants shared with the rest of the render pipeline.

The sample rate and format here are only defaults; the builder takes the
active values from RenderConfig.
"""

DEFAULT_SAMPLE_RATE = 48000
DEFAULT_SAMPLE_FORMAT = "s32"

# Anything shorter than this at the end of a chunk is float noise, not silence to pad.
PAD_TOLERANCE_SECONDS = 0.0000001

# asetrate/atempo pitch trick is only trusted up to an octave up.
MAX_TONE_FREQUENCY = 2.0

# ffmpeg's atempo accepts [0.5, 100] but quality degrades above 2; keep each stage in [0.5, 2].
ATEMPO_MIN = 0.5
ATEMPO_MAX = 2.0

# Per-frame volume levels are rounded to keep the generated expression short.
VOLUME_DECIMALS = 3
