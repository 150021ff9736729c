from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from chunk_audio.util.limits import DEFAULT_SAMPLE_FORMAT, DEFAULT_SAMPLE_RATE


def default_config_dir() -> Path:
    return Path.home() / ".config" / "chunk-audio"


def default_config_path() -> Path:
    return default_config_dir() / "config.json"


@dataclass(frozen=True)
class RenderConfig:
    sample_rate: int = DEFAULT_SAMPLE_RATE
    sample_format: str = DEFAULT_SAMPLE_FORMAT  # ffmpeg sample_fmts name, e.g. s16, s32, fltp

    def __post_init__(self) -> None:
        if int(self.sample_rate) <= 0:
            raise ValueError(f"sample_rate must be > 0 (got {self.sample_rate})")
        if not str(self.sample_format).strip():
            raise ValueError("sample_format must not be empty")

    def to_dict(self) -> dict[str, Any]:
        return {
            "sample_rate": self.sample_rate,
            "sample_format": self.sample_format,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "RenderConfig":
        return RenderConfig(
            sample_rate=int(d.get("sample_rate") or DEFAULT_SAMPLE_RATE),
            sample_format=str(d.get("sample_format") or DEFAULT_SAMPLE_FORMAT),
        )


def load_config(path: Path | None = None) -> RenderConfig:
    p = path or default_config_path()
    if not p.exists():
        return RenderConfig()
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"config must be a JSON object: {p}")
    return RenderConfig.from_dict(data)


def save_config(cfg: RenderConfig, path: Path | None = None) -> Path:
    p = path or default_config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(cfg.to_dict(), indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return p
