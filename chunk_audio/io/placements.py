from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from chunk_audio.audio.filter_graph import FilterGraphBuilder
from chunk_audio.audio.padding import apply_padding
from chunk_audio.model.types import AssetPlacement
from chunk_audio.util.validate import FilterValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamedPlacement:
    name: str
    placement: AssetPlacement


def _read_document(p: Path) -> Any:
    raw = p.read_text(encoding="utf-8")
    if p.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(raw)
    return json.loads(raw)


def load_placements(path: str | Path) -> list[NamedPlacement]:
    """Load placement requests from a YAML or JSON file.

    Accepted shapes:

    placements:
      - name: music
        trim_left: 0
        trim_right: 10
        fps: 30
        chunk_length_in_seconds: 10

    or a bare top-level list of the same entries. camelCase keys work too.
    """

    p = Path(path)
    data = _read_document(p)
    if isinstance(data, dict):
        data = data.get("placements")
    if not isinstance(data, list):
        raise ValueError(f"placements file must hold a list (or a mapping with 'placements'): {p}")

    out: list[NamedPlacement] = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"placement #{i} in {p} must be a mapping/object")
        name = str(entry.get("name") or f"asset{i}")
        fields = {k: v for k, v in entry.items() if k != "name"}
        try:
            out.append(NamedPlacement(name=name, placement=AssetPlacement.from_dict(fields)))
        except (TypeError, ValueError) as e:
            raise ValueError(f"placement '{name}' in {p}: {e}") from e

    logger.info("loaded %d placement(s) from %s", len(out), p)
    return out


def build_report(
    placements: list[NamedPlacement],
    builder: FilterGraphBuilder | None = None,
    *,
    inline_pads: bool = False,
) -> dict[str, Any]:
    """Build every placement and collect the results.

    An invalid request is reported under "error" for that asset only; the
    rest of the batch is still built.
    """

    builder = builder or FilterGraphBuilder()
    assets: list[dict[str, Any]] = []
    for item in placements:
        row: dict[str, Any] = {"name": item.name}
        try:
            fragment = builder.build(item.placement)
        except FilterValidationError as e:
            logger.warning("%s: %s", item.name, e)
            row["fragment"] = None
            row["error"] = str(e)
            assets.append(row)
            continue

        if fragment is None:
            row["fragment"] = None
        else:
            row["fragment"] = fragment.to_dict()
            if inline_pads:
                row["filter_script"] = apply_padding(fragment)
        assets.append(row)

    return {
        "sample_rate": builder.sample_rate,
        "sample_format": builder.config.sample_format,
        "assets": assets,
    }


def save_report_json(path: str | Path, report: dict[str, Any]) -> str:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(report, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return str(out)
