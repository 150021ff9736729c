from __future__ import annotations

import json
from pathlib import Path

import pytest

from chunk_audio.__main__ import main
from chunk_audio.audio.filter_graph import FilterGraphBuilder
from chunk_audio.io.placements import build_report, load_placements, save_report_json
from chunk_audio.model.types import AssetPlacement
from chunk_audio.util.config import RenderConfig

YAML_DOC = """\
placements:
  - name: music
    trimLeft: 0
    trimRight: 8
    fps: 30
    chunkLengthInSeconds: 10
    startInVideo: 30
    channels: 2
    volume: 0.5
  - name: gone
    trim_left: 5
    trim_right: 6
    asset_duration: 3
    fps: 30
    chunk_length_in_seconds: 10
  - name: squeaky
    trim_left: 0
    trim_right: 1
    fps: 30
    chunk_length_in_seconds: 1
    tone_frequency: 3
"""


def test_load_placements_yaml_accepts_camel_and_snake_case(tmp_path: Path) -> None:
    pth = tmp_path / "chunk.yaml"
    pth.write_text(YAML_DOC, encoding="utf-8")

    items = load_placements(pth)
    assert [i.name for i in items] == ["music", "gone", "squeaky"]
    music = items[0].placement
    assert music.trim_right == 8
    assert music.start_in_video == 30
    assert music.volume == 0.5
    assert items[1].placement.asset_duration == 3


def test_load_placements_json_list(tmp_path: Path) -> None:
    pth = tmp_path / "chunk.json"
    payload = [
        {"trim_left": 0, "trim_right": 2, "fps": 25, "chunk_length_in_seconds": 2, "volume": [1, 0.5]},
    ]
    pth.write_text(json.dumps(payload), encoding="utf-8")

    items = load_placements(pth)
    assert items[0].name == "asset0"
    assert items[0].placement.volume == (1.0, 0.5)


def test_load_placements_rejects_bad_documents(tmp_path: Path) -> None:
    pth = tmp_path / "bad.yaml"
    pth.write_text("just a string\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_placements(pth)

    pth.write_text("placements:\n  - name: x\n    fps: 30\n", encoding="utf-8")
    with pytest.raises(ValueError, match="'x'"):
        load_placements(pth)


def test_build_report_keeps_going_after_invalid_asset(tmp_path: Path) -> None:
    pth = tmp_path / "chunk.yaml"
    pth.write_text(YAML_DOC, encoding="utf-8")

    report = build_report(load_placements(pth), inline_pads=True)
    assert report["sample_rate"] == 48000
    music, gone, squeaky = report["assets"]

    assert music["fragment"]["pad_start"] == "adelay=1000|1000|1000"
    assert music["fragment"]["pad_end"] == "apad=pad_len=48000"
    assert "volume=0.5:eval=once" in music["fragment"]["filter"]
    assert music["filter_script"].endswith(",adelay=1000|1000|1000,apad=pad_len=48000[a0]")

    assert gone["fragment"] is None
    assert "error" not in gone

    assert squeaky["fragment"] is None
    assert "tone_frequency" in squeaky["error"]


def test_save_report_json(tmp_path: Path) -> None:
    p = AssetPlacement(trim_left=0, trim_right=1, chunk_length_in_seconds=1, fps=30)
    from chunk_audio.io.placements import NamedPlacement

    report = build_report([NamedPlacement("a", p)], FilterGraphBuilder(RenderConfig(sample_rate=44100)))
    out = save_report_json(tmp_path / "out" / "report.json", report)
    loaded = json.loads(Path(out).read_text(encoding="utf-8"))
    assert loaded["sample_rate"] == 44100
    assert loaded["assets"][0]["fragment"]["filter"].startswith("[0:a]aformat=sample_fmts=s32:sample_rates=44100")


def test_cli_build_writes_report(tmp_path: Path) -> None:
    pth = tmp_path / "chunk.yaml"
    pth.write_text(YAML_DOC, encoding="utf-8")
    out = tmp_path / "report.json"

    main(
        [
            "build",
            str(pth),
            "--config",
            str(tmp_path / "missing-config.json"),
            "--sample-rate",
            "44100",
            "--inline-pads",
            "--out",
            str(out),
        ]
    )

    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["sample_rate"] == 44100
    assert report["assets"][0]["fragment"]["pad_end"] == "apad=pad_len=44100"
    assert "filter_script" in report["assets"][0]


def test_cli_build_prints_to_stdout(tmp_path: Path, capsys) -> None:
    pth = tmp_path / "chunk.json"
    pth.write_text(json.dumps([{"trimLeft": 0, "trimRight": 1, "fps": 30, "chunkLengthInSeconds": 1}]), encoding="utf-8")

    main(["build", str(pth), "--config", str(tmp_path / "none.json")])
    report = json.loads(capsys.readouterr().out)
    assert report["assets"][0]["fragment"]["pad_end"] is None


def test_cli_build_missing_file_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(["build", str(tmp_path / "nope.yaml"), "--config", str(tmp_path / "none.json")])


def test_cli_build_accepts_verbose_after_subcommand(tmp_path: Path, capsys) -> None:
    pth = tmp_path / "chunk.json"
    pth.write_text(json.dumps([{"trimLeft": 0, "trimRight": 1, "fps": 30, "chunkLengthInSeconds": 2}]), encoding="utf-8")

    main(["build", str(pth), "--config", str(tmp_path / "none.json"), "-v"])
    report = json.loads(capsys.readouterr().out)
    assert report["assets"][0]["fragment"]["pad_end"] == "apad=pad_len=48000"

    main(["-v", "build", str(pth), "--config", str(tmp_path / "none.json")])
    assert json.loads(capsys.readouterr().out) == report
