"""Tests for the command line dump."""
import json

from vttcue.cli import main, format_timestamp

SAMPLE = """WEBVTT

STYLE
::cue(.hl) { color: #00ff00 }

1
00:00:00.000 --> 00:00:02.000 align:left line:10%,start
Hello <b>world</b>

00:01:05.250 --> 01:00:00.000
<c.hl>bye</c>
"""


def _write(tmp_path, content=SAMPLE):
    path = tmp_path / "sample.vtt"
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_format_timestamp():
    assert format_timestamp(0) == "00:00:00.000"
    assert format_timestamp(65_250_000) == "00:01:05.250"
    assert format_timestamp(3_600_000_000) == "01:00:00.000"


def test_text_output(tmp_path, capsys):
    assert main([_write(tmp_path)]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "00:00:00.000 --> 00:00:02.000 line=0.1 position=0 size=1 | Hello world"
    assert lines[1] == "00:01:05.250 --> 01:00:00.000 line=auto position=0.5 size=1 | bye"


def test_json_output(tmp_path, capsys):
    assert main([_write(tmp_path), "--json"]) == 0

    cues = json.loads(capsys.readouterr().out)
    assert cues[0]["id"] == "1"
    assert cues[0]["text_alignment"] == "NORMAL"
    assert cues[0]["line_type"] == "FRACTION"
    assert cues[0]["spans"] == [{"start": 6, "end": 11, "kind": "style", "value": "BOLD"}]
    assert cues[1]["spans"] == [{"start": 0, "end": 3, "kind": "foreground_color", "value": [0, 255, 0, 255]}]


def test_no_styles_flag(tmp_path, capsys):
    assert main([_write(tmp_path), "--json", "--no-styles"]) == 0
    cues = json.loads(capsys.readouterr().out)
    assert cues[1]["spans"] == []


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.vtt")]) == 1
    assert "Failed to load" in capsys.readouterr().err


def test_invalid_header(tmp_path, capsys):
    assert main([_write(tmp_path, "not a vtt file\n")]) == 1
    assert "WEBVTT" in capsys.readouterr().err
