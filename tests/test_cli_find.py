from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from apps.cli.main import app

runner = CliRunner()

_ALBUMS = """The Beatles - Abbey Road
Aidan Knight - Each Other
The Dø - Shake Shook Shaken
"""


def _write_spec(path: Path, *, template: str = "(?m)^{{.Artist}} - {{.Title}}$") -> Path:
    path.write_text(
        f"template: {json.dumps(template)}\nfields:\n  Artist: '.+'\n  Title: '.+'\n",
        encoding="utf-8",
    )
    return path


def _json_lines(output: str) -> list[dict[str, str]]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_cli_find_first_match(tmp_path: Path) -> None:
    spec = _write_spec(tmp_path / "spec.yaml")

    result = runner.invoke(app, ["find", "--spec", str(spec), "--text", _ALBUMS])

    assert result.exit_code == 0
    assert _json_lines(result.output) == [{"Artist": "The Beatles", "Title": "Abbey Road"}]


def test_cli_find_all_from_input_file_with_limit(tmp_path: Path) -> None:
    spec = _write_spec(tmp_path / "spec.yaml")
    source = tmp_path / "albums.txt"
    source.write_text(_ALBUMS, encoding="utf-8")

    result = runner.invoke(
        app,
        ["find", "--spec", str(spec), "--input", str(source), "--all", "--limit", "2"],
    )

    assert result.exit_code == 0
    assert _json_lines(result.output) == [
        {"Artist": "The Beatles", "Title": "Abbey Road"},
        {"Artist": "Aidan Knight", "Title": "Each Other"},
    ]


def test_cli_find_reads_stdin_and_writes_out_file(tmp_path: Path) -> None:
    spec = _write_spec(tmp_path / "spec.yaml")
    out = tmp_path / "out" / "matches.json"

    result = runner.invoke(
        app,
        ["find", "--spec", str(spec), "--all", "--out", str(out)],
        input=_ALBUMS,
    )

    assert result.exit_code == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["count"] == 3
    assert payload["limit"] == 20
    assert payload["matches"][2] == {"Artist": "The Dø", "Title": "Shake Shook Shaken"}


def test_cli_find_no_match_exits_2(tmp_path: Path) -> None:
    spec = _write_spec(tmp_path / "spec.yaml")

    result = runner.invoke(app, ["find", "--spec", str(spec), "--text", "no separator here"])

    assert result.exit_code == 2
    assert "INFO: no match" in result.output


def test_cli_find_compile_error_exits_1(tmp_path: Path) -> None:
    spec = _write_spec(tmp_path / "spec.yaml", template="{{.Artist}} {{.Year}}")

    result = runner.invoke(app, ["find", "--spec", str(spec), "--text", "x"])

    assert result.exit_code == 1
    assert "ERROR: UnknownFieldReferenceError" in result.output


def test_cli_find_invalid_spec_exits_1(tmp_path: Path) -> None:
    spec = tmp_path / "spec.yaml"
    spec.write_text("template: x\n", encoding="utf-8")

    result = runner.invoke(app, ["find", "--spec", str(spec), "--text", "x"])

    assert result.exit_code == 1
    assert "Invalid pattern spec" in result.output


def test_cli_find_rejects_text_and_input_together(tmp_path: Path) -> None:
    spec = _write_spec(tmp_path / "spec.yaml")
    source = tmp_path / "albums.txt"
    source.write_text(_ALBUMS, encoding="utf-8")

    result = runner.invoke(
        app,
        ["find", "--spec", str(spec), "--input", str(source), "--text", "x"],
    )

    assert result.exit_code == 1
    assert "cannot be used together" in result.output


def test_cli_explain_prints_group_index(tmp_path: Path) -> None:
    spec = _write_spec(tmp_path / "spec.yaml", template="{{.Artist}}|{{.Artist}} - {{.Title}}")

    result = runner.invoke(app, ["explain", "--spec", str(spec)])

    assert result.exit_code == 0
    summary = json.loads(result.output)
    assert summary["pattern"] == "(?P<Artist>.+)|(?P<Artist__2>.+) - (?P<Title>.+)"
    assert summary["group_index"] == {"Artist": [1, 2], "Title": [3]}
