"""Typer CLI entrypoint for typedregex."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from apps.cli.io import build_matches_payload, dump_record, read_input_text, write_matches_atomic
from typedregex.config.spec_loader import load_pattern_spec
from typedregex.matcher import TypedPattern, describe
from typedregex.utils.errors import TypedRegexError

app = typer.Typer(help="Match regular expressions into records", rich_markup_mode=None)

_DEFAULT_LIMIT = 20


@app.callback()
def cli_callback() -> None:
    """CLI root callback to keep `typedregex find` as explicit command form."""


@app.command("find")
def find_command(
    spec: Annotated[Path, typer.Option(..., exists=True, dir_okay=False, file_okay=True)],
    input_path: Annotated[
        Path | None,
        typer.Option("--input", exists=True, dir_okay=False, file_okay=True),
    ] = None,
    text: Annotated[str | None, typer.Option(help="Text to match instead of --input.")] = None,
    find_all: Annotated[
        bool, typer.Option("--all", help="Report every match instead of the first one.")
    ] = False,
    limit: Annotated[
        int, typer.Option(min=1, help="Maximum number of matches reported with --all.")
    ] = _DEFAULT_LIMIT,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Also write matches as one JSON document to this path."),
    ] = None,
) -> None:
    """Match text against a pattern spec and print each match as a JSON object.

    Exit codes: 0 when something matched, 2 when nothing matched, 1 on errors.
    """

    try:
        pattern = _compile_spec(spec)
        source = read_input_text(input_path, text)
    except (TypedRegexError, ValueError, OSError) as exc:
        typer.echo(f"ERROR: {type(exc).__name__}: {exc}")
        raise typer.Exit(code=1) from exc

    effective_limit = limit if find_all else 1
    matches = _collect_matches(pattern, source, effective_limit)
    for record in matches:
        typer.echo(dump_record(record))

    if out is not None:
        try:
            write_matches_atomic(out, build_matches_payload(matches, limit=effective_limit))
        except OSError as exc:
            typer.echo(f"ERROR: write output failed: {exc}")
            raise typer.Exit(code=1) from exc

    if not matches:
        typer.echo("INFO: no match")
        raise typer.Exit(code=2)


@app.command("explain")
def explain_command(
    spec: Annotated[Path, typer.Option(..., exists=True, dir_okay=False, file_okay=True)],
) -> None:
    """Print the composite pattern and the group positions of every field."""

    try:
        pattern = _compile_spec(spec)
    except (TypedRegexError, ValueError) as exc:
        typer.echo(f"ERROR: {type(exc).__name__}: {exc}")
        raise typer.Exit(code=1) from exc

    typer.echo(json.dumps(describe(pattern), ensure_ascii=False, indent=2))


def _compile_spec(path: Path) -> TypedPattern:
    return load_pattern_spec(path).compile()


def _collect_matches(pattern: TypedPattern, source: str, limit: int) -> list[dict[str, str]]:
    if limit == 1:
        record: dict[str, str] = {}
        return [record] if pattern.find(source, record) else []

    records: list[dict[str, str]] = [{} for _ in range(limit)]
    found = pattern.find_all(source, records)
    return records[:found]


def main() -> None:
    """Console script entrypoint."""

    app()


if __name__ == "__main__":
    main()
