"""CLI I/O helpers for reading input text and writing match results atomically."""

from __future__ import annotations

import json
import sys
import tempfile
from pathlib import Path
from typing import Any


def read_input_text(input_path: Path | None, text: str | None) -> str:
    """Return the text to match from --text, --input or stdin, in that order."""

    if text is not None and input_path is not None:
        raise ValueError("--text and --input cannot be used together")
    if text is not None:
        return text
    if input_path is not None:
        return input_path.read_text(encoding="utf-8")
    return sys.stdin.read()


def build_matches_payload(matches: list[dict[str, str]], *, limit: int | None) -> dict[str, Any]:
    """Build the JSON document written for one run."""

    return {
        "count": len(matches),
        "limit": limit,
        "matches": matches,
    }


def dump_record(record: dict[str, Any]) -> str:
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


def write_matches_atomic(path: Path, payload: dict[str, Any]) -> None:
    """Write match results JSON atomically using a temporary file + replace."""

    path.parent.mkdir(parents=True, exist_ok=True)
    _atomic_write_json(path, payload)


def _atomic_write_json(path: Path, payload: dict[str, Any]) -> None:
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        delete=False,
        prefix=f"{path.name}.",
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            json.dump(payload, tmp, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
        except Exception:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise

    try:
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
