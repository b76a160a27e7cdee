"""Pattern spec loading utilities."""

from __future__ import annotations

from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from typedregex.config.models import PatternSpec


def load_pattern_spec(path: Path) -> PatternSpec:
    """Load and validate a pattern spec from YAML."""

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValueError(f"Pattern spec file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in pattern spec file: {path}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Pattern spec file must contain a mapping: {path}")

    try:
        return PatternSpec.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid pattern spec: {path}") from exc
