"""Load template customizations and variable files from disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .templates.models import TemplateCustomization


def _split_frontmatter(text: str) -> tuple[dict, str]:
    """Split optional YAML frontmatter from markdown body."""
    if not text.startswith("---"):
        return {}, text
    parts = text.split("---", 2)
    if len(parts) < 3:
        return {}, text
    try:
        meta = yaml.safe_load(parts[1]) or {}
    except yaml.YAMLError:
        return {}, text
    if not isinstance(meta, dict):
        return {}, text
    return meta, parts[2].lstrip("\n")


def read_customization(path: Path) -> TemplateCustomization:
    meta, body = _split_frontmatter(path.read_text(encoding="utf-8"))
    raw_name = meta.pop("name", None)
    name = raw_name.strip() if isinstance(raw_name, str) and raw_name.strip() else path.stem
    overrides = meta.pop("variables", None)
    if not isinstance(overrides, dict):
        overrides = {}
    return TemplateCustomization(
        name=name,
        body=body,
        variable_overrides=overrides,
        metadata=meta,
    )


def load_customizations(directory: Path) -> list[TemplateCustomization]:
    """Read every ``*.md`` file in ``directory``, sorted by file name."""
    if not directory.is_dir():
        return []
    return [read_customization(path) for path in sorted(directory.glob("*.md"))]


def load_variables(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: variables must be a mapping")
    return data
