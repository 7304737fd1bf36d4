from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomllib

from .templates.directives import DEFAULT_MAX_PASSES


CONFIG_RELPATH = Path(".docsync") / "docsync.toml"
DEFAULT_CUSTOM_DIR = Path(".docsync") / "templates"


@dataclass(frozen=True)
class DocsyncFileConfig:
    repo_root: Path
    path: Path
    max_passes: int = DEFAULT_MAX_PASSES
    custom_dir: Path | None = None
    version: str = "1.0.0"
    source: str = "docsync"
    error: str | None = None


class ConfigValidationError(ValueError):
    pass


def _as_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigValidationError(f"{field} must be a non-empty string")
    return value.strip()


def _as_table(value: object, *, field: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigValidationError(f"[{field}] must be a table")
    return value


def _parse_max_passes(value: object) -> int:
    if value is None:
        return DEFAULT_MAX_PASSES
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigValidationError("[templates].max_passes must be an integer")
    if value < 1:
        raise ConfigValidationError("[templates].max_passes must be >= 1")
    return value


def _format_path(path: Path, repo_root: Path) -> str:
    try:
        return path.relative_to(repo_root).as_posix()
    except ValueError:
        return str(path)


def load_config(repo_root: Path) -> DocsyncFileConfig:
    path = repo_root / CONFIG_RELPATH
    default_dir = repo_root / DEFAULT_CUSTOM_DIR
    if not path.is_file():
        return DocsyncFileConfig(repo_root=repo_root, path=path, custom_dir=default_dir)

    try:
        raw = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        return DocsyncFileConfig(
            repo_root=repo_root,
            path=path,
            error=f"invalid TOML in {_format_path(path, repo_root)}: {exc}",
        )

    try:
        templates = _as_table(raw.get("templates"), field="templates")
        metadata = _as_table(raw.get("metadata"), field="metadata")
        max_passes = _parse_max_passes(templates.get("max_passes"))
        custom_dir_raw = _as_str(templates.get("custom_dir"), field="[templates].custom_dir")
        version = _as_str(metadata.get("version"), field="[metadata].version") or "1.0.0"
        source = _as_str(metadata.get("source"), field="[metadata].source") or "docsync"
    except ConfigValidationError as exc:
        return DocsyncFileConfig(
            repo_root=repo_root,
            path=path,
            error=f"{_format_path(path, repo_root)}: {exc}",
        )

    custom_dir = (repo_root / custom_dir_raw) if custom_dir_raw else default_dir
    return DocsyncFileConfig(
        repo_root=repo_root,
        path=path,
        max_passes=max_passes,
        custom_dir=custom_dir,
        version=version,
        source=source,
    )
