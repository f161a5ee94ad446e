"""Loading helpers for settings files and target lists."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..errors import ConfigShapeError
from .models import ProbeSettings

CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")


def _read_file(path: Path) -> dict:
    if path.suffix not in CONFIG_EXTENSIONS:
        raise ConfigShapeError(f"Unsupported settings format: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigShapeError(f"Settings file cannot be read: {path}: {exc}") from exc
    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigShapeError(f"Settings file is not valid {path.suffix[1:]}: {path}") from exc
    if not isinstance(data, dict):
        raise ConfigShapeError(f"Settings file must contain a mapping: {path}")
    return data


def build_settings(payload: dict[str, Any]) -> ProbeSettings:
    try:
        return ProbeSettings.model_validate(payload)
    except ValidationError as exc:
        raise ConfigShapeError(str(exc)) from exc


def load_settings(path: Path) -> ProbeSettings:
    return build_settings(_read_file(path))


def merge_overrides(settings: ProbeSettings, **overrides: Any) -> ProbeSettings:
    """Return a copy of ``settings`` with every non-None override applied."""

    payload = settings.model_dump()
    for key, value in overrides.items():
        if value is None:
            continue
        if key == "headers":
            # repeated --header flags extend the file's headers
            payload["headers"] = list(payload.get("headers") or []) + list(value)
        else:
            payload[key] = value
    return build_settings(payload)


def load_targets(path: Path) -> list[str]:
    """Read a newline-delimited target list, skipping blanks and comments."""

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise ConfigShapeError(f"Target list cannot be read: {path}: {exc}") from exc
    targets: list[str] = []
    for line in lines:
        entry = line.strip()
        if entry and not entry.startswith("#"):
            targets.append(entry)
    return targets


def resolve_targets(target: str | None, target_list: Path | None) -> list[str]:
    if target and target_list:
        raise ConfigShapeError("Use either a single target or a target list, not both")
    if target:
        return [target.strip()]
    if target_list:
        return load_targets(target_list)
    raise ConfigShapeError("Provide a single target or a target list")


__all__ = [
    "CONFIG_EXTENSIONS",
    "build_settings",
    "load_settings",
    "load_targets",
    "merge_overrides",
    "resolve_targets",
]
