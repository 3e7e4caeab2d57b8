"""Road policy loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from roadtable.common.errors import ConfigError
from roadtable.common.fs import read_yaml
from roadtable.common.policy import DEFAULT_POLICY, ClassificationPolicy
from roadtable.common.schema import validate_policy_config


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.is_file():
        raise ConfigError(f"Policy config not found: {path}")
    base = read_yaml(path)
    if overlay_path is None:
        return base
    if not overlay_path.is_file():
        raise ConfigError(f"Policy overlay not found: {overlay_path}")
    overlay = read_yaml(overlay_path)
    return _deep_merge(base, overlay)


def load_policy(
    path: Path | None,
    *,
    allow_unknown: bool = False,
    overlay_path: Path | None = None,
) -> ClassificationPolicy:
    if path is None:
        return DEFAULT_POLICY

    try:
        cfg = _load_yaml_with_overlay(path, overlay_path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Unreadable policy config {path}: {exc}") from exc
    validated = validate_policy_config(cfg, allow_unknown=allow_unknown)
    return ClassificationPolicy(
        drivable_highways=frozenset(validated["drivable_highways"]),
        default_speeds=validated["default_speeds"],
        fallback_speed=validated["fallback_speed"],
    )
