"""Minimal strict schema for the YAML road policy."""

from __future__ import annotations

from roadtable.common.errors import ConfigError

POLICY_KEYS = {"drivable_highways", "default_speeds", "fallback_speed"}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _speed_text(value: object, ctx: str) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ConfigError(f"{ctx} must be a string or integer speed")
    text = str(value).strip()
    if not text:
        raise ConfigError(f"{ctx} must not be empty")
    return text


def validate_policy_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    if not isinstance(cfg, dict):
        raise ConfigError("road policy must be a mapping")
    _assert_required_keys(cfg, POLICY_KEYS, "road policy")
    _assert_no_unknown_keys(cfg, POLICY_KEYS, "road policy", allow_unknown)

    highways = cfg["drivable_highways"]
    if not isinstance(highways, list) or not highways:
        raise ConfigError("drivable_highways must be a non-empty list")
    for idx, tag in enumerate(highways):
        if not isinstance(tag, str) or not tag:
            raise ConfigError(f"drivable_highways[{idx}] must be a non-empty string")

    speeds = cfg["default_speeds"]
    if not isinstance(speeds, dict):
        raise ConfigError("default_speeds must be a mapping")

    return {
        "drivable_highways": list(highways),
        "default_speeds": {str(tag): _speed_text(value, f"default_speeds.{tag}") for tag, value in speeds.items()},
        "fallback_speed": _speed_text(cfg["fallback_speed"], "fallback_speed"),
    }
