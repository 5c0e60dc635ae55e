from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import tomllib
from typing import Any

from .version import DEFAULT_MIN_HOST_VERSION, parse_version


DEFAULT_PLACEHOLDER_TAG = "legtools.placeholder"


@dataclass(frozen=True)
class LegtoolsConfig:
    placeholder_tag: str = DEFAULT_PLACEHOLDER_TAG
    min_host_version: str = DEFAULT_MIN_HOST_VERSION
    warn_on_full_removal: bool = True
    strict_append: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.placeholder_tag, str) or not self.placeholder_tag.strip():
            raise ValueError("placeholder_tag must be a non-empty string")
        parse_version(self.min_host_version)


def load_config(path: str | Path) -> LegtoolsConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"legtools config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    return config_from_mapping(raw)


def config_from_mapping(raw: dict[str, Any]) -> LegtoolsConfig:
    table = raw.get("legtools", raw)
    if not isinstance(table, dict):
        raise ValueError("`legtools` must be a table")
    unknown = sorted(set(table) - _FIELDS)
    if unknown:
        raise ValueError(f"unknown legtools config field(s): {', '.join(unknown)}")
    defaults = LegtoolsConfig()
    return LegtoolsConfig(
        placeholder_tag=_coerce_str(table.get("placeholder_tag", defaults.placeholder_tag), "placeholder_tag"),
        min_host_version=_coerce_str(table.get("min_host_version", defaults.min_host_version), "min_host_version"),
        warn_on_full_removal=_coerce_bool(
            table.get("warn_on_full_removal", defaults.warn_on_full_removal), "warn_on_full_removal"
        ),
        strict_append=_coerce_bool(table.get("strict_append", defaults.strict_append), "strict_append"),
    )


_FIELDS = {"placeholder_tag", "min_host_version", "warn_on_full_removal", "strict_append"}


def _coerce_str(value: object, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field} must be a non-empty string")
    return value.strip()


def _coerce_bool(value: object, field: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{field} must be a boolean")
    return value
