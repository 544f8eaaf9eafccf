"""Configuration loading utilities for the MT940 CLI suite."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from . import paths
from .exceptions import ConfigurationError

OUTPUT_FORMATS = ("json", "csv")


@dataclass(frozen=True, slots=True)
class ExtractionSettings:
    """Statement reading and dialect selection."""

    supported_dialects: tuple[str, ...]
    encoding: str


@dataclass(frozen=True, slots=True)
class OutputSettings:
    """How extracted fields are rendered."""

    format: str  # "json" or "csv"
    include_structured: bool


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Top-level application configuration."""

    source_path: Path
    extraction: ExtractionSettings
    output: OutputSettings

    def with_output_format(self, output_format: str) -> AppConfig:
        """Return a copy with a different output format."""
        if output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(f"Unknown output format '{output_format}'.")
        return replace(self, output=replace(self.output, format=output_format))


def _default_config() -> dict[str, Any]:
    return {
        "extraction": {
            "supported_dialects": ["abnamro"],
            "encoding": "utf-8-sig",
        },
        "output": {
            "format": "json",
            "include_structured": False,
        },
    }


ENV_OVERRIDE_SPEC: dict[str, tuple[str, type]] = {
    "extraction.supported_dialects": ("MT940_EXTRACTION_SUPPORTED_DIALECTS", list),
    "extraction.encoding": ("MT940_EXTRACTION_ENCODING", str),
    "output.format": ("MT940_OUTPUT_FORMAT", str),
    "output.include_structured": ("MT940_OUTPUT_INCLUDE_STRUCTURED", bool),
}


def load_config(
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load configuration from defaults, YAML file, and env overrides."""
    env = dict(env or os.environ)
    resolved_config_path = _resolve_config_path(config_path, env)
    file_data = _load_yaml(resolved_config_path)
    merged: dict[str, Any] = _deep_merge(_default_config(), file_data)
    merged = _apply_env_overrides(merged, env)
    return _build_config(merged, resolved_config_path)


def _resolve_config_path(
    config_path: str | Path | None, env: Mapping[str, str]
) -> Path:
    if config_path:
        return paths.resolve_path(config_path)
    return paths.default_config_path(env=env)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
        if not isinstance(data, MutableMapping):
            raise ConfigurationError(f"Config file at {path} must define a mapping root object.")
        return dict(data)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(config: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    config_copy = _deep_merge(config, {})
    for dotted_key, (env_key, expected_type) in ENV_OVERRIDE_SPEC.items():
        if env_key not in env:
            continue
        raw_value = env[env_key]
        try:
            value = _coerce_env_value(raw_value, expected_type)
        except ValueError as exc:
            raise ConfigurationError(
                f"Environment override {env_key} has invalid value '{raw_value}': {exc}"
            ) from exc
        _assign_nested(config_copy, dotted_key.split("."), value)
    return config_copy


def _coerce_env_value(raw: str, expected_type: type) -> Any:
    cleaned = raw.strip()
    if expected_type is bool:
        lowered = cleaned.lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
        raise ValueError("expected boolean (true/false)")
    if expected_type is list:
        if not cleaned:
            return []
        return tuple(part.strip() for part in cleaned.split(",") if part.strip())
    return cleaned


def _assign_nested(target: MutableMapping[str, Any], keys: list[str], value: Any) -> None:
    current = target
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], MutableMapping):
            current[key] = {}
        current = current[key]  # type: ignore[assignment]
    current[keys[-1]] = value


def _build_config(data: Mapping[str, Any], source_path: Path) -> AppConfig:
    try:
        extraction_cfg = data["extraction"]
        extraction = ExtractionSettings(
            supported_dialects=_name_list(
                "extraction.supported_dialects", extraction_cfg["supported_dialects"]
            ),
            encoding=str(extraction_cfg["encoding"]),
        )
        output_cfg = data["output"]
        output = OutputSettings(
            format=str(output_cfg["format"]).lower(),
            include_structured=_flag("output.include_structured", output_cfg["include_structured"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid configuration structure: {exc}") from exc

    if output.format not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Invalid output format '{output.format}'. Expected one of: {', '.join(OUTPUT_FORMATS)}"
        )

    return AppConfig(source_path=source_path, extraction=extraction, output=output)


def _name_list(key: str, value: Any) -> tuple[str, ...]:
    # A bare string is read the same way as the comma-separated env override.
    if isinstance(value, str):
        value = _coerce_env_value(value, list)
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"{key} must be a list of names, got {value!r}.")
    return tuple(str(name).strip().lower() for name in value if str(name).strip())


def _flag(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return _coerce_env_value(value, bool)
        except ValueError as exc:
            raise ConfigurationError(f"{key} has invalid value '{value}': {exc}") from exc
    raise ConfigurationError(f"{key} must be true or false, got {value!r}.")
