from __future__ import annotations

from pathlib import Path

import pytest

from mt940_cli.shared import paths
from mt940_cli.shared.config import AppConfig, load_config
from mt940_cli.shared.exceptions import ConfigurationError


def test_load_config_defaults(tmp_path: Path) -> None:
    env = {paths.CONFIG_DIR_ENV: str(tmp_path / "config")}
    cfg = load_config(env=env)
    assert isinstance(cfg, AppConfig)
    assert cfg.source_path == tmp_path / "config" / paths.DEFAULT_CONFIG_FILE
    assert cfg.extraction.supported_dialects == ("abnamro",)
    assert cfg.extraction.encoding == "utf-8-sig"
    assert cfg.output.format == "json"
    assert cfg.output.include_structured is False


def test_load_config_from_yaml(tmp_path: Path) -> None:
    cfg_dir = tmp_path / "config"
    cfg_dir.mkdir()
    cfg_file = cfg_dir / "config.yaml"
    cfg_file.write_text(
        """
        extraction:
          supported_dialects: [AbnAmro, rabobank]
          encoding: latin-1
        output:
          format: CSV
        """,
        encoding="utf-8",
    )
    cfg = load_config(config_path=cfg_file, env={paths.CONFIG_DIR_ENV: str(cfg_dir)})
    assert cfg.extraction.supported_dialects == ("abnamro", "rabobank")
    assert cfg.extraction.encoding == "latin-1"
    assert cfg.output.format == "csv"
    assert cfg.output.include_structured is False


def test_load_config_env_overrides(tmp_path: Path) -> None:
    env = {
        paths.CONFIG_DIR_ENV: str(tmp_path / "config"),
        "MT940_EXTRACTION_SUPPORTED_DIALECTS": "abnamro, ing",
        "MT940_EXTRACTION_ENCODING": "cp1252",
        "MT940_OUTPUT_FORMAT": "csv",
        "MT940_OUTPUT_INCLUDE_STRUCTURED": "yes",
    }
    cfg = load_config(env=env)
    assert cfg.extraction.supported_dialects == ("abnamro", "ing")
    assert cfg.extraction.encoding == "cp1252"
    assert cfg.output.format == "csv"
    assert cfg.output.include_structured is True


def test_config_path_env_override(tmp_path: Path) -> None:
    cfg_file = tmp_path / "elsewhere.yaml"
    cfg_file.write_text("output:\n  include_structured: true\n", encoding="utf-8")
    cfg = load_config(env={paths.CONFIG_FILE_ENV: str(cfg_file)})
    assert cfg.source_path == cfg_file
    assert cfg.output.include_structured is True


def test_invalid_yaml_raises_configuration_error(tmp_path: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("- just a list", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(config_path=cfg_file)


def test_invalid_env_boolean_raises(tmp_path: Path) -> None:
    env = {
        paths.CONFIG_DIR_ENV: str(tmp_path),
        "MT940_OUTPUT_INCLUDE_STRUCTURED": "sometimes",
    }
    with pytest.raises(ConfigurationError) as exc:
        load_config(env=env)
    assert "MT940_OUTPUT_INCLUDE_STRUCTURED" in str(exc.value)


def test_unknown_output_format_rejected(tmp_path: Path) -> None:
    env = {paths.CONFIG_DIR_ENV: str(tmp_path), "MT940_OUTPUT_FORMAT": "xml"}
    with pytest.raises(ConfigurationError):
        load_config(env=env)


def test_with_output_format(tmp_path: Path) -> None:
    cfg = load_config(env={paths.CONFIG_DIR_ENV: str(tmp_path)})
    assert cfg.with_output_format("csv").output.format == "csv"
    with pytest.raises(ConfigurationError):
        cfg.with_output_format("xml")


def test_yaml_scalars_are_read_like_env_values(tmp_path: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(
        """
        extraction:
          supported_dialects: abnamro
        output:
          include_structured: 'false'
        """,
        encoding="utf-8",
    )
    cfg = load_config(config_path=cfg_file, env={paths.CONFIG_DIR_ENV: str(tmp_path)})
    assert cfg.extraction.supported_dialects == ("abnamro",)
    assert cfg.output.include_structured is False


@pytest.mark.parametrize(
    "body, key",
    [
        ("extraction:\n  supported_dialects: 5\n", "extraction.supported_dialects"),
        ("extraction:\n  supported_dialects: {abnamro: true}\n", "extraction.supported_dialects"),
        ("output:\n  include_structured: 3\n", "output.include_structured"),
        ("output:\n  include_structured: sometimes\n", "output.include_structured"),
    ],
)
def test_invalid_yaml_values_raise(tmp_path: Path, body: str, key: str) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigurationError) as exc:
        load_config(config_path=cfg_file, env={paths.CONFIG_DIR_ENV: str(tmp_path)})
    assert key in str(exc.value)
