from __future__ import annotations

import logging
from pathlib import Path

import jax.numpy as jnp
import pytest

from fxsmile.config import get_config, get_default_config, init_environment
from fxsmile.schemas import (
    AppConfig,
    ConfigValidationError,
    SensitivitySettings,
    collect_and_validate,
    load_config,
)


def test_default_config_sections() -> None:
    cfg = get_default_config()

    assert cfg.jax.enable_x64 is True
    assert cfg.sensitivity.bump_size == pytest.approx(1e-7)
    assert cfg.numerics.time_tolerance == pytest.approx(1e-12)


def test_get_config_applies_nested_overrides() -> None:
    cfg = get_config({"sensitivity": {"bump_size": 1e-6}, "logging": {"level": "DEBUG"}})

    assert cfg.sensitivity.bump_size == pytest.approx(1e-6)
    assert cfg.logging.level == "DEBUG"
    # untouched siblings survive the merge
    assert cfg.logging.force is True
    assert cfg.numerics.time_tolerance == pytest.approx(1e-12)


def test_init_environment_configures_logging_and_precision() -> None:
    cfg = init_environment({"logging": {"level": "DEBUG"}})

    assert logging.getLogger().getEffectiveLevel() == logging.DEBUG
    assert jnp.asarray(1.0).dtype == jnp.float64
    assert cfg.sensitivity.bump_size == pytest.approx(1e-7)

    init_environment(get_default_config())
    assert logging.getLogger().getEffectiveLevel() == logging.INFO


def test_sensitivity_settings_from_config_tree() -> None:
    cfg = get_config({"sensitivity": {"bump_size": 2e-7}})

    settings = SensitivitySettings.from_config(cfg.sensitivity)
    assert settings.bump_size == pytest.approx(2e-7)


def test_sensitivity_settings_rejects_non_positive_bump() -> None:
    with pytest.raises(ValueError):
        SensitivitySettings(bump_size=0.0)


def test_load_config_produces_valid_app_config(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
logging:
  level: debug
sensitivity:
  bump_size: 1.0e-6
""".strip()
    )

    config = load_config(config_path)
    assert isinstance(config, AppConfig)
    assert config.logging.level == "DEBUG"
    assert config.sensitivity.bump_size == pytest.approx(1e-6)
    assert config.numerics.time_tolerance == pytest.approx(1e-12)

    cfg = get_config(config.to_overrides())
    assert cfg.sensitivity.bump_size == pytest.approx(1e-6)


def test_collect_and_validate_detects_invalid(tmp_path: Path) -> None:
    good = tmp_path / "good.yaml"
    bad = tmp_path / "bad.yaml"
    good.write_text(
        """
sensitivity:
  bump_size: 1.0e-7
""".strip()
    )
    bad.write_text(
        """
sensitivity:
  bump_size: -1.0
  unknown: 3
""".strip()
    )

    with pytest.raises(ConfigValidationError) as exc:
        collect_and_validate([tmp_path])

    assert "bad.yaml" in str(exc.value)
