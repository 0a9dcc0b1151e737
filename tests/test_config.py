"""Configuration loading from the environment."""

from __future__ import annotations

import pytest

from pockets.config import DEFAULT_ADVISOR, MAX_SIMULATION_MONTHS, AdvisorConfig, BaseConfig


def test_defaults(isolated_env):
    config = BaseConfig()

    assert config.DATA_DIR == isolated_env.resolve()
    assert config.DEV_MODE is False
    assert config.MAX_SIMULATION_MONTHS == MAX_SIMULATION_MONTHS == 1000
    assert config.advisor() == DEFAULT_ADVISOR


def test_default_advisor_thresholds():
    assert DEFAULT_ADVISOR == AdvisorConfig(
        consolidation_rate=10.0,
        consolidation_balance_limit=20_000.0,
        high_interest_threshold=10.0,
        dti_limit=43.0,
    )


def test_environment_overrides(isolated_env, monkeypatch):
    monkeypatch.setenv("POCKETS_MAX_SIMULATION_MONTHS", "360")
    monkeypatch.setenv("POCKETS_CONSOLIDATION_RATE", "7.5")
    monkeypatch.setenv("POCKETS_CONSOLIDATION_BALANCE_LIMIT", "35000")
    monkeypatch.setenv("POCKETS_HIGH_INTEREST_THRESHOLD", "12")
    monkeypatch.setenv("POCKETS_DTI_LIMIT", "40")

    config = BaseConfig()

    assert config.MAX_SIMULATION_MONTHS == 360
    assert config.advisor() == AdvisorConfig(
        consolidation_rate=7.5,
        consolidation_balance_limit=35_000.0,
        high_interest_threshold=12.0,
        dti_limit=40.0,
    )


def test_data_dir_is_created(tmp_path, monkeypatch):
    target = tmp_path / "nested" / "data"
    monkeypatch.setenv("POCKETS_DATA_DIR", str(target))

    config = BaseConfig()
    assert config.DATA_DIR == target.resolve()
    assert target.is_dir()


@pytest.mark.parametrize(
    "name,value",
    [
        ("POCKETS_CONSOLIDATION_RATE", "ten"),
        ("POCKETS_MAX_SIMULATION_MONTHS", "1.5"),
        ("POCKETS_MAX_SIMULATION_MONTHS", "0"),
    ],
)
def test_invalid_values_are_rejected(isolated_env, monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        BaseConfig()


@pytest.mark.parametrize("raw,expected", [("1", True), ("yes", True), ("off", False), ("0", False)])
def test_dev_mode_flag(isolated_env, monkeypatch, raw, expected):
    monkeypatch.setenv("POCKETS_DEV_MODE", raw)
    assert BaseConfig().DEV_MODE is expected


def test_package_exports():
    import pockets

    assert sorted(pockets.__all__) == [
        "AdvisorConfig",
        "BaseConfig",
        "Debt",
        "DebtType",
        "DebtWithPlan",
    ]
