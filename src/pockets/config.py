"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    """Read a numeric environment variable, rejecting garbage early."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be numeric, got {value!r}") from exc


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {parsed}")
    return parsed


@dataclass(frozen=True, slots=True)
class AdvisorConfig:
    """Thresholds used by the restructuring heuristics.

    These are rule-of-thumb placeholders, not validated financial guidance.
    """

    consolidation_rate: float = 10.0
    consolidation_balance_limit: float = 20_000.0
    high_interest_threshold: float = 10.0
    dti_limit: float = 43.0


DEFAULT_ADVISOR = AdvisorConfig()
MAX_SIMULATION_MONTHS = 1000


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Pockets"
    ENV_PREFIX = "POCKETS_"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("POCKETS_DEV_MODE", default=True)
        self.MAX_SIMULATION_MONTHS = _env_int(
            "POCKETS_MAX_SIMULATION_MONTHS", MAX_SIMULATION_MONTHS
        )
        self.CONSOLIDATION_RATE = _env_float(
            "POCKETS_CONSOLIDATION_RATE", DEFAULT_ADVISOR.consolidation_rate
        )
        self.CONSOLIDATION_BALANCE_LIMIT = _env_float(
            "POCKETS_CONSOLIDATION_BALANCE_LIMIT", DEFAULT_ADVISOR.consolidation_balance_limit
        )
        self.HIGH_INTEREST_THRESHOLD = _env_float(
            "POCKETS_HIGH_INTEREST_THRESHOLD", DEFAULT_ADVISOR.high_interest_threshold
        )
        self.DTI_LIMIT = _env_float("POCKETS_DTI_LIMIT", DEFAULT_ADVISOR.dti_limit)

    def _resolve_data_dir(self) -> Path:
        """Return the directory where log files live."""

        data_root = os.getenv("POCKETS_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            fallback_path = Path.home() / ".local" / "share" / self.APP_NAME
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def advisor(self) -> AdvisorConfig:
        """Bundle the heuristic thresholds for the advice service."""

        return AdvisorConfig(
            consolidation_rate=self.CONSOLIDATION_RATE,
            consolidation_balance_limit=self.CONSOLIDATION_BALANCE_LIMIT,
            high_interest_threshold=self.HIGH_INTEREST_THRESHOLD,
            dti_limit=self.DTI_LIMIT,
        )
