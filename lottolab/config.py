"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # None means OS entropy
    RANDOM_SEED: int | None = _env_int("RANDOM_SEED", None)

    # Strategy generation
    MAX_WHEEL_COMBINATIONS: int = _env_int("MAX_WHEEL_COMBINATIONS", 5000)
    MIN_RISK_CANDIDATES: int = _env_int("MIN_RISK_CANDIDATES", 32)
    GUARANTEE_ENUMERATION_LIMIT: int = _env_int("GUARANTEE_ENUMERATION_LIMIT", 100_000)

    # Simulation
    SIMULATION_BATCH_SIZE: int = _env_int("SIMULATION_BATCH_SIZE", 500)
    SIMULATION_WORKERS: int = _env_int("SIMULATION_WORKERS", 1)
    MAX_SIMULATION_ROUNDS: int = _env_int("MAX_SIMULATION_ROUNDS", 1_000_000)

    # Analyzer thresholds
    HIGH_COST_WARNING: float = _env_float("HIGH_COST_WARNING", 10_000.0)
    LARGE_TICKET_COUNT_WARNING: int = _env_int("LARGE_TICKET_COUNT_WARNING", 100)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    return DevelopmentConfig
