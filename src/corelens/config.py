"""Engine configuration — defaults plus CORELENS_* environment overrides.

Usage:
    from corelens.config import load_config

    config = load_config()
    config.redundancy.similarity_threshold  # 0.85 unless overridden

Every constant used by the scoring and savings formulas lives here so that
callers can tune them without touching the algorithms.
"""

import os
from dataclasses import dataclass, field
from typing import Callable, Optional

from corelens.errors import ConfigError


@dataclass(frozen=True)
class SimilarityBands:
    """Canonical similarity bands shared by every aggregation."""

    very_high: float = 0.95
    high: float = 0.85
    medium: float = 0.75

    def band_for(self, similarity: float) -> Optional[str]:
        """Return 'very_high', 'high', 'medium' or None for a similarity."""
        if similarity >= self.very_high:
            return "very_high"
        if similarity >= self.high:
            return "high"
        if similarity >= self.medium:
            return "medium"
        return None


@dataclass(frozen=True)
class RedundancyConfig:
    similarity_threshold: float = 0.85
    batch_size: int = 10
    batch_pause_seconds: float = 1.0
    max_embedding_chars: int = 8000
    snippet_chars: int = 500
    provider_timeout_seconds: Optional[float] = 60.0
    # Share of the smaller object's LOC that consolidation removes
    savings_ratio: float = 0.6
    high_effort_loc: int = 500
    medium_effort_loc: int = 200


@dataclass(frozen=True)
class SavingsConfig:
    hourly_rate: float = 75.0
    maintenance_hours_per_loc: float = 0.5
    effort_hours: dict = field(
        default_factory=lambda: {"Low": 2, "Medium": 4, "High": 8}
    )
    quick_win_min_loc: int = 50
    quick_win_limit: int = 5
    plan_size: int = 10
    plan_high_priority_loc: int = 1000
    plan_medium_priority_loc: int = 500
    # Share of a member's LOC counted as removable when a cluster is merged
    cluster_savings_ratio: float = 0.4


@dataclass(frozen=True)
class FitToStandardConfig:
    min_confidence: float = 0.5
    max_recommendations: Optional[int] = None
    loc_reduction_factor: float = 0.7
    maintenance_reduction_pct: float = 60.0
    complexity_reduction_pct: float = 50.0
    high_effort_loc: int = 150
    medium_effort_loc: int = 50


@dataclass(frozen=True)
class EngineConfig:
    redundancy: RedundancyConfig = field(default_factory=RedundancyConfig)
    savings: SavingsConfig = field(default_factory=SavingsConfig)
    fit_to_standard: FitToStandardConfig = field(default_factory=FitToStandardConfig)
    bands: SimilarityBands = field(default_factory=SimilarityBands)


# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------

def _env_value(
    env: dict,
    name: str,
    cast: Callable,
    default,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigError(f"{name}={raw!r} is not a valid {cast.__name__}") from e
    if minimum is not None and value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise ConfigError(f"{name} must be <= {maximum}, got {value}")
    return value


def load_config(env: Optional[dict] = None) -> EngineConfig:
    """
    Build an EngineConfig from defaults and CORELENS_* environment variables.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        A frozen EngineConfig

    Raises:
        ConfigError: If a variable is set but cannot be parsed or is out of range
    """
    env = dict(os.environ) if env is None else env
    red = RedundancyConfig()
    sav = SavingsConfig()

    redundancy = RedundancyConfig(
        similarity_threshold=_env_value(
            env, "CORELENS_SIMILARITY_THRESHOLD", float,
            red.similarity_threshold, 0.0, 1.0,
        ),
        batch_size=_env_value(env, "CORELENS_BATCH_SIZE", int, red.batch_size, 1),
        batch_pause_seconds=_env_value(
            env, "CORELENS_BATCH_PAUSE", float, red.batch_pause_seconds, 0.0,
        ),
        provider_timeout_seconds=_env_value(
            env, "CORELENS_PROVIDER_TIMEOUT", float,
            red.provider_timeout_seconds, 0.0,
        ),
    )
    savings = SavingsConfig(
        hourly_rate=_env_value(env, "CORELENS_HOURLY_RATE", float, sav.hourly_rate, 0.0),
        maintenance_hours_per_loc=_env_value(
            env, "CORELENS_MAINTENANCE_HOURS_PER_LOC", float,
            sav.maintenance_hours_per_loc, 0.0,
        ),
    )
    return EngineConfig(redundancy=redundancy, savings=savings)
