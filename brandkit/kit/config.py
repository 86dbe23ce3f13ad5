"""
Scoring configuration for the brand kit engine.

PR-3: Section weights + thresholds with environment overrides.

Defaults live in the static tables of brandkit.kit.scoring.criteria; this
module only layers environment overrides on top:
- BRANDKIT_WEIGHT_<SECTION_ID>: per-section weight (positive float)
- BRANDKIT_LOW_CONFIDENCE_THRESHOLD: inferred fields below this are weak (0..1)
- BRANDKIT_STRENGTH_THRESHOLD: dimension scores at or above this are strengths
- BRANDKIT_DEFAULT_PRIMARY_COLOR: fallback brand color for inferred components

Values are read once and cached. Call clear_config_cache() after changing
the environment (tests).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType

from brandkit.kit.presets import normalize_hex

logger = logging.getLogger(__name__)


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_LOW_CONFIDENCE_THRESHOLD = 0.7

DEFAULT_STRENGTH_THRESHOLD = 60.0

DEFAULT_PRIMARY_COLOR = "#3B82F6"

WEIGHT_ENV_PREFIX = "BRANDKIT_WEIGHT_"


# =============================================================================
# ENV PARSING
# =============================================================================


def _parse_float_env(key: str, default: float, *, minimum: float, maximum: float | None = None) -> float:
    """Parse an environment variable as a float, returning default if not set or out of range."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", key, value)
        return default
    if parsed < minimum or (maximum is not None and parsed > maximum):
        logger.warning("Ignoring out-of-range %s=%r", key, value)
        return default
    return parsed


@lru_cache(maxsize=1)
def _load_weight_overrides() -> Mapping[str, float]:
    """
    Collect BRANDKIT_WEIGHT_* overrides.

    Weights must be strictly positive; a zero weight would silently drop a
    section from the aggregate.
    """
    overrides: dict[str, float] = {}
    for key, raw in os.environ.items():
        if not key.startswith(WEIGHT_ENV_PREFIX):
            continue
        section_id = key[len(WEIGHT_ENV_PREFIX):].lower()
        try:
            weight = float(raw)
        except ValueError:
            logger.warning("Ignoring non-numeric %s=%r", key, raw)
            continue
        if weight <= 0:
            logger.warning("Ignoring non-positive %s=%r", key, raw)
            continue
        overrides[section_id] = weight
    return MappingProxyType(overrides)


def section_weight(section_id: str, default: float) -> float:
    """Weight for a section: env override if set, else the table default."""
    return _load_weight_overrides().get(section_id, default)


@lru_cache(maxsize=1)
def low_confidence_threshold() -> float:
    return _parse_float_env(
        "BRANDKIT_LOW_CONFIDENCE_THRESHOLD",
        DEFAULT_LOW_CONFIDENCE_THRESHOLD,
        minimum=0.0,
        maximum=1.0,
    )


@lru_cache(maxsize=1)
def strength_threshold() -> float:
    return _parse_float_env(
        "BRANDKIT_STRENGTH_THRESHOLD",
        DEFAULT_STRENGTH_THRESHOLD,
        minimum=0.0,
        maximum=100.0,
    )


@lru_cache(maxsize=1)
def default_primary_color() -> str:
    raw = os.environ.get("BRANDKIT_DEFAULT_PRIMARY_COLOR")
    if raw is None:
        return DEFAULT_PRIMARY_COLOR
    color = normalize_hex(raw)
    if color is None:
        logger.warning("Ignoring invalid BRANDKIT_DEFAULT_PRIMARY_COLOR=%r", raw)
        return DEFAULT_PRIMARY_COLOR
    return color


def clear_config_cache() -> None:
    """Clear cached config. Call this after changing environment variables in tests."""
    _load_weight_overrides.cache_clear()
    low_confidence_threshold.cache_clear()
    strength_threshold.cache_clear()
    default_primary_color.cache_clear()
