"""Scoring weight profiles — reads ScoringWeights overrides from YAML."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from cadence.domains.productivity.domain_logic.metrics_models import (
    DEFAULT_WEIGHTS,
    ScoringWeights,
)

logger = logging.getLogger(__name__)

# Divisors in the scoring formulas; zero would make the score undefined
RATE_FIELDS = {
    "coding_minutes_per_point",
    "exercise_minutes_per_point",
    "focus_minutes_per_point",
    "steps_per_point",
}


class WeightsConfigError(ValueError):
    """Raised when a scoring weight profile cannot be used."""


def weights_from_mapping(data: dict[str, Any], base: ScoringWeights = DEFAULT_WEIGHTS) -> ScoringWeights:
    """Overlay a mapping of field overrides onto ``base``."""
    known = set(ScoringWeights.field_names())
    unknown = sorted(set(data) - known)
    if unknown:
        raise WeightsConfigError(f"Unknown scoring weight(s): {', '.join(unknown)}")

    overrides: dict[str, float] = {}
    for name, value in data.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise WeightsConfigError(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise WeightsConfigError(f"{name} must be finite, got {value}")
        if value < 0:
            raise WeightsConfigError(f"{name} must be non-negative, got {value}")
        if name in RATE_FIELDS and value == 0:
            raise WeightsConfigError(f"{name} must be greater than zero")
        overrides[name] = value

    return replace(base, **overrides)


def load_scoring_weights(path: str | Path) -> ScoringWeights:
    """Parse a YAML weight profile. Omitted keys keep their default values."""
    path = Path(path).expanduser()
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise WeightsConfigError(f"Scoring weights file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise WeightsConfigError(f"Invalid YAML in scoring weights file {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise WeightsConfigError(
            f"Scoring weights file must contain a mapping, got {type(data).__name__}"
        )

    weights = weights_from_mapping(data)
    logger.info("Loaded scoring weights from %s (%d override(s))", path, len(data))
    return weights
