"""Cadence Productivity MCP Server — application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging
from typing import Callable

from fastmcp import FastMCP

from cadence.core.config.settings import Settings, get_settings
from cadence.domains.productivity.connectors import MetricsProvider
from cadence.domains.productivity.connectors.providers import MockMetricsProvider
from cadence.domains.productivity.domain_logic.metrics_models import (
    DEFAULT_WEIGHTS,
    ScoringWeights,
)
from cadence.domains.productivity.domain_logic.weights_loader import load_scoring_weights
from cadence.domains.productivity.prompts.productivity_prompts import (
    register_productivity_prompts,
)
from cadence.domains.productivity.tools.productivity_tools import (
    register_productivity_tools,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "Cadence Productivity"
SERVER_VERSION = "0.1.0"


def resolve_scoring_weights(
    settings: Settings, override: ScoringWeights | None = None
) -> tuple[ScoringWeights, str]:
    """Pick the scoring weights and a label for them: override > YAML profile > defaults.

    Raises:
        WeightsConfigError: if the configured YAML profile cannot be used.
    """
    if override is not None:
        return override, "override"
    if settings.cadence_scoring_weights_path:
        path = settings.cadence_scoring_weights_path
        return load_scoring_weights(path), path
    return DEFAULT_WEIGHTS, "default"


def create_app(
    *,
    metrics_provider_override: MetricsProvider | None = None,
    weights_override: ScoringWeights | None = None,
    weights_profile: str | None = None,
    today: Callable[[], str] | None = None,
) -> FastMCP:
    """Create and configure the Cadence MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Resolves the scoring weights (override > YAML profile > defaults)
    3. Initializes the metrics provider (mock unless overridden)
    4. Registers all tools and prompts
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Daily productivity scoring and weekly pattern analysis. "
            "Scores a day's coding, exercise, calendar, sleep and step data "
            "on a 0-100 scale and reports consistency, trend and exercise "
            "impact across a week. All scoring is deterministic."
        ),
    )

    # --- Scoring weights ---
    weights, resolved_profile = resolve_scoring_weights(settings, weights_override)
    weights_profile = weights_profile or resolved_profile
    logger.info("Scoring weights profile: %s", weights_profile)

    # --- Metrics provider ---
    if metrics_provider_override is not None:
        metrics_provider = metrics_provider_override
    else:
        metrics_provider = MockMetricsProvider()
        logger.info("Using mock metrics provider")

    # --- Register tools ---
    @server.tool
    def server_status() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "data_source": metrics_provider.data_source,
            "weights_profile": weights_profile,
            "week_length": settings.cadence_week_length,
        }

    register_productivity_tools(
        server,
        metrics_provider,
        weights,
        week_length=settings.cadence_week_length,
        today=today,
    )
    logger.info("Productivity tools registered")

    # --- Register prompts ---
    register_productivity_prompts(server)

    return server


# Module-level instance for FastMCP discovery ("...app.py:mcp").
# Lazy: only created when this attribute is accessed (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
