"""Cadence server entry point: ``python -m cadence.core.server.main`` or ``cadence-server``.

Configuration is checked before anything binds. The host must be loopback
unless insecure binding is allowed, the analysis window must cover at least
one day, and a configured scoring weights profile must load.
"""

from __future__ import annotations

import logging
from ipaddress import ip_address

from cadence.core.config.settings import Settings, get_settings
from cadence.core.server.app import SERVER_NAME, create_app, resolve_scoring_weights

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class StartupError(RuntimeError):
    """Raised when the configuration is unsafe or unusable for serving."""


def _is_loopback_host(host: str) -> bool:
    if host.lower() == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def check_startup_settings(settings: Settings) -> None:
    """Reject configurations the server must not start with.

    Raises:
        StartupError: public bind without opt-in, or an empty analysis window.
    """
    host = settings.cadence_host
    if not _is_loopback_host(host):
        if not settings.cadence_allow_insecure_bind:
            raise StartupError(
                f"Refusing to bind to non-loopback host {host!r}: Cadence has no auth layer. "
                "Set CADENCE_ALLOW_INSECURE_BIND=true to serve anyway."
            )
        logger.warning("Serving personal activity data on %s without authentication", host)

    if settings.cadence_week_length < 1:
        raise StartupError(
            f"CADENCE_WEEK_LENGTH must be at least 1 day, got {settings.cadence_week_length}"
        )


def run() -> None:
    """Validate configuration, load the weights profile, then serve Streamable HTTP.

    Raises:
        StartupError: see ``check_startup_settings``.
        WeightsConfigError: if CADENCE_SCORING_WEIGHTS_PATH names an unusable profile.
    """
    settings = get_settings()
    level = getattr(logging, settings.cadence_log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    check_startup_settings(settings)
    weights, profile = resolve_scoring_weights(settings)

    logger.info(
        "Starting %s on %s:%d (weights: %s, window: %d days)",
        SERVER_NAME,
        settings.cadence_host,
        settings.cadence_port,
        profile,
        settings.cadence_week_length,
    )
    server = create_app(weights_override=weights, weights_profile=profile)
    server.run(
        transport="streamable-http",
        host=settings.cadence_host,
        port=settings.cadence_port,
    )


if __name__ == "__main__":
    run()
