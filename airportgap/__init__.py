"""
Airport Gap API test suite.

Black-box checks against the public Airport Gap service: an HTTP client
for the consumed endpoints, transient data models, and a scenario runner
that executes the request/assertion steps in their declared order.
"""

from __future__ import annotations

import logging

from airportgap.client import AirportGapClient
from airportgap.config import get_config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_client(config_name: str | None = None, **overrides) -> AirportGapClient:
    """
    Construct a client from the selected configuration.

    Args:
        config_name: Optional environment key ("development", "testing",
            "live").  When *None*, ``AIRPORTGAP_ENV`` is consulted.
        **overrides: Keyword arguments forwarded to ``AirportGapClient``
            in place of the configured values (e.g. ``token=None`` or a
            fake ``session``).

    Returns:
        A client pointed at the configured base URL.
    """
    config_class = get_config(config_name)
    logger.info("Creating Airport Gap client with config: %s", config_class.__name__)

    options = {
        "base_url": config_class.BASE_URL,
        "token": config_class.API_TOKEN,
        "timeout": config_class.REQUEST_TIMEOUT,
    }
    options.update(overrides)
    return AirportGapClient(**options)
