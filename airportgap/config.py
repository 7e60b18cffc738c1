"""
Airport Gap suite — Configuration.

Defines environment-specific configuration classes for the API test
suite.  Each class captures where the Airport Gap service lives, which
credential to present on protected endpoints, and how long a single
request may take.  The ``get_config`` factory selects the right class
based on the ``AIRPORTGAP_ENV`` environment variable (or an explicit key).

No credential literals live in this module; tokens and account details
are only ever read from the environment.
"""

from __future__ import annotations

import os


def _optional_env(name: str) -> str | None:
    """Return the environment value for *name*, treating blanks as unset."""
    value = os.environ.get(name, "").strip()
    return value or None


class Config:
    """
    Base (shared) configuration for the suite.

    All environment-specific classes inherit from ``Config`` so that
    common defaults only need to be stated once.
    """

    # Root of the JSON API, including the ``/api`` base path.
    BASE_URL: str = os.environ.get("AIRPORTGAP_BASE_URL", "https://airportgap.com/api")

    # Bearer token presented on the favorites endpoints.
    API_TOKEN: str | None = _optional_env("AIRPORTGAP_TOKEN")

    # Account used by the token-issuing step.
    ACCOUNT_EMAIL: str | None = _optional_env("AIRPORTGAP_EMAIL")
    ACCOUNT_PASSWORD: str | None = _optional_env("AIRPORTGAP_PASSWORD")

    # Seconds to wait for one round trip before the step fails.
    REQUEST_TIMEOUT: float = float(os.environ.get("AIRPORTGAP_TIMEOUT", "30"))

    # Upper bound the service applies to one page of airports.
    MAX_PAGE_SIZE: int = 30


class DevelopmentConfig(Config):
    """Local runs against the public service with environment overrides."""


class TestingConfig(Config):
    """
    Offline test-suite overrides.

    Points the base URL at a non-routable host so that unit tests never
    accidentally hit the real service, and drops any credential that
    happens to be exported in the shell.
    """

    BASE_URL: str = os.environ.get("TEST_AIRPORTGAP_BASE_URL", "http://airportgap.test/api")
    API_TOKEN: str | None = "test-token"
    ACCOUNT_EMAIL: str | None = "traveller@example.com"
    ACCOUNT_PASSWORD: str | None = "not-a-real-password"
    REQUEST_TIMEOUT: float = 1.0


class LiveConfig(Config):
    """Runs against the public service, e.g. from CI."""


# Lookup table mapping environment name strings to their config classes.
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "live": LiveConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Return the configuration class for the given environment.

    Args:
        env: One of ``"development"``, ``"testing"``, or ``"live"``.
            When *None*, the ``AIRPORTGAP_ENV`` environment variable is
            consulted, falling back to ``"development"`` if unset.

    Returns:
        The ``Config`` subclass matching the requested environment,
        or ``DevelopmentConfig`` if the key is unrecognised.
    """
    if env is None:
        env = os.environ.get("AIRPORTGAP_ENV", "development")
    return config.get(env, config["default"])
