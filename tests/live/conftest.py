"""
Live-suite fixtures for the public Airport Gap service.

Provides session-scoped clients pointed at the real service.  URL
resolution and gating are delegated to
:func:`shared.live_service.live_service_url`: the whole suite is skipped
unless ``AIRPORTGAP_LIVE=1`` is set and the service answers.  Steps that
need a credential are skipped individually when ``AIRPORTGAP_TOKEN`` (or
the account variables for the token step) are not exported.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest

from airportgap import create_client
from airportgap.client import AirportGapClient
from airportgap.config import get_config
from airportgap.scenario import Account, ScenarioContext
from shared.live_service import live_service_url


@pytest.fixture(scope="session")
def live_config():
    """Configuration class for live runs."""
    return get_config("live")


@pytest.fixture(scope="session")
def live_base_url(live_config) -> Generator[str, None, None]:
    """Yield the live API root, or skip the suite."""
    yield from live_service_url(live_config.BASE_URL)


@pytest.fixture(scope="session")
def live_client(live_base_url, live_config) -> Generator[AirportGapClient, None, None]:
    """Session-wide client for the public service."""
    with create_client("live", base_url=live_base_url) as client:
        yield client


@pytest.fixture
def live_context(live_config) -> ScenarioContext:
    """A fresh scenario context carrying the configured token and account."""
    account = None
    if live_config.ACCOUNT_EMAIL and live_config.ACCOUNT_PASSWORD:
        account = Account(live_config.ACCOUNT_EMAIL, live_config.ACCOUNT_PASSWORD)
    return ScenarioContext(
        token=live_config.API_TOKEN,
        account=account,
        max_page_size=live_config.MAX_PAGE_SIZE,
    )


@pytest.fixture
def token_context(live_context) -> ScenarioContext:
    """The live context, skipping the test when no token is configured."""
    if not live_context.token:
        pytest.skip("set AIRPORTGAP_TOKEN to run authenticated live tests")
    return live_context


@pytest.fixture
def account_context(live_context) -> ScenarioContext:
    """The live context, skipping the test when no account is configured."""
    if live_context.account is None:
        pytest.skip("set AIRPORTGAP_EMAIL and AIRPORTGAP_PASSWORD to run the token test")
    return live_context
