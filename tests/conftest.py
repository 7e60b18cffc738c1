"""
Shared pytest fixtures for the Airport Gap test suite.

Offline suites never touch the network: the client is wired to a
``FakeSession`` that replays queued responses and records every
request.  Fixtures follow the Arrange-Act-Assert (AAA) pattern and give
each test a fresh session so that queued responses never leak.
"""

from __future__ import annotations

import os

import pytest
from faker import Faker

# Select offline configuration before importing the package
os.environ["AIRPORTGAP_ENV"] = "testing"

from airportgap import create_client
from airportgap.client import AirportGapClient
from airportgap.scenario import Account, ScenarioContext
from shared.test_helpers import DEFAULT_TEST_TOKEN, FakeSession

fake = Faker()


# -----------------------------------------------------------------------------
# Client Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def fake_session() -> FakeSession:
    """Provide an empty fake HTTP session; tests queue responses on it."""
    return FakeSession()


@pytest.fixture
def client(fake_session) -> AirportGapClient:
    """
    Provide a client bound to the fake session.

    The client carries the testing token so authenticated calls send a
    bearer header.
    """
    return create_client("testing", session=fake_session, token=DEFAULT_TEST_TOKEN)


@pytest.fixture
def api_base_url() -> str:
    """Base URL used by the testing configuration."""
    return "http://airportgap.test/api"


# -----------------------------------------------------------------------------
# Scenario Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def account() -> Account:
    """Account credentials for the token step."""
    return Account(email=fake.email(), password=fake.password(length=12))


@pytest.fixture
def context(account) -> ScenarioContext:
    """A scenario context holding a token and an account."""
    return ScenarioContext(token=DEFAULT_TEST_TOKEN, account=account)


@pytest.fixture
def favorite_note() -> str:
    """A random, non-empty favorite note."""
    return fake.sentence(nb_words=3)
