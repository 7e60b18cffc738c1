"""
Scenario runner for the Airport Gap suite.

Each step sends one or more requests through ``AirportGapClient`` and
checks the response against the service contract.  Steps share a single
signature, ``step(client, context) -> context``: the only state that
flows between them (the bearer token and the favorite id discovered by
the edit step) travels in an explicit, immutable ``ScenarioContext``.

The favorites steps mutate remote state and depend on each other, so
they are declared as an ordered ``FAVORITES_SEQUENCE`` keyed by
``FavoritesPhase``.  Every other step is independent and lives in
``INDEPENDENT_STEPS``.

Failure taxonomy:
- contract mismatch -> ``ScenarioAssertionError`` naming the step and
  the expectation;
- transport failure -> ``requests.RequestException``, never caught here;
- service business errors (e.g. duplicate favorite) are the expected
  outcome of their step and are checked by error-body shape.
"""

from __future__ import annotations

import json
import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

import requests

from airportgap.client import AirportGapClient
from airportgap.models import (
    Distance,
    DistanceQuery,
    Favorite,
    FavoritesPhase,
    Page,
    ResourceType,
)

logger = logging.getLogger(__name__)

AIRPORT_CODE = "GKA"
DISTANCE_QUERY = DistanceQuery(origin="KIX", destination="NRT")
FAVORITE_AIRPORT = "KGA"
FAVORITE_NOTE = "Best airport."
DUPLICATE_FAVORITE_MESSAGE = "already in your favorites"


class ScenarioAssertionError(AssertionError):
    """A response diverged from the expected status or body."""

    def __init__(self, step: str, expectation: str, response: requests.Response | None = None):
        self.step = step
        self.expectation = expectation
        self.status_code = getattr(response, "status_code", None)
        message = f"[{step}] expected {expectation}"
        if response is not None:
            message += f"; got HTTP {response.status_code}: {_body_excerpt(response)}"
        super().__init__(message)


def _body_excerpt(response: requests.Response, limit: int = 300) -> str:
    text = response.text or "<empty body>"
    return text if len(text) <= limit else text[:limit] + "..."


@dataclass(frozen=True)
class Account:
    """Account credentials exchanged for a token by ``POST /tokens``."""

    email: str
    password: str


@dataclass(frozen=True)
class ScenarioContext:
    """
    Values threaded through the steps of one run.

    Attributes:
        token: Bearer token for protected endpoints, fixed for the run.
        account: Credentials for the token-issuing step, if available.
        favorite_id: Server-assigned id of the favorite the edit step
            read back from ``GET /favorites``; ``None`` until then.
        max_page_size: Most airports one page may hold.
    """

    token: str | None
    account: Account | None = None
    favorite_id: str | None = None
    max_page_size: int = 30

    def with_favorite(self, favorite_id: int | str) -> "ScenarioContext":
        """Return a copy carrying the discovered favorite id."""
        return replace(self, favorite_id=str(favorite_id))


StepFunc = Callable[[AirportGapClient, ScenarioContext], ScenarioContext]


@dataclass(frozen=True)
class Step:
    """
    A named scenario step.

    Attributes:
        name: Human-readable step name used in logs and results.
        run: The step function.
        requires_token: The step needs ``context.token``.
        requires_account: The step needs ``context.account``.
    """

    name: str
    run: StepFunc
    requires_token: bool = False
    requires_account: bool = False

    def missing_input(self, context: ScenarioContext) -> str | None:
        """Describe the context value this step lacks, if any."""
        if self.requires_token and not context.token:
            return "no bearer token configured"
        if self.requires_account and context.account is None:
            return "no account credentials configured"
        return None


class StepOutcome(str, Enum):
    """Outcome of one step in a scenario run."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class StepResult:
    """Recorded outcome of one step."""

    name: str
    outcome: StepOutcome
    detail: str | None = None

    @property
    def passed(self) -> bool:
        return self.outcome is StepOutcome.PASSED


# =============================================================================
# Assertion helpers
# =============================================================================


def expect_status(step: str, response: requests.Response, expected: int) -> None:
    """Raise ``ScenarioAssertionError`` unless *response* has *expected* status."""
    if response.status_code != expected:
        raise ScenarioAssertionError(step, f"HTTP {expected}", response)


def json_body(step: str, response: requests.Response) -> dict[str, Any]:
    """Return the response JSON object, failing the step if it is not one."""
    try:
        body = response.json()
    except ValueError as exc:
        raise ScenarioAssertionError(step, "a JSON body", response) from exc
    if not isinstance(body, dict):
        raise ScenarioAssertionError(step, "a JSON object body", response)
    return body


def data_object(step: str, response: requests.Response) -> dict[str, Any]:
    """Return ``body["data"]`` when it is a single resource object."""
    data = json_body(step, response).get("data")
    if not isinstance(data, dict):
        raise ScenarioAssertionError(step, "a 'data' resource object", response)
    return data


def error_details(body: dict[str, Any]) -> list[str]:
    """Collect ``errors[].detail`` strings from an error body."""
    errors = body.get("errors")
    if not isinstance(errors, list):
        return []
    return [
        error["detail"]
        for error in errors
        if isinstance(error, dict) and isinstance(error.get("detail"), str)
    ]


def fetch_page(step: str, client: AirportGapClient, page: int) -> Page:
    """GET one page of airports and parse it, requiring HTTP 200."""
    response = client.list_airports(page=page)
    expect_status(step, response, 200)
    body = json_body(step, response)
    if not isinstance(body.get("data"), list):
        raise ScenarioAssertionError(step, "a 'data' collection", response)
    return Page.from_payload(body)


def _authorized(client: AirportGapClient, context: ScenarioContext) -> AirportGapClient:
    return client.with_token(context.token)


# =============================================================================
# Airports
# =============================================================================


def list_airports(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "list airports"
    response = client.list_airports()
    expect_status(step, response, 200)
    if not isinstance(json_body(step, response).get("data"), list):
        raise ScenarioAssertionError(step, "a 'data' collection", response)
    return context


def get_airport(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "get airport by code"
    response = client.get_airport(AIRPORT_CODE)
    expect_status(step, response, 200)
    airport_id = data_object(step, response).get("id")
    if airport_id != AIRPORT_CODE:
        raise ScenarioAssertionError(step, f"data.id == {AIRPORT_CODE!r}", response)
    return context


def calculate_distance(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "compute distance"
    query = DISTANCE_QUERY
    response = client.calculate_distance(query.origin, query.destination)
    expect_status(step, response, 200)
    distance = Distance.from_resource(data_object(step, response))
    if distance.id != query.expected_id:
        raise ScenarioAssertionError(step, f"data.id == {query.expected_id!r}", response)
    return context


# =============================================================================
# Pagination
# =============================================================================


def pagination_links_present(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "pagination links present"
    page = fetch_page(step, client, 1)
    missing = page.missing_links()
    if missing:
        raise ScenarioAssertionError(step, f"links to contain {', '.join(missing)}")
    return context


def max_page_size(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "max page size"
    page = fetch_page(step, client, 1)
    if len(page) > context.max_page_size:
        raise ScenarioAssertionError(
            step, f"at most {context.max_page_size} items, got {len(page)}"
        )
    return context


def distinct_pages_differ(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "distinct pages differ"
    first = fetch_page(step, client, 1)
    second = fetch_page(step, client, 2)
    if first.ids == second.ids:
        raise ScenarioAssertionError(step, "page 1 and page 2 to hold different airports")
    return context


# =============================================================================
# Authentication
# =============================================================================


def access_without_token(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "access protected resource without credential"
    response = client.with_token(None).list_favorites()
    expect_status(step, response, 401)
    return context


def access_with_invalid_token(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "access protected resource with invalid credential"
    # Same shape as a real token (24 url-safe characters), but never issued.
    bogus_token = secrets.token_urlsafe(18)
    response = client.with_token(bogus_token).list_favorites()
    expect_status(step, response, 401)
    return context


def obtain_token(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "obtain token"
    account = context.account
    if account is None:
        raise ValueError("obtain_token needs context.account")
    response = client.create_token(account.email, account.password)
    expect_status(step, response, 200)
    return context


def list_favorites(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "list favorites with credential"
    response = _authorized(client, context).list_favorites()
    expect_status(step, response, 200)
    return context


# =============================================================================
# Favorites sequence
# =============================================================================


def clear_favorites(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "clear favorites"
    response = _authorized(client, context).clear_favorites()
    expect_status(step, response, 204)
    if response.content:
        raise ScenarioAssertionError(step, "no body", response)
    return context


def create_favorite(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "create favorite"
    response = _authorized(client, context).create_favorite(FAVORITE_AIRPORT, note=FAVORITE_NOTE)
    expect_status(step, response, 201)
    if data_object(step, response).get("type") != ResourceType.FAVORITE:
        raise ScenarioAssertionError(step, "data.type == 'favorite'", response)
    return context


def create_duplicate_favorite(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    step = "create duplicate favorite"
    response = _authorized(client, context).create_favorite(FAVORITE_AIRPORT)
    expect_status(step, response, 422)
    details = error_details(json_body(step, response))
    if not any(DUPLICATE_FAVORITE_MESSAGE in detail for detail in details):
        raise ScenarioAssertionError(
            step, f"errors[].detail to mention {DUPLICATE_FAVORITE_MESSAGE!r}", response
        )
    return context


def first_favorite_id(client: AirportGapClient, context: ScenarioContext) -> str:
    """Read ``data[0].id`` from ``GET /favorites``."""
    step = "read back favorite id"
    response = _authorized(client, context).list_favorites()
    expect_status(step, response, 200)
    data = json_body(step, response).get("data")
    if not isinstance(data, list) or not data:
        raise ScenarioAssertionError(step, "at least one favorite in 'data'", response)
    return Favorite.from_resource(data[0]).id


def edit_favorite_note(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    """
    Clear the note of the favorite read back from the list.

    The service stores an empty note as ``null``; that observed
    behaviour is what the step asserts.
    """
    step = "edit favorite note"
    context = context.with_favorite(first_favorite_id(client, context))
    response = _authorized(client, context).update_favorite(context.favorite_id, "")
    expect_status(step, response, 200)
    favorite = Favorite.from_resource(data_object(step, response))
    if favorite.note is not None:
        raise ScenarioAssertionError(step, "data.note to be null", response)
    return context


def verify_note_cleared(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    """Re-read the edited favorite, then repeat the edit; both keep a null note."""
    step = "verify favorite note cleared"
    if context.favorite_id is None:
        raise ValueError("verify_note_cleared needs context.favorite_id")
    authorized = _authorized(client, context)

    response = authorized.get_favorite(context.favorite_id)
    expect_status(step, response, 200)
    if Favorite.from_resource(data_object(step, response)).note is not None:
        raise ScenarioAssertionError(step, "stored note to be null", response)

    response = authorized.update_favorite(context.favorite_id, "")
    expect_status(step, response, 200)
    if Favorite.from_resource(data_object(step, response)).note is not None:
        raise ScenarioAssertionError(step, "repeated edit to keep note null", response)
    return context


FAVORITES_SEQUENCE: tuple[tuple[FavoritesPhase, Step], ...] = (
    (FavoritesPhase.CLEAR, Step("clear favorites", clear_favorites, requires_token=True)),
    (FavoritesPhase.CREATE, Step("create favorite", create_favorite, requires_token=True)),
    (
        FavoritesPhase.DUPLICATE,
        Step("create duplicate favorite", create_duplicate_favorite, requires_token=True),
    ),
    (FavoritesPhase.EDIT, Step("edit favorite note", edit_favorite_note, requires_token=True)),
    (
        FavoritesPhase.VERIFY,
        Step("verify favorite note cleared", verify_note_cleared, requires_token=True),
    ),
)

INDEPENDENT_STEPS: tuple[Step, ...] = (
    Step("list airports", list_airports),
    Step("get airport by code", get_airport),
    Step("compute distance", calculate_distance),
    Step("access protected resource without credential", access_without_token),
    Step("access protected resource with invalid credential", access_with_invalid_token),
    Step("obtain token", obtain_token, requires_account=True),
    Step("list favorites with credential", list_favorites, requires_token=True),
    Step("pagination links present", pagination_links_present),
    Step("max page size", max_page_size),
    Step("distinct pages differ", distinct_pages_differ),
)


def run_favorites_scenario(client: AirportGapClient, context: ScenarioContext) -> ScenarioContext:
    """
    Execute the favorites phases strictly in declaration order.

    Stops at the first failing phase; later phases depend on it.

    Returns:
        The context after the last phase, carrying the favorite id.

    Raises:
        ValueError: If the context holds no bearer token.
        ScenarioAssertionError: On the first contract mismatch.
    """
    if not context.token:
        raise ValueError("the favorites scenario needs a bearer token")
    for phase, step in FAVORITES_SEQUENCE:
        logger.info("Favorites phase %s: %s", phase.value, step.name)
        context = step.run(client, context)
    return context


def _run_step(
    step: Step, client: AirportGapClient, context: ScenarioContext
) -> tuple[StepResult, ScenarioContext]:
    missing = step.missing_input(context)
    if missing:
        logger.info("Skipping %s: %s", step.name, missing)
        return StepResult(step.name, StepOutcome.SKIPPED, missing), context

    logger.info("Running %s", step.name)
    try:
        context = step.run(client, context)
    except ScenarioAssertionError as exc:
        logger.error("%s failed: %s", step.name, exc)
        return StepResult(step.name, StepOutcome.FAILED, str(exc)), context
    logger.info("%s passed", step.name)
    return StepResult(step.name, StepOutcome.PASSED), context


def run_scenario(client: AirportGapClient, context: ScenarioContext) -> list[StepResult]:
    """
    Run the favorites sequence, then every independent step.

    Assertion failures are recorded per step.  Once a favorites phase
    fails, the phases after it are recorded as skipped.  Transport
    errors propagate and abort the run.

    Returns:
        One ``StepResult`` per step, in execution order.
    """
    results: list[StepResult] = []

    blocked_by: str | None = None
    for phase, step in FAVORITES_SEQUENCE:
        if blocked_by is not None:
            results.append(StepResult(step.name, StepOutcome.SKIPPED, f"depends on {blocked_by}"))
            continue
        result, context = _run_step(step, client, context)
        results.append(result)
        if result.outcome is StepOutcome.FAILED:
            blocked_by = f"{phase.value} phase"

    for step in INDEPENDENT_STEPS:
        result, context = _run_step(step, client, context)
        results.append(result)

    return results


def summarize(results: list[StepResult]) -> dict[str, int]:
    """Count results per outcome."""
    counts = {outcome.value: 0 for outcome in StepOutcome}
    for result in results:
        counts[result.outcome.value] += 1
    return counts


def format_results(results: list[StepResult]) -> str:
    """Render results as a JSON document for the command-line entry point."""
    return json.dumps(
        {
            "summary": summarize(results),
            "steps": [
                {"name": result.name, "outcome": result.outcome.value, "detail": result.detail}
                for result in results
            ],
        },
        indent=2,
    )
