"""Run the full Airport Gap scenario against the configured service."""

from __future__ import annotations

from airportgap import create_client
from airportgap.config import get_config
from airportgap.scenario import (
    Account,
    ScenarioContext,
    StepOutcome,
    format_results,
    run_scenario,
)


def main() -> int:
    """Execute every step once and return a non-zero status on any failure."""
    config_class = get_config()

    account = None
    if config_class.ACCOUNT_EMAIL and config_class.ACCOUNT_PASSWORD:
        account = Account(config_class.ACCOUNT_EMAIL, config_class.ACCOUNT_PASSWORD)
    context = ScenarioContext(
        token=config_class.API_TOKEN,
        account=account,
        max_page_size=config_class.MAX_PAGE_SIZE,
    )

    with create_client() as client:
        results = run_scenario(client, context)

    print(format_results(results))
    return 1 if any(result.outcome is StepOutcome.FAILED for result in results) else 0


if __name__ == "__main__":
    raise SystemExit(main())
