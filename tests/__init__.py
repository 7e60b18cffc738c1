"""
Test suite for the Airport Gap API checks.

This package contains:
- unit/: models, configuration, and client request building
- integration/: scenario steps and runner against a fake HTTP session
- contracts/: OpenAPI contract checks for the consumed endpoints
- live/: the scenario against the public service (opt-in)
"""
