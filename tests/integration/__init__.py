"""
Scenario tests for the Airport Gap suite.

Steps run through the real client against a fake HTTP session and
demonstrate:
- Pass and fail paths of every step
- Declared ordering of the favorites phases
- Result recording and fail-fast transport errors
"""
