"""Moodo Test Suite

Test organization:
- unit/: Unit tests for individual modules
  - affect/: Title classifier (keyword scoring, confidence levels)
  - scheduling/: Mood compatibility scoring and short-list selection
  - recommendations/: Context rules, fallbacks, starters and ranking
  - learning/: Personalization logs and persisted learning state
- integration/: End-to-end flows through the engine and SQLite storage

Running tests:
    # All tests
    pytest

    # Specific module
    pytest tests/unit/scheduling/

    # Excluding end-to-end flows
    pytest -m "not integration"
"""
