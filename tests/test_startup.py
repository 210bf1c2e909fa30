"""Tests for application startup."""

import logging

import pytest

from deckfactory import startup


@pytest.fixture
def recorded_logger_setup(monkeypatch: pytest.MonkeyPatch) -> dict:
    """Replace setup_logger and record what it was called with."""
    seen: dict = {}

    def fake_setup_logger(run_id: str, enable_trace: bool = False) -> logging.Logger:
        seen.update(run_id=run_id, enable_trace=enable_trace)
        return logging.getLogger("deckfactory-test-startup")

    monkeypatch.setattr(startup, "setup_logger", fake_setup_logger)
    return seen


def test_explicit_debug_flag_enables_trace(
    recorded_logger_setup: dict, clean_debug_env: pytest.MonkeyPatch
) -> None:
    startup.initialize_application("r1", debug_flag=True)

    assert recorded_logger_setup == {"run_id": "r1", "enable_trace": True}


def test_debug_falls_back_to_env(
    recorded_logger_setup: dict, clean_debug_env: pytest.MonkeyPatch
) -> None:
    clean_debug_env.setenv("DECKFACTORY_DEBUG", "1")

    startup.initialize_application("r2")

    assert recorded_logger_setup["enable_trace"] is True
