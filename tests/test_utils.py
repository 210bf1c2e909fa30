# tests/test_utils.py
"""Tests for utility functions."""

import pytest

from deckfactory.internals import constants
from deckfactory.utils import get_debug_mode, str_to_bool


# region str_to_bool tests
@pytest.mark.parametrize(
    "input_str,expected",
    [
        # True values
        ("true", True),
        ("TRUE", True),
        ("t", True),
        ("1", True),
        ("yEs", True),
        ("  true", True),
        # False values
        ("false", False),
        ("F", False),
        ("0", False),
        ("no", False),
        ("n ", False),
    ],
)
def test_str_to_bool_valid_values(input_str: str, expected: bool) -> None:
    assert str_to_bool(input_str) == expected


@pytest.mark.parametrize("input_str", ["bob", "", "2", "maybe"])
def test_str_to_bool_invalid_values_raise(input_str: str) -> None:
    with pytest.raises(ValueError):
        str_to_bool(input_str)


# endregion


# region get_debug_mode tests
def test_explicit_flag_wins(clean_debug_env: pytest.MonkeyPatch) -> None:
    clean_debug_env.setenv("DECKFACTORY_DEBUG", "true")

    assert get_debug_mode(False) is False


def test_env_var_used_when_no_flag(clean_debug_env: pytest.MonkeyPatch) -> None:
    clean_debug_env.setenv("DECKFACTORY_DEBUG", "yes")

    assert get_debug_mode() is True


def test_default_when_nothing_set(clean_debug_env: pytest.MonkeyPatch) -> None:
    assert get_debug_mode() is constants.DEBUG_MODE_DEFAULT


def test_invalid_env_var_falls_back_to_default(
    clean_debug_env: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    clean_debug_env.setenv("DECKFACTORY_DEBUG", "bob")

    assert get_debug_mode() is constants.DEBUG_MODE_DEFAULT
    assert "Invalid value for DECKFACTORY_DEBUG" in caplog.text


# endregion
