from __future__ import annotations

import pytest
import regex

from user_rights.errors import PatternTimeoutError
from user_rights.utils.patterns import compile_pattern, pattern_matches


def test_pattern_matches_searches_anywhere() -> None:
    pattern = compile_pattern("32-54[45]")
    assert pattern_matches(pattern, "S-1-5-32-545", timeout=1.0)
    assert not pattern_matches(pattern, "S-1-5-21-1-2-3-1001", timeout=1.0)


def test_compile_pattern_raises_regex_error() -> None:
    with pytest.raises(regex.error):
        compile_pattern("(S-1-5")


class _StuckPattern:
    pattern = "(a+)+$"

    def search(self, text, timeout=None):
        raise TimeoutError("regex timed out")


def test_pattern_timeout_is_reported() -> None:
    with pytest.raises(PatternTimeoutError) as exc_info:
        pattern_matches(_StuckPattern(), "S-1-5-32-545", timeout=1.0)
    assert exc_info.value.exit_code == 2
    assert "(a+)+$" in exc_info.value.message
