from __future__ import annotations

import regex

from user_rights.errors import PatternTimeoutError


def compile_pattern(expression: str) -> "regex.Pattern":
    """Compile a revoke pattern. Raises regex.error when the expression is invalid."""
    return regex.compile(expression)


def pattern_matches(pattern: "regex.Pattern", text: str, *, timeout: float) -> bool:
    """Search `text` for `pattern`, giving up after `timeout` seconds."""
    try:
        return pattern.search(text, timeout=timeout) is not None
    except TimeoutError as exc:
        raise PatternTimeoutError(
            f"The revoke pattern {pattern.pattern!r} timed out after {timeout}s against {text}."
        ) from exc
