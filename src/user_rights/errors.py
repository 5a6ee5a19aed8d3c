from __future__ import annotations

from typing import Iterable


class UserRightsError(Exception):
    """Base error for expected failures."""

    def __init__(self, message: str, *, exit_code: int = 2):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class OptionsValidationError(UserRightsError):
    def __init__(self, violations: Iterable[str]):
        self.violations = list(violations)
        super().__init__("; ".join(self.violations) or "invalid options", exit_code=1)


class ConnectionStateError(UserRightsError):
    def __init__(self, message: str = "A connection to the policy database is required."):
        super().__init__(message)


class StoreOperationError(UserRightsError):
    def __init__(self, message: str = "policy store operation failed"):
        super().__init__(message)


class TranslationError(UserRightsError):
    def __init__(self, message: str = "identity translation failed"):
        super().__init__(message)


class SerializationError(UserRightsError):
    def __init__(self, message: str = "serialization failed"):
        super().__init__(message)


class PatternTimeoutError(UserRightsError):
    def __init__(self, message: str = "revoke pattern evaluation timed out"):
        super().__init__(message)
