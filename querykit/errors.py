"""Custom exception hierarchy for querykit.

All public errors inherit from QueryKitError so callers can catch the base
class for any querykit-specific failure.  Errors raised by a database driver
while executing a statement are NOT wrapped; they reach the caller
unmodified.
"""
from __future__ import annotations


class QueryKitError(Exception):
    """Base exception for all querykit errors."""


class ConfigurationError(QueryKitError):
    """Raised when a builder is in a state that cannot be rendered.

    Detected synchronously at mutation or render time; no partial SQL is
    ever returned alongside this error.

    Args:
        message: Human-readable description.
        clause: The clause being configured or rendered when the error
            occurred (e.g. ``"FROM"``, ``"WHERE"``, ``"CASE"``).
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class MissingTableError(ConfigurationError):
    """Raised when a query is rendered without a target table."""

    def __init__(self, statement: str) -> None:
        super().__init__(f"No table specified for {statement} query.", clause="FROM")
        self.statement = statement


class EmptyStatementError(ConfigurationError):
    """Raised when an INSERT has no rows or an UPDATE has no assignments."""


class CaseExpressionError(ConfigurationError):
    """Raised when a CASE expression is built or rendered incorrectly."""

    def __init__(self, message: str) -> None:
        super().__init__(message, clause="CASE")


class ConnectionConfigError(QueryKitError):
    """Raised when a ConnectionConfig is misconfigured.

    Detected when the configuration object is constructed, before any
    connection is opened, so the developer gets an actionable message
    instead of a driver failure later.

    Args:
        message: Human-readable description.
        missing: Option name(s) that must be supplied.
    """

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class AdapterError(QueryKitError):
    """Raised when an adapter cannot be created.

    Covers unknown adapter names and missing optional driver packages.
    """


class ExtensionError(QueryKitError):
    """Raised when a named render hook is not registered."""
