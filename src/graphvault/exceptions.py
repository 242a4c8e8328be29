"""Custom exception classes for GraphVault."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graphvault.restoration.results import RestoreSummary, UnitFailure


class GraphVaultError(Exception):
    """Base exception for all GraphVault errors."""

    pass


class ConfigError(GraphVaultError):
    """Exception raised for configuration errors."""

    pass


class InvalidInputError(GraphVaultError):
    """Exception raised when a required dump file is missing or unreadable."""

    pass


class DeserializationError(GraphVaultError):
    """Exception raised when a dump line cannot be decoded into records."""

    pass


class DumpIOError(GraphVaultError):
    """Exception raised when a dump file cannot be opened or read."""

    pass


class RemoteError(GraphVaultError):
    """Exception raised when a HugeGraph API call fails (not retryable)."""

    def __init__(self, message: str, status_code: int | None = None):
        """Initialize remote error.

        Args:
            message: Error message
            status_code: HTTP status code returned by the server, if any
        """
        self.status_code = status_code
        if status_code:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)


class TransientRemoteError(RemoteError):
    """Exception raised for remote failures that may succeed on retry."""

    pass


class RetryExhaustedError(GraphVaultError):
    """Exception raised when an operation keeps failing after all retry attempts."""

    def __init__(self, description: str, attempts: int, cause: BaseException | None = None):
        """Initialize retry exhausted error.

        Args:
            description: Human-readable description of the operation
            attempts: Number of attempts made
            cause: Last exception raised by the operation
        """
        self.description = description
        self.attempts = attempts
        message = f"Failed {description} after {attempts} attempt(s)"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class RestorationError(GraphVaultError):
    """Exception raised when a restore type or a whole restore run did not fully succeed."""

    def __init__(
        self,
        message: str,
        failures: list[UnitFailure] | None = None,
        summary: RestoreSummary | None = None,
    ):
        """Initialize restoration error.

        Args:
            message: Error message
            failures: Failed units that caused this error
            summary: Summary of the run, set when the whole run failed
        """
        self.failures = list(failures or [])
        self.summary = summary
        super().__init__(message)
