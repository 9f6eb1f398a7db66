"""Shared error types for the dotnet_runner package."""


class RunnerError(Exception):
    """Base exception for dotnet_runner errors.

    Use this for user-facing errors that should have actionable messages.
    """

    pass


class TemplateError(RunnerError):
    """Raised when an operation template references an unknown placeholder."""

    pass


class ProcessError(RunnerError):
    """Raised when a command cannot be launched at all."""

    pass
