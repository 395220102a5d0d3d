"""Custom exceptions for ECS pre-destroy.

Everything raised here is fatal to a run; per-resource failures are
logged by the stages and never turned into exceptions.
"""

from __future__ import annotations

from typing import Any, Sequence


class PreDestroyError(Exception):
    """Base exception for all pre-destroy errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ConfigurationError(PreDestroyError):
    """Raised when flags, config files or AWS credentials are unusable."""

    def __init__(self, message: str, config_key: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.config_key = config_key
        if config_key:
            self.details["config_key"] = config_key


class StackInspectionError(PreDestroyError):
    """Raised when the resources of a stack cannot be listed."""

    def __init__(self, message: str, stack_name: str, **kwargs):
        super().__init__(message, **kwargs)
        self.stack_name = stack_name
        self.details["stack_name"] = stack_name


class ClusterOperationError(PreDestroyError):
    """Raised when listing services or tasks of a cluster fails."""

    def __init__(self, message: str, cluster_name: str, operation: str, **kwargs):
        super().__init__(message, **kwargs)
        self.cluster_name = cluster_name
        self.operation = operation
        self.details.update({"cluster_name": cluster_name, "operation": operation})


class DestroyCommandError(PreDestroyError):
    """Raised when the destroy process cannot be launched or exits non-zero."""

    def __init__(
        self,
        message: str,
        command: Sequence[str],
        returncode: int | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.command = list(command)
        self.returncode = returncode
        self.details.update({"command": self.command, "returncode": returncode})

    @property
    def exit_code(self) -> int:
        """Exit code the CLI should finish with."""
        if self.returncode and self.returncode > 0:
            return self.returncode
        return 1
