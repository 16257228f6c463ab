"""
Custom exception hierarchy for nativecheck.

All exceptions inherit from NativeCheckError and carry the exit code the
process should terminate with, so the pipeline can stop at the first failure
and hand that code back unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class NativeCheckError(Exception):
    """Base exception for all nativecheck errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None
    exit_code: int = 1

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class StageFailedError(NativeCheckError):
    """Raised when an external process of a stage exits non-zero."""

    stage: str = ""
    returncode: int = 1

    def __post_init__(self) -> None:
        self.exit_code = self.returncode

    def __str__(self) -> str:
        return f"Stage '{self.stage}' failed with exit code {self.returncode}: {self.message}"


@dataclass
class PathResolutionError(NativeCheckError):
    """Raised when a required directory does not resolve to an existing path."""

    path: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"Cannot resolve '{self.path}': {base}"


@dataclass
class ToolNotFoundError(NativeCheckError):
    """Raised when a required external tool cannot be launched."""

    tool_name: str = ""
    expected_path: str = ""
    install_hint: str = ""
    exit_code: int = 127

    def __str__(self) -> str:
        hint = f" Install hint: {self.install_hint}" if self.install_hint else ""
        return f"Tool '{self.tool_name}' not found at '{self.expected_path}'.{hint}"
