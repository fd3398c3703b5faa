"""Exception types raised by the scaffolder."""

from __future__ import annotations

from typing import Sequence


class ScaffoldError(RuntimeError):
    """Base class for errors reported to the user."""

    exit_code = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)


class UsageError(ScaffoldError):
    """Raised when the command line arguments are missing or invalid."""


class CollisionError(ScaffoldError):
    """Raised when the target project directory already exists."""


class ExternalToolError(ScaffoldError):
    """Raised when an external command is missing or exits non-zero."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        output: str = "",
    ) -> None:
        self.command = tuple(command)
        self.returncode = returncode
        self.output = output
        message = f"command failed ({returncode}): {' '.join(self.command)}"
        if output.strip():
            message = f"{message}\n\n{output.rstrip()}"
        super().__init__(message)

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        return self.returncode or 1


__all__ = ["CollisionError", "ExternalToolError", "ScaffoldError", "UsageError"]
