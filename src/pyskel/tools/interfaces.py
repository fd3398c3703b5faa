"""Abstract interfaces for the external collaborators of the scaffolder."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence


class CommandRunner(ABC):
    """Executes external programs such as ``git`` and ``uv``."""

    @abstractmethod
    def available(self, program: str) -> bool:
        """Return ``True`` when ``program`` can be executed."""

    @abstractmethod
    def run(self, command: Sequence[str], *, cwd: Path) -> str:
        """Run ``command`` inside ``cwd`` and return its combined output.

        Implementations raise :class:`~pyskel.errors.ExternalToolError` when the
        program is missing or exits non-zero.
        """


class Fetcher(ABC):
    """Retrieves text documents over the network."""

    @abstractmethod
    def fetch(self, url: str) -> str:
        """Return the body at ``url``.

        Raises :class:`FetchError` on any failure.
        """


class FetchError(RuntimeError):
    """Raised when a document cannot be retrieved."""


__all__ = ["CommandRunner", "FetchError", "Fetcher"]
