"""Process and network backed implementations of the tool interfaces."""

from __future__ import annotations

import http.client
import logging
import shutil
import subprocess
import urllib.request
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence

from ..errors import ExternalToolError
from .interfaces import CommandRunner, FetchError, Fetcher

LOGGER = logging.getLogger(__name__)

# Exit status a POSIX shell reports for a command that cannot be found.
COMMAND_NOT_FOUND = 127


class SubprocessRunner(CommandRunner):
    """Run commands with :func:`subprocess.run`, failing on the first error."""

    def __init__(
        self,
        *,
        which: Callable[[str], Optional[str]] = shutil.which,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._which = which
        self._env = dict(env) if env is not None else None

    def available(self, program: str) -> bool:
        return self._which(program) is not None

    def run(self, command: Sequence[str], *, cwd: Path) -> str:
        command = list(command)
        if not command:
            raise ValueError("command must not be empty")
        if not self.available(command[0]):
            raise ExternalToolError(command, COMMAND_NOT_FOUND, f"{command[0]}: command not found")

        LOGGER.info("$ %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                cwd=str(cwd),
                env=self._env,
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except subprocess.CalledProcessError as exc:
            raise ExternalToolError(command, exc.returncode, exc.stdout or "") from exc
        except OSError as exc:
            raise ExternalToolError(command, COMMAND_NOT_FOUND, str(exc)) from exc

        if result.stdout:
            LOGGER.debug("%s", result.stdout.rstrip())
        return result.stdout or ""


class UrllibFetcher(Fetcher):
    """Fetch documents with :mod:`urllib.request`."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        opener: Callable[..., Any] | None = None,
    ) -> None:
        self._timeout = timeout
        self._opener = opener if opener is not None else urllib.request.urlopen

    def fetch(self, url: str) -> str:
        request = urllib.request.Request(url, headers={"User-Agent": "pyskel"})
        try:
            with self._opener(request, timeout=self._timeout) as response:
                body = response.read().decode("utf-8")
        except (OSError, http.client.HTTPException, ValueError) as exc:
            raise FetchError(f"could not fetch {url}: {exc}") from exc
        if not body.strip():
            raise FetchError(f"empty response from {url}")
        return body


__all__ = ["COMMAND_NOT_FOUND", "SubprocessRunner", "UrllibFetcher"]
