"""External tools used while generating a project."""

from .interfaces import CommandRunner, FetchError, Fetcher
from .local import SubprocessRunner, UrllibFetcher

__all__ = [
    "CommandRunner",
    "FetchError",
    "Fetcher",
    "SubprocessRunner",
    "UrllibFetcher",
]
