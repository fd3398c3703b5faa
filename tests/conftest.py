from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

from tests.fixtures.fakes import FakeFetcher, FakeRunner

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture()
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture(autouse=True)
def no_real_network(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fail loudly if a test reaches for the real urlopen."""

    def _refuse(*args, **kwargs):
        raise AssertionError("tests must not open network connections")

    monkeypatch.setattr("urllib.request.urlopen", _refuse)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop the handler the CLI installs so later tests do not write to a stale stream."""

    yield
    logger = logging.getLogger("pyskel")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
