"""Command line interface for pyskel."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Sequence

from . import __version__
from .config import ProjectSpec, ScaffoldSettings
from .errors import ScaffoldError, UsageError
from .scaffold import ProjectScaffolder, ScaffoldResult
from .tools import CommandRunner, Fetcher, SubprocessRunner, UrllibFetcher

LOGGER = logging.getLogger("pyskel")


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises instead of exiting with status 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="pyskel",
        description="Scaffold a new Python CLI project managed by uv",
    )
    parser.add_argument(
        "name",
        nargs="?",
        metavar="PROJECT_NAME",
        help="kebab-case project name; becomes the directory and distribution name",
    )
    parser.add_argument(
        "--api",
        action="store_true",
        help="add HTTP client, settings and .env dependencies (httpx, pydantic-settings, python-dotenv)",
    )
    parser.add_argument(
        "--db",
        action="store_true",
        help="add ORM, migration and database driver dependencies (sqlalchemy, alembic, psycopg)",
    )
    parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=None,
        help="Directory in which the project directory is created (default: current directory)",
    )
    parser.add_argument("--no-git", action="store_true", help="skip git init and the first commit")
    parser.add_argument("--no-sync", action="store_true", help="skip `uv sync`")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="do not download Python.gitignore; write a minimal one instead",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every step")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    LOGGER.handlers[:] = [handler]
    LOGGER.setLevel(logging.DEBUG if verbose else logging.INFO)
    LOGGER.propagate = False


def _summary(result: ScaffoldResult, spec: ProjectSpec) -> str:
    lines = [f"Done! Created {spec.name} at {result.path}", ""]
    if result.gitignore_source == "fallback":
        lines.append("Note: using a minimal .gitignore.")
        lines.append("")
    lines.append("Next steps:")
    lines.append(f"  cd {spec.name}")
    if not result.synced:
        lines.append("  make install")
    lines.append(f"  uv run {spec.name}")
    lines.append("  make check")
    return "\n".join(lines)


def generate(
    args: Sequence[str] | None = None,
    *,
    cwd: str | Path | None = None,
    runner: CommandRunner | None = None,
    fetcher: Fetcher | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    """Scaffold a project from command line ``args`` and return the exit code.

    ``cwd``, ``runner``, ``fetcher`` and ``env`` replace the process working
    directory, the subprocess runner, the network fetcher and ``os.environ``.
    """

    parser = build_parser()
    try:
        parsed = parser.parse_args(list(args) if args is not None else None)
    except UsageError as exc:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        return exc.exit_code
    except SystemExit as exc:
        # --help and --version print and exit through argparse.
        return exc.code if isinstance(exc.code, int) else 0

    if not parsed.name:
        parser.print_help(sys.stderr)
        return 1

    configure_logging(parsed.verbose)
    environment: Mapping[str, str] = env if env is not None else os.environ

    try:
        spec = ProjectSpec.from_name(parsed.name, include_api=parsed.api, include_db=parsed.db)
        settings = ScaffoldSettings.from_env(environment)
        scaffolder = ProjectScaffolder(
            runner=runner or SubprocessRunner(),
            fetcher=fetcher or UrllibFetcher(timeout=settings.fetch_timeout),
            settings=settings,
        )
        base_dir = Path(cwd) if cwd is not None else Path.cwd()
        working_dir = base_dir / parsed.directory if parsed.directory else base_dir
        result = scaffolder.create(
            spec,
            working_dir,
            offline=parsed.offline,
            git=not parsed.no_git,
            sync=not parsed.no_sync,
        )
    except ScaffoldError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code

    print(_summary(result, spec))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    return generate(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
