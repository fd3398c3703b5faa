"""Configuration objects shared by the scaffolder and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .dependencies import DependencySet, resolve_dependencies
from .errors import UsageError
from .naming import (
    derive_package_name,
    is_valid_package_name,
    is_valid_project_name,
    suggest_project_name,
)

__all__ = ["ProjectSpec", "ScaffoldSettings"]


DEFAULT_GITIGNORE_URL = (
    "https://raw.githubusercontent.com/github/gitignore/main/Python.gitignore"
)


@dataclass(frozen=True, slots=True)
class ProjectSpec:
    """Identifiers and feature switches for one generated project.

    Attributes
    ----------
    name:
        The kebab-case project name given on the command line. Used verbatim
        for the project directory, the distribution name and the console
        script.
    package_name:
        ``name`` with ``-`` replaced by ``_``. Always a valid Python
        identifier.
    include_api:
        Add the HTTP client and settings dependencies.
    include_db:
        Add the ORM, migration and database driver dependencies.
    """

    name: str
    package_name: str
    include_api: bool = False
    include_db: bool = False

    @classmethod
    def from_name(
        cls,
        name: str,
        *,
        include_api: bool = False,
        include_db: bool = False,
    ) -> "ProjectSpec":
        """Validate ``name`` and derive the package name from it."""

        if not name or not name.strip():
            raise UsageError("project name must not be empty")
        if name != name.strip():
            raise UsageError(f"project name '{name}' must not contain surrounding whitespace")
        if "/" in name or "\\" in name or name.startswith("."):
            raise UsageError(f"project name '{name}' must be a plain directory name")

        package_name = derive_package_name(name)
        if not is_valid_package_name(package_name):
            message = f"'{name}' does not derive a valid Python package name ('{package_name}')"
            suggestion = suggest_project_name(name)
            if suggestion:
                message = f"{message}; try '{suggestion}'"
            raise UsageError(message)
        if not is_valid_project_name(name):
            message = f"'{name}' is not a valid distribution name; it must start and end with a letter or digit"
            suggestion = suggest_project_name(name)
            if suggestion:
                message = f"{message}; try '{suggestion}'"
            raise UsageError(message)

        return cls(
            name=name,
            package_name=package_name,
            include_api=include_api,
            include_db=include_db,
        )

    def dependencies(self) -> DependencySet:
        return resolve_dependencies(include_api=self.include_api, include_db=self.include_db)

    def extras(self) -> list[str]:
        """Names of the optional dependency groups that are switched on."""

        enabled = []
        if self.include_api:
            enabled.append("api")
        if self.include_db:
            enabled.append("db")
        return enabled

    def context(self) -> Mapping[str, object]:
        """Return a dictionary compatible with the templating helpers."""

        return {
            "project": self.name,
            "package": self.package_name,
            "dependencies": self.dependencies().requirements(),
        }


@dataclass(frozen=True, slots=True)
class ScaffoldSettings:
    """Tunables that are the same for every generated project."""

    gitignore_url: str = DEFAULT_GITIGNORE_URL
    branch: str = "main"
    commit_message: str = "batman"
    uv: str = "uv"
    python_requires: str = ">=3.12"
    fetch_timeout: float = 10.0

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "ScaffoldSettings":
        """Build settings from ``PYSKEL_*`` environment variables.

        Unset or empty variables keep their defaults.
        """

        defaults = cls()

        def read(key: str, default: str) -> str:
            value = env.get(f"PYSKEL_{key}", "").strip()
            return value or default

        raw_timeout = read("FETCH_TIMEOUT", str(defaults.fetch_timeout))
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise UsageError(f"PYSKEL_FETCH_TIMEOUT must be a number, got '{raw_timeout}'") from exc
        if timeout <= 0:
            raise UsageError("PYSKEL_FETCH_TIMEOUT must be positive")

        return cls(
            gitignore_url=read("GITIGNORE_URL", defaults.gitignore_url),
            branch=read("BRANCH", defaults.branch),
            commit_message=read("COMMIT_MESSAGE", defaults.commit_message),
            uv=read("UV", defaults.uv),
            python_requires=read("PYTHON_REQUIRES", defaults.python_requires),
            fetch_timeout=timeout,
        )
