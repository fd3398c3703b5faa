"""Dependency declarations written into generated projects."""

from __future__ import annotations

import re
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "API_DEPENDENCIES",
    "BASE_DEPENDENCIES",
    "DB_DEPENDENCIES",
    "DEV_DEPENDENCIES",
    "Dependency",
    "DependencySet",
    "resolve_dependencies",
]


_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*(\[[A-Za-z0-9._,-]+\])?$")


class Dependency(BaseModel):
    """A single requirement such as ``sqlalchemy>=2.0``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Distribution name, optionally with extras.")
    constraint: str = Field("", description="PEP 440 version specifier, empty for any version.")

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not _NAME_PATTERN.match(value):
            raise ValueError(f"invalid distribution name '{value}'")
        return value

    @property
    def key(self) -> str:
        """Normalised distribution name without extras, used for de-duplication."""

        base = self.name.split("[", 1)[0]
        return re.sub(r"[-_.]+", "-", base).lower()

    def requirement(self) -> str:
        return f"{self.name}{self.constraint}"


class DependencySet(BaseModel):
    """Ordered collection of dependencies without duplicates."""

    model_config = ConfigDict(extra="forbid")

    items: List[Dependency] = Field(default_factory=list)

    def add(self, dependency: Dependency) -> bool:
        """Append ``dependency`` unless one with the same name is present."""

        if any(existing.key == dependency.key for existing in self.items):
            return False
        self.items.append(dependency)
        return True

    def extend(self, dependencies: Iterable[Dependency]) -> None:
        for dependency in dependencies:
            self.add(dependency)

    def names(self) -> set[str]:
        return {dependency.key for dependency in self.items}

    def requirements(self) -> list[str]:
        return [dependency.requirement() for dependency in self.items]


def _group(*requirements: str) -> tuple[Dependency, ...]:
    return tuple(Dependency(name=name) for name in requirements)


BASE_DEPENDENCIES = _group("click", "loguru", "rich")
API_DEPENDENCIES = _group("httpx", "pydantic-settings", "python-dotenv")
DB_DEPENDENCIES = _group("sqlalchemy", "alembic", "psycopg[binary]")
DEV_DEPENDENCIES = _group(
    "bandit",
    "black",
    "isort",
    "mypy",
    "pip-audit",
    "ptpython",
    "pyment",
    "pytest",
    "ruff",
)


def resolve_dependencies(*, include_api: bool = False, include_db: bool = False) -> DependencySet:
    """Return the base group plus the optional groups that are switched on."""

    dependencies = DependencySet()
    dependencies.extend(BASE_DEPENDENCIES)
    if include_api:
        dependencies.extend(API_DEPENDENCIES)
    if include_db:
        dependencies.extend(DB_DEPENDENCIES)
    return dependencies
