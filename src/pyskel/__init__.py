"""Scaffold new Python CLI projects.

The package derives package names from kebab-case project names, renders a
small fixed set of templates (``pyproject.toml``, ``Makefile``, ``README.md``
and a ``src`` layout package), then hands the result to git and uv. The
scaffolder can be used programmatically or via the ``pyskel`` command.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import ProjectSpec, ScaffoldSettings
from .dependencies import Dependency, DependencySet, resolve_dependencies
from .errors import CollisionError, ExternalToolError, ScaffoldError, UsageError
from .naming import derive_package_name, is_valid_package_name, slugify
from .scaffold import ProjectScaffolder, ScaffoldResult
from .template import TemplateRenderer, TemplateRenderingError

__all__ = [
    "CollisionError",
    "Dependency",
    "DependencySet",
    "ExternalToolError",
    "ProjectScaffolder",
    "ProjectSpec",
    "ScaffoldError",
    "ScaffoldResult",
    "ScaffoldSettings",
    "TemplateRenderer",
    "TemplateRenderingError",
    "UsageError",
    "derive_package_name",
    "is_valid_package_name",
    "resolve_dependencies",
    "slugify",
]
