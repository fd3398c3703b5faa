"""Project scaffolding helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import ProjectSpec, ScaffoldSettings
from .dependencies import DEV_DEPENDENCIES
from .errors import CollisionError
from .template import TemplateRenderer
from .templates import PROJECT_TEMPLATES, NamedTemplate
from .tools import CommandRunner, FetchError, Fetcher, SubprocessRunner, UrllibFetcher

__all__ = ["FALLBACK_GITIGNORE", "ProjectScaffolder", "ScaffoldResult"]

LOGGER = logging.getLogger(__name__)


FALLBACK_GITIGNORE = """.venv/
__pycache__/
*.py[cod]
*.egg-info/
build/
dist/
.env
.mypy_cache/
.pytest_cache/
.ruff_cache/
"""


@dataclass(slots=True)
class ScaffoldResult:
    """What a call to :meth:`ProjectScaffolder.create` produced."""

    path: Path
    files: list[str] = field(default_factory=list)
    gitignore_source: str = ""
    committed: bool = False
    synced: bool = False


@dataclass(slots=True)
class ProjectScaffolder:
    """Create a new Python CLI project and hand it to git and uv."""

    renderer: TemplateRenderer
    runner: CommandRunner
    fetcher: Fetcher
    settings: ScaffoldSettings
    templates: tuple[NamedTemplate, ...]

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        *,
        runner: CommandRunner | None = None,
        fetcher: Fetcher | None = None,
        settings: ScaffoldSettings | None = None,
        templates: tuple[NamedTemplate, ...] = PROJECT_TEMPLATES,
    ) -> None:
        self.settings = settings or ScaffoldSettings()
        self.renderer = renderer or TemplateRenderer()
        self.runner = runner or SubprocessRunner()
        self.fetcher = fetcher or UrllibFetcher(timeout=self.settings.fetch_timeout)
        self.templates = templates

    def context(self, spec: ProjectSpec) -> dict[str, object]:
        context = dict(spec.context())
        context["python_requires"] = self.settings.python_requires
        context["dev_dependencies"] = [dependency.requirement() for dependency in DEV_DEPENDENCIES]
        context["features"] = ", ".join(spec.extras()) or "none"
        return context

    def create(
        self,
        spec: ProjectSpec,
        working_dir: str | Path,
        *,
        offline: bool = False,
        git: bool = True,
        sync: bool = True,
    ) -> ScaffoldResult:
        """Create the project described by ``spec`` inside ``working_dir``.

        The first failing external command aborts the run. Files written up to
        that point are left in place.
        """

        project_path = Path(working_dir).expanduser().resolve() / spec.name
        if project_path.exists() or project_path.is_symlink():
            raise CollisionError(f"{project_path} already exists")

        context = self.context(spec)
        rendered = [template.render(self.renderer, context) for template in self.templates]

        LOGGER.info("Creating %s", project_path)
        (project_path / "src" / spec.package_name).mkdir(parents=True)
        (project_path / "tests").mkdir()

        result = ScaffoldResult(path=project_path)
        for relative_path, content in rendered:
            destination = project_path / relative_path
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(content, encoding="utf-8")
            result.files.append(relative_path)
            LOGGER.debug("wrote %s", relative_path)

        result.gitignore_source = self._write_gitignore(project_path, offline=offline)
        result.files.append(".gitignore")

        if git:
            self._git_init_commit(project_path)
            result.committed = True

        if sync:
            self.runner.run([self.settings.uv, "sync"], cwd=project_path)
            result.synced = True

        return result

    def _write_gitignore(self, project_path: Path, *, offline: bool) -> str:
        content = FALLBACK_GITIGNORE
        source = "fallback"
        if offline:
            LOGGER.info("Offline mode, writing minimal .gitignore")
        else:
            LOGGER.info("Fetching Python.gitignore...")
            try:
                content = self.fetcher.fetch(self.settings.gitignore_url)
                source = "remote"
            except FetchError as exc:
                LOGGER.warning("%s; falling back to a minimal .gitignore", exc)

        (project_path / ".gitignore").write_text(content, encoding="utf-8")
        return source

    def _git_init_commit(self, project_path: Path) -> None:
        self.runner.run(["git", "init", "-b", self.settings.branch], cwd=project_path)
        self.runner.run(["git", "add", "."], cwd=project_path)
        self.runner.run(["git", "commit", "-m", self.settings.commit_message], cwd=project_path)
