"""Named templates for the files of a generated project.

Each template lists the context variables it consumes. Rendering checks the
context against that list before any placeholder is substituted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .template import TemplateRenderer, TemplateRenderingError

__all__ = ["NamedTemplate", "PROJECT_TEMPLATES"]


@dataclass(frozen=True, slots=True)
class NamedTemplate:
    """A file template together with the variables it is allowed to use."""

    name: str
    path: str
    body: str
    variables: frozenset[str] = frozenset()

    def render(self, renderer: TemplateRenderer, context: Mapping[str, Any]) -> tuple[str, str]:
        """Return the rendered ``(relative_path, content)`` pair."""

        undeclared = sorted(
            (renderer.placeholders(self.path) | renderer.placeholders(self.body)) - self.variables
        )
        if undeclared:
            raise TemplateRenderingError(
                f"template '{self.name}' uses undeclared variables: {', '.join(undeclared)}"
            )
        missing = sorted(self.variables - set(context))
        if missing:
            raise TemplateRenderingError(
                f"template '{self.name}' is missing variables: {', '.join(missing)}"
            )
        values = {key: context[key] for key in self.variables}
        return renderer.render_string(self.path, values), renderer.render_string(self.body, values)


PYPROJECT_TEMPLATE = """[build-system]
requires = ["setuptools>=68"]
build-backend = "setuptools.build_meta"

[project]
name = "{{ project }}"
version = "0.1.0"
description = ""
readme = "README.md"
requires-python = "{{ python_requires }}"
dependencies = [{{ dependencies|toml_list }}]

[project.scripts]
{{ project }} = "{{ package }}.main:main"

[dependency-groups]
dev = [{{ dev_dependencies|toml_list }}]

[tool.uv]
package = true

[tool.setuptools.packages.find]
where = ["src"]

[tool.setuptools.package-data]
{{ package }} = ["py.typed"]

[tool.ruff]
exclude = [".venv", "__pycache__", ".mypy_cache", "output"]

[tool.isort]
profile = "black"

[tool.mypy]
ignore_missing_imports = true
disallow_untyped_defs = true
disallow_incomplete_defs = true
check_untyped_defs = true
strict_optional = true
warn_unused_ignores = true

[tool.pytest.ini_options]
testpaths = ["tests"]
"""

# Recipe lines must start with a tab.
MAKEFILE_TEMPLATE = """UV ?= uv
SRC = src
TESTS = tests

.PHONY: all install format lint lint-fix type audit security test check clean validate

all: check test

install:
\t$(UV) sync

format:
\t$(UV) run black $(SRC) $(TESTS)
\t$(UV) run isort $(SRC) $(TESTS)

lint:
\t$(UV) run ruff check $(SRC) $(TESTS)

lint-fix:
\t$(UV) run ruff check --fix $(SRC) $(TESTS)

type:
\t$(UV) run mypy $(SRC)

audit:
\t$(UV) run pip-audit

security:
\t$(UV) run bandit -r $(SRC)

test:
\t$(UV) run pytest -v

check: format lint type security audit

clean:
\trm -rf .mypy_cache .pytest_cache .ruff_cache build dist
\tfind . -type d -name __pycache__ -prune -exec rm -rf {} +

validate:
\t@if [ -z "$(f)" ]; then \\
\t\techo "Usage: make validate f=somefile.py"; \\
\t\texit 1; \\
\tfi
\t$(UV) run black $(f)
\t$(UV) run isort $(f)
\t$(UV) run ruff check $(f)
\t$(UV) run mypy $(f)
"""

README_TEMPLATE = """# {{ project }}

Optional dependency groups: {{ features }}.

## Usage

```sh
make install
uv run {{ project }}
```

## Development

- `make format` formats the code with black and isort.
- `make lint` runs ruff; `make type` runs mypy on `src/{{ package }}`.
- `make security` runs bandit and `make audit` runs pip-audit.
- `make test` runs the test-suite with pytest.
- `make check` runs every check above.
"""

INIT_TEMPLATE = '"""{{ project }}."""\n\n__version__ = "0.1.0"\n'

MAIN_TEMPLATE = """def main() -> None:
    print("Hello from {{ project }}!")


if __name__ == "__main__":
    main()
"""

TEST_TEMPLATE = """from {{ package }}.main import main


def test_main_prints_greeting(capsys) -> None:
    main()
    assert "Hello from" in capsys.readouterr().out
"""


def _template(name: str, path: str, body: str, *variables: str) -> NamedTemplate:
    return NamedTemplate(name=name, path=path, body=body, variables=frozenset(variables))


PROJECT_TEMPLATES: tuple[NamedTemplate, ...] = (
    _template(
        "pyproject",
        "pyproject.toml",
        PYPROJECT_TEMPLATE,
        "project",
        "package",
        "python_requires",
        "dependencies",
        "dev_dependencies",
    ),
    _template("makefile", "Makefile", MAKEFILE_TEMPLATE),
    _template("readme", "README.md", README_TEMPLATE, "project", "package", "features"),
    _template("init", "src/{{ package }}/__init__.py", INIT_TEMPLATE, "project", "package"),
    _template("main", "src/{{ package }}/main.py", MAIN_TEMPLATE, "project", "package"),
    _template("py_typed", "src/{{ package }}/py.typed", "", "package"),
    _template("test_main", "tests/test_main.py", TEST_TEMPLATE, "package"),
)
