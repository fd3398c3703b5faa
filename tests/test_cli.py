from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from pyskel import __version__
from pyskel.cli import generate
from pyskel.dependencies import API_DEPENDENCIES, BASE_DEPENDENCIES, DB_DEPENDENCIES
from tests.fixtures.fakes import FakeFetcher, FakeRunner


def _run(args, tmp_path: Path, runner: FakeRunner, fetcher: FakeFetcher) -> int:
    return generate(args, cwd=tmp_path, runner=runner, fetcher=fetcher, env={})


def _dependencies(project_dir: Path) -> set[str]:
    with (project_dir / "pyproject.toml").open("rb") as handle:
        return set(tomllib.load(handle)["project"]["dependencies"])


def _requirements(*groups) -> set[str]:
    return {dependency.requirement() for group in groups for dependency in group}


def test_generate_creates_project(tmp_path: Path, runner: FakeRunner, fetcher: FakeFetcher, capsys):
    assert _run(["my-tool"], tmp_path, runner, fetcher) == 0

    project_dir = tmp_path / "my-tool"
    for relative in (
        "src/my_tool/main.py",
        "src/my_tool/py.typed",
        "pyproject.toml",
        "Makefile",
        "README.md",
        ".gitignore",
    ):
        assert (project_dir / relative).is_file()
    assert _dependencies(project_dir) == _requirements(BASE_DEPENDENCIES)

    out = capsys.readouterr().out
    assert "Done!" in out
    assert "cd my-tool" in out


def test_generate_with_all_groups(tmp_path: Path, runner: FakeRunner, fetcher: FakeFetcher):
    assert _run(["my-app", "--api", "--db"], tmp_path, runner, fetcher) == 0

    project_dir = tmp_path / "my-app"
    assert (project_dir / "src" / "my_app").is_dir()
    assert _dependencies(project_dir) == _requirements(BASE_DEPENDENCIES, API_DEPENDENCIES, DB_DEPENDENCIES)


@pytest.mark.parametrize(
    "flags, groups",
    [
        ([], (BASE_DEPENDENCIES,)),
        (["--api"], (BASE_DEPENDENCIES, API_DEPENDENCIES)),
        (["--db"], (BASE_DEPENDENCIES, DB_DEPENDENCIES)),
        (["--db", "--api"], (BASE_DEPENDENCIES, API_DEPENDENCIES, DB_DEPENDENCIES)),
    ],
)
def test_flags_select_dependency_groups(tmp_path: Path, runner, fetcher, flags, groups):
    assert _run(["demo", *flags], tmp_path, runner, fetcher) == 0
    assert _dependencies(tmp_path / "demo") == _requirements(*groups)


def test_flags_may_precede_name(tmp_path: Path, runner, fetcher):
    assert _run(["--api", "demo"], tmp_path, runner, fetcher) == 0
    assert "httpx" in _dependencies(tmp_path / "demo")


def test_second_run_collides_without_changes(tmp_path: Path, runner, fetcher, capsys):
    assert _run(["x"], tmp_path, runner, fetcher) == 0
    project_dir = tmp_path / "x"
    before = {path: path.read_bytes() for path in project_dir.rglob("*") if path.is_file()}
    calls_before = len(runner.calls)
    capsys.readouterr()

    assert _run(["x"], tmp_path, runner, fetcher) == 1

    assert "already exists" in capsys.readouterr().err
    after = {path: path.read_bytes() for path in project_dir.rglob("*") if path.is_file()}
    assert after == before
    assert len(runner.calls) == calls_before


def test_missing_name_prints_usage(tmp_path: Path, runner, fetcher, capsys):
    assert _run([], tmp_path, runner, fetcher) == 1
    assert "usage:" in capsys.readouterr().err
    assert list(tmp_path.iterdir()) == []


def test_unknown_flag_fails_before_writing(tmp_path: Path, runner, fetcher, capsys):
    assert _run(["demo", "--web"], tmp_path, runner, fetcher) == 1
    err = capsys.readouterr().err
    assert "usage:" in err
    assert "--web" in err
    assert list(tmp_path.iterdir()) == []
    assert runner.calls == []


@pytest.mark.parametrize("name", ["1tool", "my.tool", "class", "café"])
def test_invalid_package_name_is_a_usage_error(tmp_path: Path, runner, fetcher, capsys, name):
    assert _run([name], tmp_path, runner, fetcher) == 1
    assert "valid Python package name" in capsys.readouterr().err
    assert list(tmp_path.iterdir()) == []


def test_failed_tool_returns_its_exit_code(tmp_path: Path, fetcher, capsys):
    runner = FakeRunner(fail_on=("uv", "sync"), returncode=2, output="No solution found")
    assert _run(["demo"], tmp_path, runner, fetcher) == 2
    assert "No solution found" in capsys.readouterr().err
    assert (tmp_path / "demo" / "pyproject.toml").exists()


def test_missing_tool_returns_127(tmp_path: Path, fetcher):
    runner = FakeRunner(missing=["git"])
    assert _run(["demo"], tmp_path, runner, fetcher) == 127


def test_directory_option_is_relative_to_cwd(tmp_path: Path, runner, fetcher):
    assert _run(["demo", "-d", "projects"], tmp_path, runner, fetcher) == 0
    assert (tmp_path / "projects" / "demo" / "pyproject.toml").exists()


def test_skip_flags(tmp_path: Path, runner, fetcher, capsys):
    assert _run(["demo", "--no-git", "--no-sync", "--offline"], tmp_path, runner, fetcher) == 0
    assert runner.calls == []
    assert fetcher.urls == []
    out = capsys.readouterr().out
    assert "make install" in out
    assert "minimal .gitignore" in out


def test_env_configures_commit_message(tmp_path: Path, runner, fetcher):
    exit_code = generate(
        ["demo"],
        cwd=tmp_path,
        runner=runner,
        fetcher=fetcher,
        env={"PYSKEL_COMMIT_MESSAGE": "Initial commit"},
    )
    assert exit_code == 0
    assert ("git", "commit", "-m", "Initial commit") in runner.commands


def test_verbose_logs_progress(tmp_path: Path, runner, fetcher, capsys):
    assert _run(["demo", "-v"], tmp_path, runner, fetcher) == 0
    err = capsys.readouterr().err
    assert "Fetching Python.gitignore..." in err
    assert "wrote pyproject.toml" in err


def test_version_flag_returns_zero(tmp_path: Path, runner, fetcher, capsys):
    assert _run(["--version"], tmp_path, runner, fetcher) == 0
    assert f"pyskel {__version__}" in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []


def test_help_flag_returns_zero(tmp_path: Path, runner, fetcher, capsys):
    assert _run(["--help"], tmp_path, runner, fetcher) == 0
    assert "PROJECT_NAME" in capsys.readouterr().out


def test_dangling_symlink_is_a_collision(tmp_path: Path, runner, fetcher, capsys):
    (tmp_path / "demo").symlink_to(tmp_path / "missing")
    assert _run(["demo"], tmp_path, runner, fetcher) == 1
    assert "already exists" in capsys.readouterr().err
    assert runner.calls == []


@pytest.mark.parametrize("name", ["tool-", "_tool"])
def test_invalid_distribution_name_is_a_usage_error(tmp_path: Path, runner, fetcher, capsys, name):
    assert _run([name], tmp_path, runner, fetcher) == 1
    assert "not a valid distribution name" in capsys.readouterr().err
    assert list(tmp_path.iterdir()) == []


@pytest.mark.parametrize("name", ["a", "my-tool", "tool2", "A-b-9"])
def test_accepted_names_produce_parseable_pyproject(tmp_path: Path, runner, fetcher, name):
    assert _run([name], tmp_path, runner, fetcher) == 0
    with (tmp_path / name / "pyproject.toml").open("rb") as handle:
        pyproject = tomllib.load(handle)
    assert pyproject["project"]["name"] == name
    assert pyproject["project"]["scripts"] == {name: f"{name.replace('-', '_')}.main:main"}
