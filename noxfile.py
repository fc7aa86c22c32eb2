"""Nox sessions for tagsmith."""

import os

import nox


PYPROJECT = nox.project.load_toml("pyproject.toml")
PYTHON_VERSIONS = nox.project.python_versions(PYPROJECT, max_version="3.14")
nox.options.default_venv_backend = "uv"
nox.options.sessions = ["tests", "cli"]

SMOKE_PAGE = '<main><pl:note tone="info">Saved</pl:note></main>'
SMOKE_FRAGMENT = (
    '<template pl:fragment><aside class="note" pl:pass-additional-attributes>'
    '<pl:slot></pl:slot></aside></template>'
)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the test suite on every supported interpreter."""
    session.install("-e", ".[test]")
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def coverage(session: nox.Session) -> None:
    """Run the test suite once with branch coverage."""
    session.install("-e", ".[test]")
    session.run(
        "pytest",
        "--cov=tagsmith",
        "--cov-branch",
        "--cov-report=term-missing",
        *session.posargs,
    )


@nox.session(python=PYTHON_VERSIONS[-1])
def cli(session: nox.Session) -> None:
    """Expand a one-component page through the installed console script."""
    session.install(".")
    tmp = session.create_tmp()
    component_dir = f"{tmp}/pl/note"
    os.makedirs(component_dir, exist_ok=True)
    with open(f"{component_dir}/note.html", "w", encoding="utf-8") as handle:
        handle.write(SMOKE_FRAGMENT)
    with open(f"{tmp}/page.html", "w", encoding="utf-8") as handle:
        handle.write(SMOKE_PAGE)
    session.run("tagsmith", "--version")
    session.run("tagsmith", "components", "--components", tmp)
    session.run("tagsmith", "render", f"{tmp}/page.html", "--components", tmp, "--show-events")
