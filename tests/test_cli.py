from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from tagsmith.core.exceptions import DuplicateSlotError
from tagsmith.ui.cli import app
from tagsmith.ui.cli.utils import build_config, parse_bindings


def _components(tmp_path: Path) -> Path:
    root = tmp_path / "components"
    card = root / "pl" / "card"
    card.mkdir(parents=True)
    (card / "card.html").write_text(
        "<template pl:fragment><section pl:pass-additional-attributes>"
        "<h2>{{ title }}</h2><pl:slot></pl:slot></section></template>",
        encoding="utf-8",
    )
    return root


def _page(tmp_path: Path, markup: str) -> Path:
    page = tmp_path / "page.html"
    page.write_text(markup, encoding="utf-8")
    return page


def test_render_prints_expanded_markup(tmp_path: Path) -> None:
    runner = CliRunner()
    components = _components(tmp_path)
    page = _page(tmp_path, "<pl:card pl:title='name' class='c'><p>Body</p></pl:card>")

    result = runner.invoke(
        app, ["render", str(page), "-c", str(components), "-D", "name=Ada"]
    )

    assert result.exit_code == 0, result.output
    assert '<section class="c"><h2>Ada</h2><p>Body</p></section>' in result.stdout


def test_render_reads_stdin_and_writes_output(tmp_path: Path) -> None:
    runner = CliRunner()
    components = _components(tmp_path)
    output = tmp_path / "out" / "page.html"

    result = runner.invoke(
        app,
        ["render", "-", "-c", str(components), "-o", str(output)],
        input="<pl:card pl:title=\"'T'\">x</pl:card>",
    )

    assert result.exit_code == 0, result.output
    assert output.read_text(encoding="utf-8") == "<section><h2>T</h2>x</section>"


def test_render_no_interpolate_keeps_placeholders(tmp_path: Path) -> None:
    runner = CliRunner()
    page = _page(tmp_path, "<p>{{ name }}</p>")

    result = runner.invoke(app, ["render", str(page), "--no-interpolate", "-D", "name=x"])

    assert result.exit_code == 0, result.output
    assert "<p>{{ name }}</p>" in result.stdout


def test_render_with_config_file(tmp_path: Path) -> None:
    runner = CliRunner()
    _components(tmp_path)
    config = tmp_path / "tagsmith.yml"
    config.write_text("template_dirs: [components]\ncomponents:\n  - name: card\n", encoding="utf-8")
    page = _page(tmp_path, "<pl:card pl:title=\"'Cfg'\" />")

    result = runner.invoke(app, ["render", str(page), "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert "<h2>Cfg</h2>" in result.stdout


def test_render_reports_errors_with_exit_code(tmp_path: Path) -> None:
    runner = CliRunner()
    components = _components(tmp_path)
    page = _page(
        tmp_path,
        "<pl:card><b pl:slot='a'>1</b><b pl:slot='a'>2</b></pl:card>",
    )

    result = runner.invoke(app, ["render", str(page), "-c", str(components)])

    assert result.exit_code == 1
    assert "duplicate slot definition" in result.output


def test_render_debug_reraises(tmp_path: Path) -> None:
    runner = CliRunner()
    components = _components(tmp_path)
    page = _page(
        tmp_path,
        "<pl:card><b pl:slot='a'>1</b><b pl:slot='a'>2</b></pl:card>",
    )

    result = runner.invoke(app, ["render", str(page), "-c", str(components), "--debug"])

    assert result.exit_code == 1
    assert isinstance(result.exception, DuplicateSlotError)


def test_render_missing_page_fails(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["render", str(tmp_path / "nope.html")])

    assert result.exit_code == 1


def test_render_show_events(tmp_path: Path) -> None:
    runner = CliRunner()
    components = _components(tmp_path)
    page = _page(tmp_path, "<pl:card><i>x</i></pl:card>")

    result = runner.invoke(
        app, ["render", str(page), "-c", str(components), "--show-events"]
    )

    assert result.exit_code == 0, result.output
    assert "Expanded Components" in result.output
    assert "pl:card" in result.output


def test_components_lists_discovered(tmp_path: Path) -> None:
    runner = CliRunner()
    components = _components(tmp_path)

    result = runner.invoke(app, ["components", "-c", str(components)])

    assert result.exit_code == 0, result.output
    assert "pl:card" in result.stdout
    assert "discovered" in result.stdout


def test_components_without_sources(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["components"])

    assert result.exit_code == 0, result.output
    assert "No components found" in result.stdout


def test_version_flag() -> None:
    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.startswith("tagsmith ")


def test_parse_bindings() -> None:
    assert parse_bindings(["a=1", "b=text", "c=", "d=[1, 2]", "e=x=y"]) == {
        "a": 1,
        "b": "text",
        "c": "",
        "d": [1, 2],
        "e": "x=y",
    }
    with pytest.raises(typer.BadParameter):
        parse_bindings(["novalue"])


def test_build_config_adds_directories(tmp_path: Path) -> None:
    config = build_config(component_dirs=[tmp_path], prefix="ui", interpolate=False)

    assert config.prefix == "ui"
    assert config.interpolate is False
    assert config.template_dirs == [tmp_path]
    assert config.discover is True
    assert build_config().discover is False
