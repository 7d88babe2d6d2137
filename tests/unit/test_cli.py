"""Tests for CLI commands."""

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from figmark import __version__
from figmark.cli import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def test_project(tmp_path: Path, frame_payload: dict[str, Any]) -> Path:
    """Create a temporary project with snapshots and a manifest."""
    snapshots = tmp_path / "snapshots"
    snapshots.mkdir()
    frame_payload["children"].append(
        {
            "id": "6:1",
            "name": "Primary Button",
            "type": "INSTANCE",
            "children": [{"id": "6:2", "type": "TEXT", "characters": "Start"}],
        }
    )
    (snapshots / "document.json").write_text(json.dumps({"document": frame_payload}))
    (snapshots / "bindings.json").write_text(
        json.dumps({"6:1": {"componentName": "Button", "props": {"variant": "primary"}}})
    )

    (tmp_path / "figmark.toml").write_text(
        """
[project]
name = "hero"

[snapshots]
document = "snapshots/document.json"
bindings = "snapshots/bindings.json"

[output]
title = "Hero"
"""
    )
    return tmp_path


def test_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.startswith("figmark ")


def test_compile_html_to_stdout(cli_runner: CliRunner, test_project: Path) -> None:
    result = cli_runner.invoke(app, ["compile", "--manifest", str(test_project / "figmark.toml")])
    assert result.exit_code == 0
    assert result.stdout.startswith('<div class="hero_card" data-node-id="1:1"')
    assert 'data-component="Button"' in result.stdout
    assert "1:5" not in result.stdout


def test_compile_jsx_to_file(cli_runner: CliRunner, test_project: Path) -> None:
    out = test_project / "build" / "Hero.jsx"
    result = cli_runner.invoke(
        app,
        [
            "compile",
            "--manifest",
            str(test_project / "figmark.toml"),
            "--target",
            "jsx",
            "--out",
            str(out),
        ],
    )
    assert result.exit_code == 0
    content = out.read_text()
    assert "import { Button } from 'rk-designsystem';" in content
    assert "export default function HeroCard()" in content
    assert "Wrote jsx output" in result.stderr


def test_compile_page_uses_manifest_title(cli_runner: CliRunner, test_project: Path) -> None:
    result = cli_runner.invoke(
        app, ["compile", "-m", str(test_project / "figmark.toml"), "-t", "page"]
    )
    assert result.exit_code == 0
    assert "<title>Hero</title>" in result.stdout


def test_compile_explicit_document_without_manifest(
    cli_runner: CliRunner, test_project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(test_project / "snapshots")
    result = cli_runner.invoke(app, ["compile", "document.json"])
    assert result.exit_code == 0
    # No bindings without the manifest: the instance is translated structurally
    assert "data-component" not in result.stdout
    assert ">Start</p>" in result.stdout


def test_compile_unknown_target(cli_runner: CliRunner, test_project: Path) -> None:
    result = cli_runner.invoke(
        app, ["compile", "-m", str(test_project / "figmark.toml"), "-t", "svelte"]
    )
    assert result.exit_code == 1
    assert "Unknown output target" in result.stderr


def test_compile_missing_document(
    cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    result = cli_runner.invoke(app, ["compile"])
    assert result.exit_code == 1
    assert "No design document" in result.stderr


def test_compile_invalid_json(cli_runner: CliRunner, tmp_path: Path) -> None:
    document = tmp_path / "broken.json"
    document.write_text("{")
    result = cli_runner.invoke(app, ["compile", str(document)])
    assert result.exit_code == 1
    assert "not valid JSON" in result.stderr


def test_inspect(cli_runner: CliRunner, test_project: Path) -> None:
    result = cli_runner.invoke(app, ["inspect", "-m", str(test_project / "figmark.toml")])
    assert result.exit_code == 0
    assert "Hero Card" in result.stdout
    assert "<Button>" in result.stdout
    assert "4 element(s), 1 bound component(s)" in result.stdout


def test_plan(cli_runner: CliRunner, test_project: Path) -> None:
    result = cli_runner.invoke(app, ["plan", "-m", str(test_project / "figmark.toml")])
    assert result.exit_code == 0
    assert "Prefetch Plan" in result.stdout
    assert "Instance" in result.stdout
    assert "6:1" in result.stdout


def test_plan_nothing(cli_runner: CliRunner, tmp_path: Path) -> None:
    document = tmp_path / "empty.json"
    document.write_text(json.dumps({"id": "0:1", "type": "FRAME"}))
    result = cli_runner.invoke(app, ["plan", str(document)])
    assert result.exit_code == 0
    assert "Nothing to prefetch" in result.stdout


def test_parse_url(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(
        app, ["parse-url", "https://www.figma.com/design/AbC123/File?node-id=1-2"]
    )
    assert result.exit_code == 0
    assert result.stdout == "file_key: AbC123\nnode_id: 1:2\n"


def test_parse_url_invalid(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["parse-url", "https://example.com/x"])
    assert result.exit_code == 1
    assert "Not a design file URL" in result.stderr


def test_compile_hidden_root_warns(cli_runner: CliRunner, tmp_path: Path) -> None:
    document = tmp_path / "hidden.json"
    document.write_text(json.dumps({"id": "0:1", "type": "FRAME", "visible": False}))
    result = cli_runner.invoke(app, ["compile", str(document)])
    assert result.exit_code == 0
    assert result.stdout == ""
    assert "is hidden" in result.stderr


def test_version_reports_package_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["-V"])
    assert result.exit_code == 0
    assert result.stdout.splitlines()[0] == f"figmark {__version__}"
