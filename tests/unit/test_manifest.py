"""Tests for figmark.core.manifest module."""

from pathlib import Path

import pytest

from figmark.core.context import DEFAULT_KNOWN_EXPORTS
from figmark.core.errors import ConfigError
from figmark.core.manifest import MANIFEST_FILENAME, find_manifest, load_manifest


def write_manifest(tmp_path: Path, content: str) -> Path:
    path = tmp_path / MANIFEST_FILENAME
    path.write_text(content)
    return path


class TestLoadManifest:
    """Parsing figmark.toml."""

    def test_defaults(self, tmp_path: Path) -> None:
        manifest = load_manifest(write_manifest(tmp_path, ""))
        assert manifest.name == tmp_path.name
        assert manifest.snapshots.document is None
        assert manifest.output.target == "html"
        assert manifest.output.indent == 2
        assert manifest.components.package == "rk-designsystem"
        assert manifest.components.known_exports == DEFAULT_KNOWN_EXPORTS
        assert manifest.components.name_map == {"Body": "Paragraph"}

    def test_full(self, tmp_path: Path) -> None:
        path = write_manifest(
            tmp_path,
            """
[project]
name = "landing"

[snapshots]
document = "snapshots/document.json"
assets = "/abs/assets.json"

[output]
target = "jsx"
path = "build/Landing.jsx"
title = "Landing"
indent = 4

[components]
package = "@acme/ui"
known_exports = ["Button", "Card"]
name_map = { Title = "Heading" }
""",
        )
        manifest = load_manifest(path)
        assert manifest.name == "landing"
        assert manifest.snapshots.document == tmp_path / "snapshots/document.json"
        assert manifest.snapshots.assets == Path("/abs/assets.json")
        assert manifest.output.target == "jsx"
        assert manifest.output.path == tmp_path / "build/Landing.jsx"
        assert manifest.output.title == "Landing"
        assert manifest.output.indent == 4
        assert manifest.components.package == "@acme/ui"
        assert manifest.components.known_exports == frozenset({"Button", "Card"})
        assert manifest.components.name_map == {"Body": "Paragraph", "Title": "Heading"}

    def test_empty_known_exports_accepts_any(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, "[components]\nknown_exports = []\n")
        assert load_manifest(path).components.known_exports is None

    def test_unknown_target(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, '[output]\ntarget = "svelte"\n')
        with pytest.raises(ConfigError, match="Unknown output target 'svelte'"):
            load_manifest(path)

    @pytest.mark.parametrize("indent", ["-1", '"two"', "1.5"])
    def test_bad_indent(self, tmp_path: Path, indent: str) -> None:
        path = write_manifest(tmp_path, f"[output]\nindent = {indent}\n")
        with pytest.raises(ConfigError, match="output.indent"):
            load_manifest(path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, "[project\n")
        with pytest.raises(ConfigError, match="Invalid TOML") as exc_info:
            load_manifest(path)
        assert exc_info.value.context is not None
        assert exc_info.value.context.file == path

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read manifest"):
            load_manifest(tmp_path / "nope.toml")


class TestFindManifest:
    def test_found(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, "")
        assert find_manifest(tmp_path) == path

    def test_absent(self, tmp_path: Path) -> None:
        assert find_manifest(tmp_path) is None
