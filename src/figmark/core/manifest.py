"""
figmark.toml project manifest.

Example::

    [project]
    name = "landing-page"

    [snapshots]
    document = "snapshots/document.json"
    assets = "snapshots/assets.json"
    tokens = "snapshots/tokens.json"
    bindings = "snapshots/bindings.json"

    [output]
    target = "jsx"
    path = "build/LandingPage.jsx"

    [components]
    package = "rk-designsystem"
    name_map = { Body = "Paragraph", Title = "Heading" }
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .context import DEFAULT_KNOWN_EXPORTS, DEFAULT_NAME_MAP
from .errors import ConfigError, ErrorContext

MANIFEST_FILENAME = "figmark.toml"
OUTPUT_TARGETS = ("html", "page", "jsx")


@dataclass
class SnapshotPaths:
    """Prefetched input files, resolved against the manifest directory."""

    document: Path | None = None
    assets: Path | None = None
    tokens: Path | None = None
    bindings: Path | None = None


@dataclass
class OutputConfig:
    """Serializer selection and destination."""

    target: str = "html"  # "html" | "page" | "jsx"
    path: Path | None = None  # stdout when unset
    title: str | None = None
    indent: int = 2


@dataclass
class ComponentsConfig:
    """Target component package and vocabulary tables."""

    package: str = "rk-designsystem"
    known_exports: frozenset[str] | None = DEFAULT_KNOWN_EXPORTS  # None accepts any
    name_map: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_NAME_MAP))


@dataclass
class ProjectManifest:
    name: str = "figmark"
    snapshots: SnapshotPaths = field(default_factory=SnapshotPaths)
    output: OutputConfig = field(default_factory=OutputConfig)
    components: ComponentsConfig = field(default_factory=ComponentsConfig)


def _resolve(base: Path, value: str | None) -> Path | None:
    if not value:
        return None
    path = Path(value)
    return path if path.is_absolute() else base / path


def load_manifest(path: Path) -> ProjectManifest:
    """
    Parse a figmark.toml file.

    Raises:
        ConfigError: If the file is unreadable, not valid TOML, or names an
            unknown output target.
    """
    context = ErrorContext(file=path)
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read manifest: {e}", context) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", context) from e

    base = path.parent
    project = data.get("project", {})
    snapshots_data = data.get("snapshots", {})
    output_data = data.get("output", {})
    components_data = data.get("components", {})

    snapshots = SnapshotPaths(
        document=_resolve(base, snapshots_data.get("document")),
        assets=_resolve(base, snapshots_data.get("assets")),
        tokens=_resolve(base, snapshots_data.get("tokens")),
        bindings=_resolve(base, snapshots_data.get("bindings")),
    )

    target = output_data.get("target", "html")
    if target not in OUTPUT_TARGETS:
        raise ConfigError(
            f"Unknown output target '{target}'. Expected one of: {', '.join(OUTPUT_TARGETS)}",
            context,
        )
    indent = output_data.get("indent", 2)
    if not isinstance(indent, int) or indent < 0:
        raise ConfigError(f"output.indent must be a non-negative integer, got {indent!r}", context)

    output = OutputConfig(
        target=target,
        path=_resolve(base, output_data.get("path")),
        title=output_data.get("title"),
        indent=indent,
    )

    # An explicit empty list disables the allow-list
    known_exports: frozenset[str] | None = DEFAULT_KNOWN_EXPORTS
    if "known_exports" in components_data:
        listed = components_data["known_exports"]
        known_exports = frozenset(listed) if listed else None

    name_map = dict(DEFAULT_NAME_MAP)
    name_map.update(components_data.get("name_map", {}))

    components = ComponentsConfig(
        package=components_data.get("package", "rk-designsystem"),
        known_exports=known_exports,
        name_map=name_map,
    )

    return ProjectManifest(
        name=project.get("name", base.resolve().name or "figmark"),
        snapshots=snapshots,
        output=output,
        components=components,
    )


def find_manifest(start: Path) -> Path | None:
    """Return ``start/figmark.toml`` if it exists."""
    candidate = start / MANIFEST_FILENAME
    return candidate if candidate.is_file() else None
