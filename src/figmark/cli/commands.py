"""Command implementations for the figmark CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table
from rich.tree import Tree

from figmark.core.context import (
    AssetSnapshot,
    BindingSnapshot,
    TokenSnapshot,
    TranslationContext,
    load_asset_snapshot,
    load_binding_snapshot,
    load_token_snapshot,
)
from figmark.core.errors import ConfigError, DocumentError, FigmarkError
from figmark.core.manifest import OUTPUT_TARGETS, ProjectManifest, find_manifest, load_manifest
from figmark.core.markup import MarkupNode
from figmark.core.nodes import Node, load_document_file
from figmark.engine.prefetch import parse_design_url, plan_prefetch
from figmark.engine.walker import translate
from figmark.serializers import serialize

from . import configure_logging
from .ui import console, print_error, print_success, print_warning

DocumentArg = Annotated[
    Path | None,
    typer.Argument(help="Design document JSON (defaults to [snapshots] document in figmark.toml)"),
]
ManifestOpt = Annotated[
    Path | None,
    typer.Option("--manifest", "-m", help="Path to figmark.toml (default: ./figmark.toml if present)"),
]
VerboseOpt = Annotated[bool, typer.Option("--verbose", help="Log engine degradations")]


# =============================================================================
# Loading helpers
# =============================================================================


def _manifest(path: Path | None) -> ProjectManifest:
    if path is not None:
        return load_manifest(path)
    found = find_manifest(Path.cwd())
    return load_manifest(found) if found else ProjectManifest()


def _document(path: Path | None, manifest: ProjectManifest) -> Node:
    path = path or manifest.snapshots.document
    if path is None:
        raise DocumentError("No design document given and none configured in figmark.toml")
    return load_document_file(path)


def _context(
    manifest: ProjectManifest,
    assets: Path | None,
    tokens: Path | None,
    bindings: Path | None,
) -> TranslationContext:
    assets = assets or manifest.snapshots.assets
    tokens = tokens or manifest.snapshots.tokens
    bindings = bindings or manifest.snapshots.bindings
    return TranslationContext(
        assets=load_asset_snapshot(assets) if assets else AssetSnapshot(),
        tokens=load_token_snapshot(tokens) if tokens else TokenSnapshot(),
        bindings=load_binding_snapshot(bindings) if bindings else BindingSnapshot(),
        known_exports=manifest.components.known_exports,
        name_map=manifest.components.name_map,
    )


# =============================================================================
# compile
# =============================================================================


def compile_command(
    document: DocumentArg = None,
    assets: Annotated[Path | None, typer.Option("--assets", help="Asset snapshot JSON")] = None,
    tokens: Annotated[Path | None, typer.Option("--tokens", help="Token snapshot JSON")] = None,
    bindings: Annotated[
        Path | None, typer.Option("--bindings", help="Component binding snapshot JSON")
    ] = None,
    target: Annotated[
        str | None, typer.Option("--target", "-t", help="Output target: html, page, or jsx")
    ] = None,
    out: Annotated[Path | None, typer.Option("--out", "-o", help="Output file (default: stdout)")] = None,
    manifest_path: ManifestOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """
    Compile a design document to markup.

    Flags override figmark.toml values.
    """
    configure_logging(verbose)
    try:
        manifest = _manifest(manifest_path)
        target = target or manifest.output.target
        if target not in OUTPUT_TARGETS:
            raise ConfigError(
                f"Unknown output target '{target}'. Expected one of: {', '.join(OUTPUT_TARGETS)}"
            )
        root = _document(document, manifest)
        context = _context(manifest, assets, tokens, bindings)
        markup = translate(root, context)
        if markup is None:
            print_warning(f"Root node {root.id or root.name} is hidden; output is empty")
        output = serialize(
            markup,
            target,
            title=manifest.output.title or root.name or None,
            package=manifest.components.package,
            indent=manifest.output.indent,
        )
    except FigmarkError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    destination = out or manifest.output.path
    if destination is None:
        typer.echo(output, nl=False)
        return

    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(output, encoding="utf-8")
    print_success(f"Wrote {target} output to {destination}")


# =============================================================================
# inspect
# =============================================================================


def _label(element: MarkupNode) -> str:
    node_id = element.node_id or "-"
    if element.binding is not None:
        props = ", ".join(f"{k}={v}" for k, v in element.binding.props.items())
        return f"[magenta]<{element.binding.target_component_name}>[/magenta] {node_id} [dim]{props}[/dim]"
    media = f" [cyan]{element.media}[/cyan]" if element.media != "none" else ""
    return f"[bold]<{element.tag}>[/bold] {node_id}{media} [dim]{len(element.styles)} decl[/dim]"


def _add_branch(tree: Tree, element: MarkupNode) -> None:
    branch = tree.add(_label(element))
    for child in element.children:
        _add_branch(branch, child)


def inspect_command(
    document: DocumentArg = None,
    assets: Annotated[Path | None, typer.Option("--assets", help="Asset snapshot JSON")] = None,
    tokens: Annotated[Path | None, typer.Option("--tokens", help="Token snapshot JSON")] = None,
    bindings: Annotated[
        Path | None, typer.Option("--bindings", help="Component binding snapshot JSON")
    ] = None,
    manifest_path: ManifestOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Show the translated element tree."""
    configure_logging(verbose)
    try:
        manifest = _manifest(manifest_path)
        root = _document(document, manifest)
        markup = translate(root, _context(manifest, assets, tokens, bindings))
    except FigmarkError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if markup is None:
        console.print("[dim]Root node is hidden; nothing to translate.[/dim]")
        return

    tree = Tree(f"[bold cyan]{root.name or root.id}[/bold cyan]")
    _add_branch(tree, markup)
    console.print(tree)

    elements = list(markup.iter_tree())
    bound = sum(1 for e in elements if e.binding is not None)
    console.print(f"\n[dim]{len(elements)} element(s), {bound} bound component(s)[/dim]")


# =============================================================================
# plan
# =============================================================================


def plan_command(
    document: DocumentArg = None,
    manifest_path: ManifestOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Show the assets, variables, and instances a compile will look up."""
    configure_logging(verbose)
    try:
        manifest = _manifest(manifest_path)
        root = _document(document, manifest)
    except FigmarkError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    plan = plan_prefetch(root)
    if plan.is_empty:
        console.print("[dim]Nothing to prefetch.[/dim]")
        return

    table = Table(title="Prefetch Plan")
    table.add_column("Kind", style="bold")
    table.add_column("Count", justify="right")
    table.add_column("IDs", style="dim")

    rows = [
        ("SVG", plan.vector_ids),
        ("Image", plan.image_ids),
        ("Video", plan.video_ids),
        ("Variable", plan.variable_ids),
        ("Instance", plan.instance_ids),
    ]
    for kind, ids in rows:
        if ids:
            table.add_row(kind, str(len(ids)), ", ".join(ids))

    console.print(table)


# =============================================================================
# parse-url
# =============================================================================


def parse_url_command(
    url: Annotated[str, typer.Argument(help="Design file URL")],
) -> None:
    """Print the file key and node id of a design URL."""
    try:
        file_key, node_id = parse_design_url(url)
    except FigmarkError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    typer.echo(f"file_key: {file_key}")
    typer.echo(f"node_id: {node_id or '-'}")
