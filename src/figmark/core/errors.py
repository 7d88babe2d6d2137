"""
Error types for figmark document loading, configuration, and serialization.

The translation engine itself does not raise for malformed node content;
these exceptions belong to the loaders and outer surfaces around it.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class FigmarkError(Exception):
    """Base exception for all figmark errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class DocumentError(FigmarkError):
    """
    Raised when a design document cannot be turned into a root node.

    Examples:
    - Missing root node
    - Response envelope without a document
    - Malformed design-tool URL
    """

    pass


class SnapshotError(FigmarkError):
    """
    Raised when a prefetched asset, token, or binding snapshot is unusable.

    Examples:
    - Snapshot file missing or unreadable
    - Invalid JSON
    - JSON that does not match the snapshot schema
    """

    pass


class ConfigError(FigmarkError):
    """
    Raised when figmark.toml cannot be loaded.

    Examples:
    - TOML syntax errors
    - Unknown output target
    """

    pass


class SerializationError(FigmarkError):
    """Raised when an output target is unknown."""

    pass


@dataclass
class ErrorContext:
    """
    Where an error originated.

    Attributes:
        file: Path to the file being loaded, if any
        node_id: Design node id the error refers to, if any
    """

    file: Path | None = None
    node_id: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "document.json (node 12:34)"
        """
        parts: list[str] = []
        if self.file is not None:
            parts.append(str(self.file))
        if self.node_id:
            parts.append(f"(node {self.node_id})")
        return " ".join(parts) if parts else "<unknown>"
