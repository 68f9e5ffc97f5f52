"""Export artifact domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExportArtifact:
    """A serialized presence store ready to be written out as a download."""

    filename: str  # e.g. "presence-history-2024-01-01T10-15-00.json"
    content: str
