"""DTOs for the bulk delete use case."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BulkDeleteResult:
    """Outcome of a fully committed bulk delete."""

    deleted: int
    """Identifiers submitted in committed chunks."""

    chunks: list[int] = field(default_factory=list)
    """Size of each committed chunk, in commit order."""
