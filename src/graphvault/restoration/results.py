"""Result models for restore runs."""

from dataclasses import dataclass, field
from pathlib import Path

from graphvault.graph.models import RestoreType


@dataclass
class UnitFailure:
    """A failed unit of work: one dump file, or one schema type as a whole."""

    restore_type: RestoreType
    operation: str
    error: BaseException
    path: Path | None = None

    def __str__(self) -> str:
        """Return human-readable failure description."""
        location = f" ({self.path.name})" if self.path is not None else ""
        return f"{self.restore_type.tag}{location}: {self.operation} failed: {self.error}"


@dataclass
class RestoreSummary:
    """Outcome of a restore run.

    Attributes:
        counts: Records successfully restored per restore type
        duration_seconds: Wall-clock duration of the run
        failures: Every failed unit recorded during the run
        skipped_types: Types never started because an earlier type failed
    """

    counts: dict[RestoreType, int] = field(default_factory=dict)
    duration_seconds: float = 0.0
    failures: list[UnitFailure] = field(default_factory=list)
    skipped_types: list[RestoreType] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """True when no unit failed and no type was skipped."""
        return not self.failures and not self.skipped_types

    @property
    def total(self) -> int:
        """Total records restored across all types."""
        return sum(self.counts.values())

    def to_dict(self) -> dict:
        """Return JSON-serializable representation."""
        return {
            "succeeded": self.succeeded,
            "counts": {restore_type.tag: count for restore_type, count in self.counts.items()},
            "total": self.total,
            "duration_seconds": round(self.duration_seconds, 3),
            "failures": [
                {
                    "type": failure.restore_type.tag,
                    "file": str(failure.path) if failure.path is not None else None,
                    "operation": failure.operation,
                    "error": str(failure.error),
                    "error_type": type(failure.error).__name__,
                }
                for failure in self.failures
            ],
            "skipped_types": [restore_type.tag for restore_type in self.skipped_types],
        }
