"""Result objects and diagnostic types for leaf XPath generation.

This module defines the immutable rows emitted for every value leaf, and the
result object that carries them together with traversal metrics and
diagnostics.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional

LEAF_ROW_KIND = "leaf"


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass(frozen=True)
class XPathRow:
    """One ``(text, path)`` result row for a value leaf.

    ``text`` is the trimmed, unescaped leaf text; escaping only ever happens
    inside ``path``.
    """

    text: str
    path: str
    kind: str = LEAF_ROW_KIND

    def __post_init__(self) -> None:
        """Validate row contents."""
        if not self.text:
            raise ValueError("Row text cannot be empty")
        if not self.path:
            raise ValueError("Row path cannot be empty")

    def as_line(self) -> str:
        """Render the row as a ``text : path`` line."""
        return f"{self.text} : {self.path}"

    def to_dict(self) -> Dict[str, str]:
        """Convert row to dictionary representation."""
        return {"text": self.text, "path": self.path, "type": self.kind}


@dataclass
class TraversalMetrics:
    """Counters collected during one traversal."""

    elements_visited: int = 0
    leaves_emitted: int = 0
    ignored_subtrees: int = 0
    empty_elements: int = 0
    processing_time_ms: float = 0.0

    @property
    def leaf_ratio(self) -> float:
        """Fraction of visited elements that produced a row."""
        if self.elements_visited == 0:
            return 0.0
        return self.leaves_emitted / self.elements_visited


@dataclass
class GenerationResult:
    """Rows produced by one run plus metrics and diagnostics."""

    rows: List[XPathRow] = field(default_factory=list)
    metrics: TraversalMetrics = field(default_factory=TraversalMetrics)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    start_path: Optional[str] = None
    correlation_id: Optional[str] = None

    @property
    def row_count(self) -> int:
        """Number of emitted rows."""
        return len(self.rows)

    @property
    def texts(self) -> List[str]:
        """Row texts in document order."""
        return [row.text for row in self.rows]

    @property
    def paths(self) -> List[str]:
        """Row paths in document order."""
        return [row.path for row in self.rows]

    def as_lines(self) -> List[str]:
        """Render every row as a ``text : path`` line."""
        return [row.as_line() for row in self.rows]

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Record a diagnostic entry for this run."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def get_diagnostics_by_severity(
        self, severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics filtered by severity level."""
        return [d for d in self.diagnostics if d.severity == severity]

    def summary(self) -> Dict[str, Any]:
        """Get a compact summary of the run."""
        return {
            "rows": self.row_count,
            "elements_visited": self.metrics.elements_visited,
            "ignored_subtrees": self.metrics.ignored_subtrees,
            "empty_elements": self.metrics.empty_elements,
            "processing_time_ms": self.metrics.processing_time_ms,
            "start_path": self.start_path,
            "warnings": len(self.get_diagnostics_by_severity(DiagnosticSeverity.WARNING)),
        }
