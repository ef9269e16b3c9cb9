"""Tests for result rows, metrics and diagnostics."""

import dataclasses

import pytest

from xml_leaf_xpaths.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    GenerationResult,
    TraversalMetrics,
    XPathRow,
)


class TestXPathRow:
    """Test XPathRow value object."""

    def test_row_defaults_to_leaf_kind(self):
        """Test rows carry the constant leaf kind."""
        row = XPathRow("Widget", "/d:root[1]")
        assert row.kind == "leaf"
        assert row.to_dict() == {"text": "Widget", "path": "/d:root[1]", "type": "leaf"}

    def test_row_as_line(self):
        """Test text : path rendering."""
        assert XPathRow("a", "/d:x").as_line() == "a : /d:x"

    def test_empty_text_rejected(self):
        """Test rows require text."""
        with pytest.raises(ValueError, match="Row text cannot be empty"):
            XPathRow("", "/d:x")

    def test_empty_path_rejected(self):
        """Test rows require a path."""
        with pytest.raises(ValueError, match="Row path cannot be empty"):
            XPathRow("a", "")

    def test_row_is_immutable(self):
        """Test rows cannot be mutated after creation."""
        row = XPathRow("a", "/d:x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            row.text = "b"  # type: ignore[misc]


class TestTraversalMetrics:
    """Test metric helpers."""

    def test_leaf_ratio(self):
        """Test leaf ratio calculation."""
        assert TraversalMetrics().leaf_ratio == 0.0
        assert TraversalMetrics(elements_visited=4, leaves_emitted=1).leaf_ratio == 0.25


class TestGenerationResult:
    """Test GenerationResult helpers."""

    def test_row_accessors(self):
        """Test texts, paths and lines follow row order."""
        result = GenerationResult(rows=[XPathRow("1", "/d:a"), XPathRow("2", "/d:b")])

        assert result.row_count == 2
        assert result.texts == ["1", "2"]
        assert result.paths == ["/d:a", "/d:b"]
        assert result.as_lines() == ["1 : /d:a", "2 : /d:b"]

    def test_add_diagnostic(self):
        """Test diagnostics inherit the correlation id."""
        result = GenerationResult(correlation_id="run-1")
        result.add_diagnostic(DiagnosticSeverity.WARNING, "missing", "assembler")

        warnings = result.get_diagnostics_by_severity(DiagnosticSeverity.WARNING)
        assert len(warnings) == 1
        assert warnings[0].correlation_id == "run-1"
        assert result.summary()["warnings"] == 1

    def test_diagnostic_validation(self):
        """Test empty diagnostic fields are rejected."""
        with pytest.raises(ValueError, match="Diagnostic message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "assembler")
        with pytest.raises(ValueError, match="Diagnostic component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "msg", "")
