"""Leaf path construction.

Key Components:
    classify: Leaf classifier (ignored, leaf, internal, empty)
    sibling_index / sibling_indices: Sibling disambiguator
    build_segment: Predicate builder for one path segment
    XPathGenerator: Path assembler driving the traversal
    truncate_path: Legacy start-tag truncation of finished paths
"""

from .assembler import (
    XPathGenerator,
    segment_local_name,
    split_segments,
    truncate_path,
)
from .classifier import NodeKind, classify, leaf_text
from .predicates import (
    attribute_clause,
    build_segment,
    child_value_terms,
    escape_literal,
    render_index,
)
from .siblings import sibling_identity, sibling_index, sibling_indices

__all__ = [
    "XPathGenerator",
    "segment_local_name",
    "split_segments",
    "truncate_path",
    "NodeKind",
    "classify",
    "leaf_text",
    "attribute_clause",
    "build_segment",
    "child_value_terms",
    "escape_literal",
    "render_index",
    "sibling_identity",
    "sibling_index",
    "sibling_indices",
]
