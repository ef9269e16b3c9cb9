"""Path assembly for every value leaf of a document.

The traversal is one iterative depth-first state machine::

    Start -> Visit(start)
    Visit(INTERNAL) -> Visit(child) for each child in document order
    Visit(LEAF)     -> emit row
    Visit(IGNORED)  -> stop, no descent
    Visit(EMPTY)    -> stop

Paths from the document root are anchored with ``/``. When ``start_at_tag``
resolves to an element, paths start at that element and are prefixed with
``//`` instead. The legacy truncation strategy reaches the same shape by
trimming root-anchored paths after the fact.
"""

import time
from typing import List, Mapping, Optional, Tuple, Union

from xml_leaf_xpaths.shared import (
    DiagnosticSeverity,
    GenerationResult,
    StartStrategy,
    XPathConfig,
    XPathRow,
    get_logger,
    normalize_config,
)
from xml_leaf_xpaths.tree import XMLDocument, XMLElement
from xml_leaf_xpaths.xpath.classifier import NodeKind, classify, leaf_text
from xml_leaf_xpaths.xpath.predicates import build_segment
from xml_leaf_xpaths.xpath.siblings import sibling_index, sibling_indices

ANCHORED_LEAD = "/"
ROOTED_LEAD = "//"
MS_PER_SECOND = 1000

TreeInput = Union[XMLDocument, XMLElement]


def split_segments(path: str) -> List[str]:
    """Split a path on ``/`` separators that are outside predicates.

    Slashes inside brackets or quoted literals belong to the segment, so
    ``/d:a[@href="x/y"]/d:b`` splits into two segments. Empty pieces produced
    by a leading ``//`` are dropped.
    """
    segments: List[str] = []
    current: List[str] = []
    depth = 0
    quoted = False

    for char in path:
        if char == '"' and depth > 0:
            quoted = not quoted
        elif not quoted:
            if char == "[":
                depth += 1
            elif char == "]" and depth > 0:
                depth -= 1
            elif char == "/" and depth == 0:
                if current:
                    segments.append("".join(current))
                current = []
                continue
        current.append(char)

    if current:
        segments.append("".join(current))
    return segments


def segment_local_name(segment: str) -> str:
    """Local element name of a segment, without prefix or predicates."""
    name = segment.split("[", 1)[0]
    if ":" in name:
        name = name.split(":", 1)[1]
    return name


def truncate_path(path: str, start_at_tag: Optional[str], namespace: str) -> str:
    """Re-root ``path`` at its first segment named ``start_at_tag``.

    An exact local-name match wins; only when no segment matches exactly is
    the first case-insensitive match used, mirroring start element lookup.
    Segments kept without a namespace prefix receive ``namespace``. Paths
    without a matching segment are returned unchanged.
    """
    if not start_at_tag:
        return path

    segments = split_segments(path)
    names = [segment_local_name(segment) for segment in segments]
    wanted = start_at_tag.lower()
    position = next((i for i, name in enumerate(names) if name == start_at_tag), None)
    if position is None:
        position = next((i for i, name in enumerate(names) if name.lower() == wanted), None)
    if position is None:
        return path

    kept = [
        segment if ":" in segment.split("[", 1)[0] else f"{namespace}:{segment}"
        for segment in segments[position:]
    ]
    return ROOTED_LEAD + "/".join(kept)


class XPathGenerator:
    """Generate ``(text, path)`` rows for every value leaf of a tree.

    One generator can be reused for any number of documents; it keeps no
    state between runs.

    Examples:
        >>> from xml_leaf_xpaths.tree import parse_string
        >>> doc = parse_string('<root><item id="7"><name>Widget</name></item></root>')
        >>> gen = XPathGenerator({"attributesToIncludeInPath": ["id"]})
        >>> gen.generate(doc).paths
        ['/d:root[1]/d:item[@id="7"][1]/d:name[d:name="Widget"][1]']
    """

    def __init__(
        self,
        config: Optional[Union[XPathConfig, Mapping]] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = normalize_config(config)
        self.correlation_id = correlation_id
        self.logger = get_logger(
            __name__, correlation_id, "assembler", trace_enabled=self.config.debug
        )

    def resolve_start(self, root: XMLElement) -> Optional[XMLElement]:
        """Find the element named by ``start_at_tag``.

        Lookups run in order until one succeeds: local name in any namespace,
        exact qualified tag (as given, then with the configured prefix), and
        finally a case-insensitive local-name search.
        """
        tag = self.config.start_at_tag
        if tag is None:
            return None

        self.logger.trace("Searching start tag", extra={"start_at_tag": tag})
        node = root.find_by_local_name(tag)
        if node is None:
            self.logger.trace("Falling back to qualified tag lookup")
            node = root.find_by_tag(tag) or root.find_by_tag(self.config.qualify(tag))
        if node is None:
            self.logger.trace("Falling back to case-insensitive local name search")
            node = root.find_by_local_name_ci(tag)

        self.logger.trace(
            "Start tag resolution finished",
            extra={"start_at_tag": tag, "found": node is not None},
        )
        return node

    def path_for(self, element: XMLElement) -> str:
        """Root-anchored path of ``element``, built by walking its ancestors.

        If ``element`` is a value leaf its segment carries the leaf-value
        predicate, exactly as in the rows produced by :meth:`generate`.
        """
        value = leaf_text(element) if classify(element, self.config) is NodeKind.LEAF else None
        segments = [build_segment(element, self.config, sibling_index(element, self.config), value)]
        for ancestor in element.ancestors():
            segments.append(
                build_segment(ancestor, self.config, sibling_index(ancestor, self.config))
            )
        return ANCHORED_LEAD + "/".join(reversed(segments))

    def generate(self, tree: TreeInput) -> GenerationResult:
        """Run the traversal and collect rows in document order.

        Args:
            tree: Loaded document or any element to treat as the root

        Returns:
            GenerationResult with rows, metrics and diagnostics
        """
        start_time = time.time()
        config = self.config
        root = tree.root if isinstance(tree, XMLDocument) else tree
        result = GenerationResult(correlation_id=self.correlation_id)

        start, lead = root, ANCHORED_LEAD
        if config.start_at_tag is not None and config.start_strategy is StartStrategy.ROOTED:
            found = self.resolve_start(root)
            if found is None:
                result.add_diagnostic(
                    DiagnosticSeverity.WARNING,
                    f"Start tag '{config.start_at_tag}' not found, using document root",
                    "assembler",
                    {"start_at_tag": config.start_at_tag},
                )
                self.logger.warning(
                    "Start tag not found, using document root",
                    extra={"start_at_tag": config.start_at_tag},
                )
            else:
                start, lead = found, ROOTED_LEAD

        index = sibling_index(start, config)
        result.start_path = lead + build_segment(start, config, index)
        self._traverse(start, lead, index, result)

        if config.start_at_tag is not None and config.start_strategy is StartStrategy.TRUNCATE:
            result.rows = [
                XPathRow(row.text, truncate_path(row.path, config.start_at_tag, config.namespace))
                for row in result.rows
            ]

        result.metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
        self.logger.info(
            "Generated leaf paths",
            extra={
                "rows": result.row_count,
                "elements_visited": result.metrics.elements_visited,
                "processing_time_ms": result.metrics.processing_time_ms,
            },
        )
        return result

    def generate_rows(self, tree: TreeInput) -> List[XPathRow]:
        """Convenience wrapper returning only the rows."""
        return self.generate(tree).rows

    def _traverse(
        self, start: XMLElement, lead: str, index: int, result: GenerationResult
    ) -> None:
        config = self.config
        metrics = result.metrics
        stack: List[Tuple[XMLElement, str, int]] = [(start, lead, index)]

        while stack:
            node, lead, index = stack.pop()
            metrics.elements_visited += 1
            kind = classify(node, config)

            if kind is NodeKind.IGNORED:
                metrics.ignored_subtrees += 1
                self.logger.trace("Skipping ignored subtree", extra={"tag": node.tag})
                continue

            if kind is NodeKind.EMPTY:
                metrics.empty_elements += 1
                continue

            if kind is NodeKind.LEAF:
                text = leaf_text(node)
                path = lead + build_segment(node, config, index, text)
                result.rows.append(XPathRow(text, path))
                metrics.leaves_emitted += 1
                self.logger.trace("Emitted leaf", extra={"text": text, "path": path})
                continue

            child_lead = lead + build_segment(node, config, index) + "/"
            children = list(zip(node.children, sibling_indices(node, config)))
            for child, child_index in reversed(children):
                stack.append((child, child_lead, child_index))
