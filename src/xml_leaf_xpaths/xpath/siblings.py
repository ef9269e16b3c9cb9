"""Sibling disambiguation.

Siblings are grouped by an identity key and numbered 1, 2, ... in document
order within each group. With attribute identity, ``<a x="1"/><a x="2"/>
<a x="1"/>`` is numbered 1, 1, 2 because the attribute predicates already
tell the first two apart.
"""

from collections import Counter
from typing import Hashable, List

from xml_leaf_xpaths.shared import SiblingIdentity, XPathConfig
from xml_leaf_xpaths.tree import XMLElement
from xml_leaf_xpaths.xpath.predicates import attribute_clause


def sibling_identity(node: XMLElement, config: XPathConfig) -> Hashable:
    """Comparison key used to group ``node`` with its siblings."""
    if config.sibling_identity is SiblingIdentity.TAG:
        return node.local_name
    return (node.local_name, attribute_clause(node, config))


def sibling_indices(parent: XMLElement, config: XPathConfig) -> List[int]:
    """Indices for every child of ``parent``, aligned with ``parent.children``."""
    counters: Counter = Counter()
    indices = []
    for child in parent.children:
        key = sibling_identity(child, config)
        counters[key] += 1
        indices.append(counters[key])
    return indices


def sibling_index(node: XMLElement, config: XPathConfig) -> int:
    """1-based position of ``node`` among preceding same-identity siblings.

    The document root has no siblings and always gets index 1.
    """
    parent = node.parent
    if parent is None:
        return 1

    key = sibling_identity(node, config)
    index = 0
    for sibling in parent.children:
        if sibling_identity(sibling, config) == key:
            index += 1
        if sibling is node:
            return index
    # Detached from its parent's child list; treat as first occurrence
    return 1
