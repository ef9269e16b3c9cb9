"""Classify elements for the traversal state machine."""

from enum import Enum, auto
from typing import Optional

from xml_leaf_xpaths.shared import XPathConfig
from xml_leaf_xpaths.tree import XMLElement


class NodeKind(Enum):
    """Traversal decision for one element."""

    IGNORED = auto()   # Skipped together with its subtree
    LEAF = auto()      # No child elements, non-empty trimmed text: emits a row
    INTERNAL = auto()  # Has child elements: traversal descends
    EMPTY = auto()     # No child elements and blank text: dead end


def leaf_text(node: XMLElement) -> Optional[str]:
    """Trimmed text of a value leaf, or None if ``node`` is not one."""
    if node.has_children:
        return None
    text = node.text_content.strip()
    return text or None


def classify(node: XMLElement, config: XPathConfig) -> NodeKind:
    """Decide how the traversal treats ``node``.

    The ignore list is checked first, so an ignored element is never emitted
    even when it would otherwise be a leaf.
    """
    if config.is_ignored(node.local_name):
        return NodeKind.IGNORED
    if node.has_children:
        return NodeKind.INTERNAL
    if leaf_text(node) is not None:
        return NodeKind.LEAF
    return NodeKind.EMPTY
