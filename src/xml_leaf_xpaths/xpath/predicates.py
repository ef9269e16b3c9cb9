"""Predicate and segment construction.

A segment is the part of a path that addresses one element::

    d:item[@id="7" and @type="x"][d:code="A1"][2]
    |tag  |attribute clause       |child clause|index

Equality values are quoted with double quotes; a double quote inside a value
is doubled so the predicate stays well-formed. Nothing else is escaped.
"""

from typing import List, Optional

from xml_leaf_xpaths.shared import LeafValuePlacement, XPathConfig
from xml_leaf_xpaths.tree import XMLElement
from xml_leaf_xpaths.xpath.classifier import leaf_text


def escape_literal(value: str) -> str:
    """Double every double-quote character in ``value``."""
    return value.replace('"', '""')


def equality(lhs: str, value: str) -> str:
    """Build a single ``lhs="value"`` test."""
    return f'{lhs}="{escape_literal(value)}"'


def bracket(terms: List[str]) -> str:
    """Join terms with ``and`` inside one bracket pair; empty for no terms."""
    if not terms:
        return ""
    return "[" + " and ".join(terms) + "]"


def attribute_terms(node: XMLElement, config: XPathConfig) -> List[str]:
    """Equality tests for configured attributes present on ``node``."""
    return [
        equality(f"@{name}", node.attributes[name])
        for name in config.attributes_to_include_in_path
        if name in node.attributes
    ]


def attribute_clause(node: XMLElement, config: XPathConfig) -> str:
    """Bracketed attribute predicate clause, possibly empty."""
    return bracket(attribute_terms(node, config))


def _child_value(child: XMLElement, config: XPathConfig) -> Optional[str]:
    if config.is_ignored(child.local_name):
        return None
    return leaf_text(child)


def child_value_terms(node: XMLElement, config: XPathConfig) -> List[str]:
    """Equality tests built from child element values.

    With ``child_filters`` each listed name is looked up as a value-leaf child
    first and as an attribute of ``node`` second. Without it, the legacy mode
    (``include_child_value_predicates``) uses every value-leaf child.
    """
    terms: List[str] = []

    if config.child_filters is not None:
        for name in config.child_filters:
            value = None
            for child in node.children:
                if child.local_name == name:
                    value = _child_value(child, config)
                    if value is not None:
                        break
            if value is not None:
                terms.append(equality(config.qualify(name), value))
            elif name in node.attributes and name not in config.attributes_to_include_in_path:
                terms.append(equality(f"@{name}", node.attributes[name]))
        return terms

    if config.include_child_value_predicates:
        for child in node.children:
            value = _child_value(child, config)
            if value is not None:
                terms.append(equality(config.qualify(child.local_name), value))

    return terms


def render_index(local_name: str, index: int, config: XPathConfig) -> str:
    """Render the sibling index clause.

    Indices above one are always shown. Index one is shown only when forced
    (empty ``force_index_one_for`` forces every tag) and the tag is not listed
    in ``exceptions_to_index_one_forcing``.
    """
    if index != 1:
        return f"[{index}]"

    show = config.forces_all_index_one or local_name in config.force_index_one_for
    if local_name in config.exceptions_to_index_one_forcing:
        show = False
    return "[1]" if show else ""


def leaf_value_predicate(node: XMLElement, text: str, config: XPathConfig) -> str:
    """Bracketed ``[ns:tag="text"]`` predicate for a leaf's own value."""
    return "[" + equality(config.qualify(node.local_name), text) + "]"


def build_segment(
    node: XMLElement,
    config: XPathConfig,
    index: int,
    leaf_value: Optional[str] = None,
) -> str:
    """Build the path segment addressing ``node``.

    Args:
        node: Element the segment addresses
        config: Normalized configuration
        index: 1-based index among same-identity siblings
        leaf_value: Trimmed text when ``node`` is the emitted leaf itself

    Returns:
        Segment string without a leading slash
    """
    parts = [
        config.qualify(node.local_name),
        attribute_clause(node, config),
        bracket(child_value_terms(node, config)),
    ]

    value_predicate = ""
    if leaf_value is not None and config.include_leaf_value_predicate:
        value_predicate = leaf_value_predicate(node, leaf_value, config)

    index_clause = render_index(node.local_name, index, config)
    if config.leaf_value_placement is LeafValuePlacement.AFTER_INDEX:
        parts.extend([index_clause, value_predicate])
    else:
        parts.extend([value_predicate, index_clause])

    return "".join(parts)
