"""Load XML text into the in-memory element tree.

Parsing is delegated to ``lxml.etree``; the resulting lxml tree is converted
into :class:`XMLElement` nodes so that the path-construction layer works on a
small, read-only model with explicit parent back-references.
"""

from pathlib import Path
from typing import Optional, Union

from lxml import etree

from xml_leaf_xpaths.shared import get_logger
from xml_leaf_xpaths.tree.element import XMLDocument, XMLElement

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


class XmlParseError(Exception):
    """Raised when the input is not well-formed XML."""

    def __init__(self, message: str, line: Optional[int] = None,
                 column: Optional[int] = None, source: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.source = source

    def __str__(self) -> str:
        location = ""
        if self.source:
            location = f"{self.source}: "
        if self.line is not None:
            location += f"line {self.line}"
            if self.column is not None:
                location += f", column {self.column}"
            location += ": "
        return f"XML parsing error: {location}{self.message}"


def _make_parser(encoding: Optional[str] = None) -> etree.XMLParser:
    return etree.XMLParser(
        encoding=encoding,
        no_network=True,
        resolve_entities="internal",
        remove_blank_text=False,
    )


def _qualified_name(name: str, prefix: Optional[str]) -> str:
    return f"{prefix}:{name}" if prefix else name


def _attribute_name(lxml_element: etree._Element, key: str) -> str:
    """Render a Clark-notation attribute key as ``prefix:local``."""
    if not key.startswith("{"):
        return key
    qname = etree.QName(key)
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"
    for prefix, uri in lxml_element.nsmap.items():
        if prefix and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _convert_node(lxml_element: etree._Element) -> XMLElement:
    qname = etree.QName(lxml_element)
    return XMLElement(
        tag=_qualified_name(qname.localname, lxml_element.prefix),
        attributes={
            _attribute_name(lxml_element, key): value
            for key, value in lxml_element.attrib.items()
        },
        text=lxml_element.text,
        namespace_uri=qname.namespace,
        sourceline=lxml_element.sourceline,
    )


def from_lxml(lxml_root: etree._Element) -> XMLElement:
    """Convert an lxml element (and its subtree) into an :class:`XMLElement`.

    Comments, processing instructions and entity nodes are dropped; the text
    that follows them is merged into the surrounding character data.
    """
    root = _convert_node(lxml_root)
    stack = [(lxml_root, root)]

    while stack:
        lxml_element, element = stack.pop()
        for lxml_child in lxml_element:
            if isinstance(lxml_child.tag, str):
                child = _convert_node(lxml_child)
                child.tail = lxml_child.tail
                element.add_child(child)
                stack.append((lxml_child, child))
            elif lxml_child.tail:
                if element.children:
                    last = element.children[-1]
                    last.tail = (last.tail or "") + lxml_child.tail
                else:
                    element.text = (element.text or "") + lxml_child.tail

    return root


def _build_document(data: bytes, source: Optional[str],
                    encoding: Optional[str] = None) -> XMLDocument:
    logger = get_logger(__name__, None, "loader")

    if not data.strip():
        raise XmlParseError("Document is empty", source=source)

    try:
        lxml_root = etree.fromstring(data, parser=_make_parser(encoding))
    except etree.XMLSyntaxError as e:
        line, column = getattr(e, "position", (None, None))
        logger.debug("XML syntax error", extra={"source": source, "error": str(e)})
        raise XmlParseError(e.msg or str(e), line, column, source) from e

    docinfo = lxml_root.getroottree().docinfo
    document = XMLDocument(
        root=from_lxml(lxml_root),
        encoding=(docinfo.encoding or "utf-8").lower(),
        version=docinfo.xml_version or "1.0",
        source=source,
    )
    logger.debug(
        "Loaded XML document",
        extra={"source": source, "total_elements": document.total_elements},
    )
    return document


def parse_string(xml_string: str, source: Optional[str] = None) -> XMLDocument:
    """Parse XML from a string.

    Any encoding declared in the document is ignored since the text is
    already decoded.

    Examples:
        >>> doc = parse_string('<root><item id="1">Hello</item></root>')
        >>> doc.root.children[0].attributes['id']
        '1'
    """
    return _build_document(xml_string.lstrip("\ufeff").encode("utf-8"), source, "utf-8")


def parse_bytes(data: bytes, source: Optional[str] = None) -> XMLDocument:
    """Parse XML from raw bytes, honouring the document's encoding declaration."""
    return _build_document(data, source)


def parse_file(file_path: Union[str, Path]) -> XMLDocument:
    """Parse an XML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        XmlParseError: If the file is not well-formed XML.
    """
    path = Path(file_path)
    return _build_document(path.read_bytes(), str(path))
