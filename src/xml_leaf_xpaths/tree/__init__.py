"""Element tree model and XML loading.

Key Components:
    XMLElement: Element with attributes, mixed text, children and a parent back-reference
    XMLDocument: Root document container with statistics
    parse_string / parse_bytes / parse_file: lxml-backed loaders
    XmlParseError: Raised for input that is not well-formed
"""

from .element import XMLDocument, XMLElement
from .loader import XmlParseError, from_lxml, parse_bytes, parse_file, parse_string

__all__ = [
    "XMLDocument",
    "XMLElement",
    "XmlParseError",
    "from_lxml",
    "parse_bytes",
    "parse_file",
    "parse_string",
]
