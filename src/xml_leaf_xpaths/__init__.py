"""XML Leaf XPaths.

Turns an XML document into a flat list of ``(text, path)`` rows, one per
text-bearing leaf element, where each path is a configurable XPath-like
locator that addresses exactly that leaf.

Progressive API Disclosure:
- Level 1: Simple functions - generate(), generate_from_string(), generate_from_file()
- Level 2: Reusable generator - XPathGenerator class
- Level 3: Building blocks - classify(), sibling_index(), build_segment()
"""

__version__ = "0.1.0"
__author__ = "XML Leaf XPaths Team"

# Progressive API disclosure - Level 1: Simple functions
from .api import generate, generate_from_file, generate_from_string

# Configuration and errors
from .shared.config import ConfigError, ConfigValidationError, XPathConfig

# Core result objects for all API levels
from .shared.result import GenerationResult, XPathRow
from .tree import XMLDocument, XMLElement, XmlParseError

# Progressive API disclosure - Level 2: Reusable generator
from .xpath import XPathGenerator

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple generation functions
    "generate",
    "generate_from_string",
    "generate_from_file",

    # Level 2: Reusable generator
    "XPathGenerator",

    # Result objects and data structures
    "GenerationResult",
    "XPathRow",
    "XMLDocument",
    "XMLElement",

    # Configuration and errors
    "XPathConfig",
    "ConfigError",
    "ConfigValidationError",
    "XmlParseError",
]
