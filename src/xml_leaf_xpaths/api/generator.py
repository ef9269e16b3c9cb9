"""Leaf XPath generation API with progressive disclosure.

Level 1 is the module-level functions (:func:`generate`,
:func:`generate_from_string`, :func:`generate_from_file`); level 2 is the
reusable :class:`~xml_leaf_xpaths.xpath.XPathGenerator`.

Unlike parsing helpers that never fail, configuration and well-formedness
problems propagate: a run with a bad configuration must not produce partial
output.
"""

import json
from pathlib import Path
from typing import Any, BinaryIO, Dict, Mapping, Optional, TextIO, Union

from xml_leaf_xpaths.shared import (
    ConfigError,
    GenerationResult,
    XPathConfig,
    get_logger,
    normalize_config,
)
from xml_leaf_xpaths.tree import (
    XMLDocument,
    XMLElement,
    parse_bytes,
    parse_file,
    parse_string,
)
from xml_leaf_xpaths.xpath import XPathGenerator

# Type definitions for input data
InputType = Union[str, bytes, BinaryIO, TextIO, Path, XMLDocument, XMLElement]
OptionsType = Union[XPathConfig, Mapping[str, Any], None]

PREVIEW_LENGTH = 100  # Max length for content preview in logs


def load_options(value: Optional[str]) -> Dict[str, Any]:
    """Load a raw options record from a JSON literal or a JSON file path.

    Args:
        value: JSON object text, or a path to a file containing one

    Returns:
        Raw options mapping (empty when ``value`` is None or blank)

    Raises:
        ConfigError: If the file cannot be read, the JSON is invalid, or the
            payload is not an object.

    Examples:
        >>> load_options('{"namespace": "x"}')
        {'namespace': 'x'}
    """
    if value is None or not value.strip():
        return {}

    candidate = value.strip()
    if candidate.endswith(".json") or (
        not candidate.startswith("{") and Path(candidate).is_file()
    ):
        try:
            text = Path(candidate).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read options file {candidate}: {e}") from e
    else:
        text = candidate

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON options: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Options must be a JSON object, got {type(data).__name__}"
        )
    return data


def load_tree(input_data: InputType) -> Union[XMLDocument, XMLElement]:
    """Turn any supported input into a tree, parsing when necessary.

    Strings are treated as XML content; pass a :class:`~pathlib.Path` to read
    a file.
    """
    if isinstance(input_data, (XMLDocument, XMLElement)):
        return input_data
    if isinstance(input_data, str):
        return parse_string(input_data)
    if isinstance(input_data, bytes):
        return parse_bytes(input_data)
    if isinstance(input_data, Path):
        return parse_file(input_data)
    if hasattr(input_data, "read"):
        content = input_data.read()
        source = getattr(input_data, "name", None)
        if isinstance(content, bytes):
            return parse_bytes(content, source=source)
        return parse_string(content, source=source)
    raise TypeError(f"Unsupported input type: {type(input_data).__name__}")


def generate(
    input_data: InputType,
    options: OptionsType = None,
    correlation_id: Optional[str] = None,
) -> GenerationResult:
    """Generate ``(text, path)`` rows for every value leaf of an XML input.

    Args:
        input_data: XML content, bytes, file object, Path, or a loaded tree
        options: XPathConfig, raw camelCase options mapping, or None
        correlation_id: Optional correlation ID for run tracking

    Returns:
        GenerationResult with rows in document order

    Raises:
        ConfigError: If the options are malformed (no traversal happens)
        XmlParseError: If the input is not well-formed XML

    Examples:
        >>> result = generate('<root><a>1</a><a>2</a></root>')
        >>> result.paths
        ['/d:root[1]/d:a[d:a="1"][1]', '/d:root[1]/d:a[d:a="2"][2]']
    """
    logger = get_logger(__name__, correlation_id, "generate")

    # Configuration errors abort before any input is touched
    config = normalize_config(options)

    logger.debug(
        "Starting generate operation",
        extra={"input_type": type(input_data).__name__},
    )
    tree = load_tree(input_data)
    return XPathGenerator(config, correlation_id).generate(tree)


def generate_from_string(
    xml_string: str,
    options: OptionsType = None,
    correlation_id: Optional[str] = None,
) -> GenerationResult:
    """Generate rows from XML text.

    Examples:
        >>> generate_from_string('<r><v>x</v></r>', {"forceIndexOneFor": ["r"]}).paths
        ['/d:r[1]/d:v[d:v="x"]']
    """
    logger = get_logger(__name__, correlation_id, "generate_from_string")
    logger.debug(
        "Starting string generate operation",
        extra={
            "content_length": len(xml_string),
            "preview": (
                xml_string[:PREVIEW_LENGTH] + "..."
                if len(xml_string) > PREVIEW_LENGTH else xml_string
            ),
        },
    )
    config = normalize_config(options)
    return XPathGenerator(config, correlation_id).generate(parse_string(xml_string))


def generate_from_file(
    file_path: Union[str, Path],
    options: OptionsType = None,
    correlation_id: Optional[str] = None,
) -> GenerationResult:
    """Generate rows from an XML file.

    Raises:
        FileNotFoundError: If the file does not exist
        XmlParseError: If the file is not well-formed XML
    """
    logger = get_logger(__name__, correlation_id, "generate_from_file")
    logger.debug("Starting file generate operation", extra={"file_path": str(file_path)})
    config = normalize_config(options)
    return XPathGenerator(config, correlation_id).generate(parse_file(file_path))
