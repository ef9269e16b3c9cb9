"""Public API for leaf XPath generation.

This module provides the progressive-disclosure entry points and the
exporters that render result rows.
"""

from .export import (
    format_row,
    render_lines,
    to_dataframe,
    to_records,
    write_csv,
    write_text,
)
from .generator import (
    generate,
    generate_from_file,
    generate_from_string,
    load_options,
    load_tree,
)

__all__ = [
    "generate",
    "generate_from_file",
    "generate_from_string",
    "load_options",
    "load_tree",
    "format_row",
    "render_lines",
    "to_dataframe",
    "to_records",
    "write_csv",
    "write_text",
]
