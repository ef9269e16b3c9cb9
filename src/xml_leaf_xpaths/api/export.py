"""Render result rows for consumers.

Rows can be rendered as ``text : path`` lines, written as a newline-delimited
text file or a CSV file, or converted into a pandas DataFrame.
"""

import csv
from pathlib import Path
from typing import Iterable, List, Union

from xml_leaf_xpaths.shared import XPathRow, get_logger

CSV_COLUMNS = ["text", "path", "type"]
LINE_SEPARATOR = " : "


def format_row(row: XPathRow) -> str:
    """Render one row as ``text : path``."""
    return f"{row.text}{LINE_SEPARATOR}{row.path}"


def render_lines(rows: Iterable[XPathRow]) -> str:
    """Render rows as newline-delimited ``text : path`` lines."""
    return "\n".join(format_row(row) for row in rows)


def write_text(rows: Iterable[XPathRow], output_path: Union[str, Path]) -> Path:
    """Write rows as ``text : path`` lines, creating parent directories.

    Returns:
        The path that was written
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_lines(rows), encoding="utf-8")
    get_logger(__name__, None, "export").debug(
        "Wrote text output", extra={"output_path": str(path)}
    )
    return path


def write_csv(
    rows: Iterable[XPathRow],
    output_path: Union[str, Path],
    include_type: bool = True,
) -> Path:
    """Write rows as CSV with a header line.

    Every field is quoted and embedded double quotes are doubled. The optional
    third column carries the row kind (always ``leaf``).

    Returns:
        The path that was written
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    columns = CSV_COLUMNS if include_type else CSV_COLUMNS[:2]

    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL, doublequote=True)
        writer.writerow(columns)
        for row in rows:
            values = [row.text, row.path, row.kind]
            writer.writerow(values[:len(columns)])

    get_logger(__name__, None, "export").debug(
        "Wrote CSV output",
        extra={"output_path": str(path), "include_type": include_type},
    )
    return path


def to_records(rows: Iterable[XPathRow]) -> List[dict]:
    """Convert rows to a list of ``{"text", "path", "type"}`` dictionaries."""
    return [row.to_dict() for row in rows]


def to_dataframe(rows: Iterable[XPathRow]):
    """Convert rows to a pandas DataFrame with ``text``, ``path`` and ``type`` columns.

    Requires the optional ``dataframe`` extra.

    Raises:
        ImportError: If pandas is not installed
    """
    try:
        import pandas as pd
    except ImportError as e:
        raise ImportError(
            "pandas is required for DataFrame export: "
            "pip install 'xml-leaf-xpaths[dataframe]'"
        ) from e

    return pd.DataFrame(to_records(rows), columns=CSV_COLUMNS)
