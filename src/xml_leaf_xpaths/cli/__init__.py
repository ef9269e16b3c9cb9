"""Command-line interface module for xml-leaf-xpaths.

This module provides the ``xml-xpaths`` command that turns an XML file into
``text : path`` lines or CSV rows.
"""

from .main import main

__all__ = ["main"]
