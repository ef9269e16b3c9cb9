"""Shared utilities for leaf XPath generation.

This module provides the configuration object, result types and logging
utilities used across the tree, xpath and api layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    LeafValuePlacement,
    SiblingIdentity,
    StartStrategy,
    XPathConfig,
    normalize_config,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    GenerationResult,
    TraversalMetrics,
    XPathRow,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "LeafValuePlacement",
    "SiblingIdentity",
    "StartStrategy",
    "XPathConfig",
    "normalize_config",
    "CorrelationLogger",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "GenerationResult",
    "TraversalMetrics",
    "XPathRow",
]
