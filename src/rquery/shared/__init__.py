"""Shared utilities for rquery.

This module provides the configuration object, error taxonomy, metrics and
logging helpers used across the tokenization, tree and selector layers.
"""

from .config import DocumentConfig
from .errors import (
    ConfigError,
    ConfigValidationError,
    DocumentError,
    NoMatchError,
    ParseError,
    RQueryError,
    SelectError,
    SelectorParseError,
    UnableToOpenFileError,
    UnexpectedTokenError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import BuildMetrics

__all__ = [
    "DocumentConfig",
    "ConfigError",
    "ConfigValidationError",
    "DocumentError",
    "NoMatchError",
    "ParseError",
    "RQueryError",
    "SelectError",
    "SelectorParseError",
    "UnableToOpenFileError",
    "UnexpectedTokenError",
    "CorrelationLogger",
    "get_logger",
    "BuildMetrics",
]
