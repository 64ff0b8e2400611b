"""Error taxonomy for document loading and selector queries.

Every error raised by the package derives from ``RQueryError`` so callers can
catch the whole family at once, or pick the narrower ``DocumentError`` and
``SelectError`` branches.
"""

from typing import Optional

# Reported in place of a real character when selector input ended early
END_OF_INPUT = " "


class RQueryError(Exception):
    """Base exception for all rquery errors."""


class DocumentError(RQueryError):
    """Base exception for failures while constructing a Document."""


class UnableToOpenFileError(DocumentError):
    """Raised when the document source file cannot be opened."""

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        message = f"Unable to open file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path
        self.reason = reason


class ParseError(DocumentError):
    """Raised when the XML input is malformed.

    The message is the tokenizer's own error text, passed through verbatim,
    or a structural message from the tree builder.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnexpectedTokenError(RQueryError, ValueError):
    """Raised when a selector string contains an unexpected character.

    Attributes:
        token: The offending character, or a single space when the selector
            ended before a required character was found.
    """

    def __init__(self, token: str) -> None:
        if token == END_OF_INPUT:
            message = "Unexpected end of selector"
        else:
            message = f"Unexpected token {token!r} in selector"
        super().__init__(message)
        self.token = token

    @property
    def at_end_of_input(self) -> bool:
        """Check if the error was caused by the selector ending early."""
        return self.token == END_OF_INPUT

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnexpectedTokenError):
            return NotImplemented
        return self.token == other.token

    def __hash__(self) -> int:
        return hash(self.token)


class SelectError(RQueryError):
    """Base exception for failed select operations."""


class SelectorParseError(SelectError):
    """Raised when the selector passed to a query cannot be parsed."""

    def __init__(self, selector: str, error: UnexpectedTokenError) -> None:
        super().__init__(f"Invalid selector {selector!r}: {error}")
        self.selector = selector
        self.error = error


class NoMatchError(SelectError):
    """Raised by ``select`` when a valid selector matches nothing."""

    def __init__(self, selector: str) -> None:
        super().__init__(f"No element matches selector {selector!r}")
        self.selector = selector


class ConfigError(RQueryError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError, ValueError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.field_name = field_name
