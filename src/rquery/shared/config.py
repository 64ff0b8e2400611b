"""Configuration for document loading.

``DocumentConfig`` is an immutable configuration object controlling how raw
input is fed to the XML tokenizer. Thread-safe due to the frozen dataclass
implementation, so one instance can be shared by concurrent loads.
"""

import codecs
import json
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Optional

from rquery.shared.errors import ConfigValidationError

DEFAULT_CHUNK_SIZE = 64 * 1024
LARGE_DOCUMENT_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class DocumentConfig:
    """Settings applied when reading a document into a tree.

    Attributes:
        chunk_size: Number of bytes handed to the tokenizer per step when
            reading streams and files
        encoding: Encoding override for byte and file input; ``None`` lets
            the tokenizer honour the document's own declaration
        huge_tree: Disable the tokenizer's safety limits on tree depth and
            text node size
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    encoding: Optional[str] = None
    huge_tree: bool = False

    def __post_init__(self) -> None:
        """Validate document configuration."""
        if not isinstance(self.chunk_size, int) or isinstance(self.chunk_size, bool):
            raise ConfigValidationError(
                "chunk_size must be an integer", field_name="chunk_size"
            )
        if self.chunk_size <= 0:
            raise ConfigValidationError("chunk_size must be > 0", field_name="chunk_size")
        if self.encoding is not None:
            try:
                codecs.lookup(self.encoding)
            except LookupError as e:
                raise ConfigValidationError(
                    f"Unknown encoding: {self.encoding}", field_name="encoding"
                ) from e

    def override(self, **kwargs: Any) -> "DocumentConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Keyword arguments for configuration fields to override

        Returns:
            New DocumentConfig instance with overrides applied

        Raises:
            ConfigValidationError: If an unknown field is given or a value is invalid
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration field(s): {', '.join(unknown)}",
                field_name=unknown[0],
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Serialize configuration to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentConfig":
        """Create configuration from a dictionary; unknown keys are rejected."""
        return cls().override(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "DocumentConfig":
        """Create configuration from a JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON configuration: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("JSON configuration must be an object")
        return cls.from_dict(data)

    @classmethod
    def large_documents(cls) -> "DocumentConfig":
        """Preset for very large or very deeply nested documents."""
        return cls(chunk_size=LARGE_DOCUMENT_CHUNK_SIZE, huge_tree=True)
