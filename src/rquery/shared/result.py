"""Metrics recorded while building a document tree."""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class BuildMetrics:
    """Counters collected by one tree building operation."""

    processing_time_ms: float = 0.0
    events_processed: int = 0
    elements_created: int = 0
    characters_processed: int = 0
    max_depth: int = 0

    @property
    def elements_per_second(self) -> float:
        """Calculate elements built per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.elements_created * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary representation."""
        return asdict(self)
