"""Structural event layer between the XML tokenizer and the tree builder.

Key Components:
    ElementStart, ElementEnd, Text: The structural event vocabulary
    EventReader: Produces events from strings, bytes, streams and chunks
"""

from .events import ElementEnd, ElementStart, Event, Text
from .reader import EventReader, local_name

__all__ = [
    "ElementEnd",
    "ElementStart",
    "Event",
    "Text",
    "EventReader",
    "local_name",
]
