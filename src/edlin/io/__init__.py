"""Injected capabilities: command input, message output, named resources."""

from .resources import FileResourceStore, MemoryResourceStore, ResourceStore
from .sinks import CallbackMessageSink, MessageSink, StreamMessageSink
from .sources import (
    ChunkedLineSource,
    IterableLineSource,
    LineSource,
    QueueLineSource,
    StreamLineSource,
)

__all__ = [
    "ChunkedLineSource",
    "IterableLineSource",
    "LineSource",
    "QueueLineSource",
    "StreamLineSource",
    "CallbackMessageSink",
    "MessageSink",
    "StreamMessageSink",
    "FileResourceStore",
    "MemoryResourceStore",
    "ResourceStore",
]
