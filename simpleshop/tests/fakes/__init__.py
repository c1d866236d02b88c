"""Fake implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeKeyValueStore: In-memory string store with call tracking
- FakeClipboard: Captured clipboard writes, optionally failing
- FakeExportSink: Captured file downloads
"""

from .clipboard import FakeClipboard
from .export import FakeExportSink
from .store import FakeKeyValueStore

__all__ = [
    "FakeClipboard",
    "FakeExportSink",
    "FakeKeyValueStore",
]
