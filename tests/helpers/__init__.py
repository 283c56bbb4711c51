"""Test helper utilities for goods return notifier tests."""

from .fakes import InMemoryDirectory, RecordingMessagesClient, StubSmsManager

__all__ = ["InMemoryDirectory", "RecordingMessagesClient", "StubSmsManager"]
