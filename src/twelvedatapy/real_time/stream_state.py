"""
Stream state module for twelvedatapy.

This module provides the StreamConnectionState enum for tracking the state of stream connections.
"""

from enum import Enum, auto

class StreamConnectionState(Enum):
    """Enum for stream connection states."""
    NOT_INITIALIZED = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    STOPPING = auto()
    DISCONNECTED = auto()
    ERROR = auto()
