"""
Real-time data streaming module for twelvedatapy.

This module provides the WebSocket price stream.
"""

from .price_stream import PriceStream
from .stream_state import StreamConnectionState

__all__ = ['PriceStream', 'StreamConnectionState']
