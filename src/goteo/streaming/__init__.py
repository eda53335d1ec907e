"""Simulated streaming of assistant replies.

- engine: StreamingEngine delivers a text in growing prefixes on a timer
- scheduler: Scheduler protocol, asyncio loop adapter, VirtualClock
- listener: DocumentStream re-parses each prefix for display

"""

from goteo.streaming.engine import StreamingEngine, StreamSession, StreamState
from goteo.streaming.listener import DocumentStream
from goteo.streaming.scheduler import (
    Scheduler,
    TimerHandle,
    VirtualClock,
    running_loop_scheduler,
)

__all__ = [
    "DocumentStream",
    "Scheduler",
    "StreamSession",
    "StreamState",
    "StreamingEngine",
    "TimerHandle",
    "VirtualClock",
    "running_loop_scheduler",
]
