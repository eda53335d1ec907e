"""Streaming delivery engine.

Delivers a complete reply text to a callback in growing prefixes, a fixed
number of characters per tick at a fixed interval, to simulate an assistant
typing its answer.

Session lifecycle per target id:

    Idle --start--> Active --tick--> Active ... --last tick--> Done
                      |
                      +--cancel / start(same id)--> Cancelled

On every tick ``delivered_length`` grows by ``chunk_size`` (capped at the
text length). A tick that reaches the full length releases the session and
calls ``on_partial(full_text, True)`` exactly once. Every earlier tick calls
``on_partial(prefix, False)``.

The engine keeps an explicit registry of target id -> session. Each session
holds the handle of its pending timer, so cancelling or superseding a
session always cancels its timer.

Thread Safety:
Not thread-safe. An engine and its scheduler run on one logical thread
(typically an asyncio event loop). Sessions for different target ids share
no state.

"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from enum import Enum, auto
from types import TracebackType
from typing import TypeAlias

from goteo.config import StreamConfig
from goteo.errors import StreamError
from goteo.streaming.scheduler import Scheduler, TimerHandle, running_loop_scheduler
from goteo.utils.logger import get_logger

logger = get_logger(__name__)

PartialCallback: TypeAlias = Callable[[str, bool], object]


class StreamState(Enum):
    """Lifecycle state of a StreamSession."""

    ACTIVE = auto()
    DONE = auto()
    CANCELLED = auto()


@dataclass(slots=True)
class StreamSession:
    """Progress of one in-flight delivery.

    Owned by the StreamingEngine that created it. Callers may read it but
    must not modify it.

    Attributes:
        full_text: Text being delivered
        target_id: Id of the message the text is delivered to
        on_partial: Callback receiving (prefix, is_done)
        chunk_size: Characters added per tick
        interval_ms: Delay between ticks
        delivered_length: Length of the prefix delivered so far
        state: Lifecycle state
        ticks: Ticks run so far
    """

    full_text: str
    target_id: Hashable
    on_partial: PartialCallback = field(repr=False)
    chunk_size: int
    interval_ms: float
    delivered_length: int = 0
    state: StreamState = StreamState.ACTIVE
    ticks: int = 0
    _handle: TimerHandle | None = field(default=None, repr=False)

    @property
    def delivered(self) -> str:
        """The prefix delivered so far."""
        return self.full_text[: self.delivered_length]

    def advance(self) -> int:
        """Grow the delivered prefix by one chunk and return its new length."""
        self.delivered_length = min(self.delivered_length + self.chunk_size, len(self.full_text))
        self.ticks += 1
        return self.delivered_length


class StreamingEngine:
    """Timer-driven delivery of texts to per-target callbacks.

    Usage:
        >>> from goteo.streaming import VirtualClock
        >>> clock = VirtualClock()
        >>> engine = StreamingEngine(scheduler=clock)
        >>> seen = []
        >>> _ = engine.start("hello", "msg-1", lambda text, done: seen.append((text, done)))
        >>> clock.run_until_idle()
        3
        >>> seen
        [('he', False), ('hell', False), ('hello', True)]

    Args:
        config: Chunk size and interval (defaults: 2 characters every 30 ms)
        scheduler: Timer source. Defaults to the asyncio loop running when
            a session starts.

    """

    __slots__ = ("_config", "_scheduler", "_sessions", "_closed")

    def __init__(
        self,
        config: StreamConfig | None = None,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._config = config or StreamConfig()
        self._scheduler = scheduler
        self._sessions: dict[Hashable, StreamSession] = {}
        self._closed = False

    @property
    def config(self) -> StreamConfig:
        return self._config

    def start(
        self, full_text: str, target_id: Hashable, on_partial: PartialCallback
    ) -> StreamSession:
        """Start delivering ``full_text`` to ``on_partial``.

        Any active session for ``target_id`` is cancelled first, so its
        callback never fires again.

        Args:
            full_text: Complete text to deliver
            target_id: Id of the message receiving the text
            on_partial: Called as ``on_partial(prefix, is_done)``

        Returns:
            The new session

        Raises:
            StreamError: If the engine is closed, or no scheduler was given
                and no asyncio loop is running.

        """
        if self._closed:
            raise StreamError(f"Cannot start stream for {target_id!r}: engine is closed")

        scheduler = self._scheduler or running_loop_scheduler()

        if self.cancel(target_id):
            logger.debug("Superseded stream for %r", target_id)

        session = StreamSession(
            full_text=full_text,
            target_id=target_id,
            on_partial=on_partial,
            chunk_size=self._config.chunk_size,
            interval_ms=self._config.interval_ms,
        )
        self._sessions[target_id] = session
        session._handle = scheduler.call_later(self._config.interval, self._tick, session, scheduler)
        logger.debug("Started stream for %r (%d chars)", target_id, len(full_text))
        return session

    start_streaming = start

    def cancel(self, target_id: Hashable) -> bool:
        """Stop the active session for ``target_id``.

        Idempotent: cancelling an unknown or finished id does nothing.

        Returns:
            True if a session was cancelled.
        """
        session = self._sessions.pop(target_id, None)
        if session is None:
            return False
        if session._handle is not None:
            session._handle.cancel()
            session._handle = None
        session.state = StreamState.CANCELLED
        logger.debug(
            "Cancelled stream for %r at %d/%d chars",
            target_id,
            session.delivered_length,
            len(session.full_text),
        )
        return True

    def close(self) -> None:
        """Cancel every active session and refuse new ones."""
        for target_id in list(self._sessions):
            self.cancel(target_id)
        self._closed = True

    def is_active(self, target_id: Hashable) -> bool:
        return target_id in self._sessions

    def active_ids(self) -> tuple[Hashable, ...]:
        return tuple(self._sessions)

    def get(self, target_id: Hashable) -> StreamSession | None:
        return self._sessions.get(target_id)

    def __enter__(self) -> StreamingEngine:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _tick(self, session: StreamSession, scheduler: Scheduler) -> None:
        # A timer that fired after its session was replaced
        if self._sessions.get(session.target_id) is not session:
            return

        delivered = session.advance()

        # State is settled before the callback runs; a raising callback
        # cannot leave the registry inconsistent.
        if delivered == len(session.full_text):
            del self._sessions[session.target_id]
            session._handle = None
            session.state = StreamState.DONE
            logger.debug("Finished stream for %r in %d ticks", session.target_id, session.ticks)
            session.on_partial(session.full_text, True)
            return

        session._handle = scheduler.call_later(self._config.interval, self._tick, session, scheduler)
        session.on_partial(session.full_text[:delivered], False)
