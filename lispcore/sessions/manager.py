"""Session-scoped interpreter state.

The SessionManager owns one Environment per session and is the concurrency
boundary of the core:

- The registry (id -> Session) is guarded by a single lock, so creating,
  ending and looking up sessions are linearizable.
- Each Session carries its own re-entrant lock. Every operation that reads or
  mutates a session's Environment holds it, so concurrent requests addressed
  to the same session are serialised while different sessions run in parallel.
- Removing a session marks it closed under its own lock. An operation that
  fetched the session just before removal sees the flag once it gets the lock
  and fails with SessionNotFoundError instead of touching a dead Environment.
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from lispcore import Number
from lispcore.errors import SessionLimitError, SessionNotFoundError, UndefinedVariableError
from lispcore.interpreter import interpret
from lispcore.types.session import Session
from lispcore.types.symbol import Symbol

logger = logging.getLogger(__name__)


class SessionManager:
    """Creates, addresses and destroys isolated interpreter sessions."""

    def __init__(
        self,
        idle_timeout: Optional[float] = None,
        max_sessions: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.idle_timeout = idle_timeout
        self.max_sessions = max_sessions
        self._clock = clock
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    # --- Lifecycle ---
    def create_session(self) -> str:
        """Allocate a fresh, empty session and return its id."""
        now = self._clock()
        with self._lock:
            if self.max_sessions is not None and len(self._sessions) >= self.max_sessions:
                raise SessionLimitError(self.max_sessions)
            session_id = uuid.uuid4().hex
            while session_id in self._sessions:
                session_id = uuid.uuid4().hex
            self._sessions[session_id] = Session(session_id, created_at=now, last_access=now)
            count = len(self._sessions)
        logger.info("Session %s created (%d active)", session_id, count)
        return session_id

    def end_session(self, session_id: str) -> None:
        """Remove a session. Ending an unknown or already-ended session is a no-op."""
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            logger.debug("Session %s already ended", session_id)
            return
        # Wait for any in-flight evaluation before invalidating
        with session.lock:
            session.closed = True
        logger.info("Session %s ended", session_id)

    def close(self) -> None:
        """End every session."""
        for session_id in self.session_ids():
            self.end_session(session_id)

    # --- Operations on a session ---
    @contextmanager
    def _acquire(self, session_id: str) -> Iterator[Session]:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        with session.lock:
            if session.closed:
                raise SessionNotFoundError(session_id)
            session.touch(self._clock)
            yield session

    def evaluate(self, session_id: str, text: str) -> Number:
        """Read, build and evaluate `text` in the session's environment."""
        with self._acquire(session_id) as session:
            result = interpret(text, session.env)
        logger.debug("Session %s evaluated %r -> %r", session_id, text, result)
        return result

    def list_variables(self, session_id: str, prefix: Optional[str] = None) -> dict[str, Number]:
        """Snapshot of the session's bindings, optionally filtered by name prefix."""
        with self._acquire(session_id) as session:
            bindings = session.env.bindings()
        if prefix:
            bindings = {k: v for k, v in bindings.items() if k.startswith(prefix)}
        return bindings

    def get_variable(self, session_id: str, name: str) -> Number:
        with self._acquire(session_id) as session:
            # A name the reader could never produce can never be bound
            if not Symbol.is_valid_name(name):
                raise UndefinedVariableError(str(name))
            return session.env.lookup(Symbol(name))

    # --- Introspection ---
    def has_session(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def session_ids(self) -> list[str]:
        with self._lock:
            return list(self._sessions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    # --- Idle eviction ---
    def evict_idle(self, now: Optional[float] = None) -> list[str]:
        """End sessions idle for longer than `idle_timeout`; returns evicted ids.

        A session whose lock is held (an evaluation is in flight) is skipped;
        it is by definition not idle and will be reconsidered next time.
        """
        if self.idle_timeout is None:
            return []
        if now is None:
            now = self._clock()
        with self._lock:
            candidates = [
                s for s in self._sessions.values() if s.idle_for(now) > self.idle_timeout
            ]

        evicted = []
        for session in candidates:
            if not session.lock.acquire(blocking=False):
                continue
            try:
                # Re-check under the session lock: it may have been used meanwhile
                if session.closed or session.idle_for(now) <= self.idle_timeout:
                    continue
                with self._lock:
                    if self._sessions.get(session.id) is session:
                        del self._sessions[session.id]
                session.closed = True
                evicted.append(session.id)
            finally:
                session.lock.release()

        if evicted:
            logger.info("Evicted %d idle session(s): %s", len(evicted), ", ".join(evicted))
        return evicted
