"""SessionStore: in-memory symptom lists keyed by opaque session id, with idle expiry."""

from __future__ import annotations

import logging
import secrets
import time
from threading import Lock
from typing import Callable

from pydantic import ValidationError

from symptom_intake.models import SymptomReport

logger = logging.getLogger(__name__)

SESSION_ID_PREFIX = "session-"


class _SessionRecord:
    def __init__(self, now: float) -> None:
        self.symptoms: list[SymptomReport] = []
        self.lock = Lock()
        self.last_access = now


class SessionStore:
    """Accumulates symptom reports per session.

    Every operation is lenient: unknown or expired sessions read as empty and
    mutations on them never raise. Mutations of one session are serialized by
    that session's own lock; there is no store-wide lock.
    """

    def __init__(
        self,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: dict[str, _SessionRecord] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def _expired(self, record: _SessionRecord, now: float) -> bool:
        return self.ttl_seconds > 0 and now - record.last_access > self.ttl_seconds

    def _evict_if_expired(self, session_id: str, record: _SessionRecord, now: float) -> bool:
        # Eviction holds the record lock, so it never races a mutation in progress.
        with record.lock:
            if not self._expired(record, now) or self._sessions.get(session_id) is not record:
                return False
            self._sessions.pop(session_id, None)
            return True

    def _lookup(self, session_id: str, create: bool = False) -> _SessionRecord | None:
        now = self._clock()
        record = self._sessions.get(session_id)
        if record is not None and self._expired(record, now):
            if self._evict_if_expired(session_id, record, now):
                logger.info("Session %s expired.", session_id)
            record = self._sessions.get(session_id)
        if record is None:
            if not create:
                return None
            record = self._sessions.setdefault(session_id, _SessionRecord(now))
        record.last_access = now
        return record

    def create_session(self) -> str:
        session_id = SESSION_ID_PREFIX + secrets.token_urlsafe(16)
        self._sessions[session_id] = _SessionRecord(self._clock())
        logger.info("New session: %s", session_id)
        return session_id

    def has_session(self, session_id: str) -> bool:
        return self._lookup(session_id) is not None

    def add_symptom(
        self,
        session_id: str,
        name: str,
        duration: int | None = None,
        intensity: int | None = None,
    ) -> None:
        """Append a report unless one with the same name exists (duplicates are ignored, not merged).

        A blank session id or name is a no-op; no session is created for it.
        """
        if not session_id or not session_id.strip() or not name:
            logger.debug("Ignoring symptom add without session id or name.")
            return
        try:
            report = SymptomReport(name=name, duration=duration, intensity=intensity)
        except ValidationError as e:
            logger.warning("Ignoring invalid symptom report for %s: %s", session_id, e)
            return

        while True:
            record = self._lookup(session_id, create=True)
            with record.lock:
                if self._sessions.get(session_id) is not record:
                    # Evicted between lookup and lock; retry against a live record.
                    continue
                record.last_access = self._clock()
                if any(s.name == name for s in record.symptoms):
                    return
                record.symptoms.append(report)
                break
        logger.debug(
            "Symptom added to %s: %s (duration=%s, intensity=%s)",
            session_id,
            name,
            duration,
            intensity,
        )

    def remove_symptom(self, session_id: str, name: str) -> None:
        record = self._lookup(session_id)
        if record is None:
            return
        with record.lock:
            record.symptoms = [s for s in record.symptoms if s.name != name]
        logger.debug("Symptom removed from %s: %s", session_id, name)

    def get_symptoms(self, session_id: str) -> list[SymptomReport]:
        record = self._lookup(session_id)
        if record is None:
            return []
        with record.lock:
            return list(record.symptoms)

    def purge_expired(self) -> int:
        """Drop every expired session. Returns the number evicted."""
        now = self._clock()
        evicted = 0
        for session_id, record in list(self._sessions.items()):
            if self._expired(record, now) and self._evict_if_expired(session_id, record, now):
                evicted += 1
        if evicted:
            logger.info("Evicted %s expired session(s); %s live.", evicted, len(self._sessions))
        return evicted
