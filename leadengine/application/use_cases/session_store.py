"""Session store with per-session serialization and idle expiry."""

import asyncio
import contextlib
import copy
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncIterator, Callable, Optional

from leadengine.application.ports.session_repository import SessionRepository
from leadengine.domain.entities.session import MAX_MESSAGES, ChatMessage, Session
from leadengine.domain.exceptions import PersistenceError, SessionNotFoundError, ValidationError

DEFAULT_SESSION_TTL_SECONDS = 48 * 60 * 60

PATCHABLE_FIELDS = frozenset(
    {
        "current_service",
        "mentioned_services",
        "last_question",
        "service_context",
        "partial_contact_info",
        "contact_info",
    }
)


class _SessionLock:
    """Re-entrant lock owned by one asyncio task at a time."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._owner: Optional[asyncio.Task] = None
        self._depth = 0
        self._waiters = 0

    @property
    def held(self) -> bool:
        return self._owner is not None

    @property
    def in_use(self) -> bool:
        """True while an owner holds the lock or any task is queued for it."""
        return self.held or self._waiters > 0 or self._lock.locked()

    async def acquire(self) -> None:
        task = asyncio.current_task()
        if self._owner is task and task is not None:
            self._depth += 1
            return
        self._waiters += 1
        try:
            await self._lock.acquire()
        finally:
            self._waiters -= 1
        self._owner = task
        self._depth = 1

    def release(self) -> None:
        self._depth -= 1
        if self._depth == 0:
            self._owner = None
            self._lock.release()


class SessionStore:
    """
    Owns session records on top of a SessionRepository.

    All mutations of one session go through ``lock(session_id)``, which a
    chat turn holds for its whole duration. The lock is re-entrant for the
    task holding it so the store's own operations can be called inside it.
    Sessions handed out are detached copies; changes only become visible
    through ``apply_patch`` and ``append_turn``.
    """

    def __init__(
        self,
        repository: SessionRepository,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        max_messages: int = MAX_MESSAGES,
        retry_attempts: int = 1,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize session store.

        Args:
            repository: Backing session repository
            ttl_seconds: Idle time after which a session is expired
            max_messages: History cap per session
            retry_attempts: Extra write attempts after a PersistenceError
            logger: Optional logger function (session_id, event, **kwargs)
        """
        self._repository = repository
        self._ttl_seconds = ttl_seconds
        self._max_messages = max_messages
        self._retry_attempts = max(0, retry_attempts)
        self._logger = logger
        self._locks: dict[str, _SessionLock] = {}
        self._reaper_task: Optional[asyncio.Task] = None

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    @property
    def max_messages(self) -> int:
        return self._max_messages

    def _log(self, session_id: str, event: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(session_id, event, **kwargs)

    @contextlib.asynccontextmanager
    async def lock(self, session_id: str) -> AsyncIterator[None]:
        """
        Serialize work on one session.

        Args:
            session_id: Session identifier
        """
        session_lock = self._locks.setdefault(session_id, _SessionLock())
        await session_lock.acquire()
        try:
            yield
        finally:
            session_lock.release()

    def _drop_lock(self, session_id: str) -> None:
        lock = self._locks.get(session_id)
        if lock is not None and not lock.in_use:
            del self._locks[session_id]

    async def _save(self, session: Session) -> None:
        attempt = 0
        while True:
            try:
                await self._repository.save(session)
                return
            except PersistenceError:
                if attempt >= self._retry_attempts:
                    raise
                attempt += 1
                self._log(session.session_id, "save_retry", attempt=attempt)

    async def _load(self, session_id: str) -> Optional[Session]:
        session = await self._repository.get(session_id)
        if session is not None and session.is_expired(self._ttl_seconds):
            await self._repository.delete(session_id)
            self._log(session_id, "expired_on_read")
            return None
        return session

    async def get(self, session_id: str) -> Optional[Session]:
        """
        Get a session without refreshing its activity time.

        Args:
            session_id: Session identifier

        Returns:
            Detached session copy, or None if it does not exist
        """
        return await self._load(session_id)

    async def get_or_create(self, session_id: str, business_id: str) -> Session:
        """
        Load a session, or create an empty one, and refresh its activity time.

        Args:
            session_id: Session identifier
            business_id: Business the session belongs to (used on create)

        Returns:
            Detached session copy

        Raises:
            PersistenceError: If the session cannot be written
        """
        async with self.lock(session_id):
            session = await self._load(session_id)
            if session is None:
                session = Session(session_id=session_id, business_id=business_id)
                self._log(session_id, "created", business_id=business_id)
            session.touch()
            await self._save(session)
            return copy.deepcopy(session)

    async def apply_patch(self, session_id: str, patch: dict[str, Any]) -> Session:
        """
        Replace context fields of an existing session.

        Args:
            session_id: Session identifier
            patch: Mapping of context field name to new value

        Returns:
            Detached copy of the updated session

        Raises:
            SessionNotFoundError: If the session does not exist
            ValidationError: If the patch names a field that cannot be patched
        """
        unknown = set(patch) - PATCHABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot patch session fields: {', '.join(sorted(unknown))}")

        async with self.lock(session_id):
            session = await self._load(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            for field_name, value in patch.items():
                setattr(session, field_name, copy.deepcopy(value))
            session.touch()
            await self._save(session)
            return copy.deepcopy(session)

    async def append_turn(
        self,
        session_id: str,
        user_message: ChatMessage,
        bot_message: ChatMessage,
    ) -> Session:
        """
        Append a user/assistant pair to the history.

        The oldest entries are evicted once the history exceeds the cap.

        Args:
            session_id: Session identifier
            user_message: Tagged user entry
            bot_message: Assistant reply entry

        Returns:
            Detached copy of the updated session

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        async with self.lock(session_id):
            session = await self._load(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            session.append_message(copy.deepcopy(user_message), self._max_messages)
            session.append_message(copy.deepcopy(bot_message), self._max_messages)
            session.touch()
            await self._save(session)
            return copy.deepcopy(session)

    async def expire(self, session_id: str) -> None:
        """
        Remove a session immediately.

        Args:
            session_id: Session identifier
        """
        async with self.lock(session_id):
            await self._repository.delete(session_id)
        self._drop_lock(session_id)
        self._log(session_id, "expired")

    async def reap_expired(self) -> list[str]:
        """
        Remove every session idle for longer than the TTL.

        Returns:
            Identifiers of removed sessions
        """
        cutoff = datetime.now(timezone.utc) - timedelta(seconds=self._ttl_seconds)
        removed = await self._repository.delete_expired(cutoff)
        for session_id in removed:
            self._drop_lock(session_id)
            self._log(session_id, "reaped")
        return removed

    def start_reaper(self, interval_seconds: float) -> None:
        """
        Start the periodic expiry task on the running event loop.

        Args:
            interval_seconds: Delay between sweeps
        """
        if self._reaper_task is not None and not self._reaper_task.done():
            return
        self._reaper_task = asyncio.create_task(self._reap_forever(interval_seconds))

    async def stop_reaper(self) -> None:
        """Cancel the periodic expiry task and wait for it to finish."""
        if self._reaper_task is None:
            return
        self._reaper_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._reaper_task
        self._reaper_task = None

    async def _reap_forever(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await self.reap_expired()
            except Exception as e:
                self._log("-", "reaper_error", error=str(e))
