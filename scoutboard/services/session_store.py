"""
Session persistence for logged-in raters.

A rater session lasts until the end of the day it was created in the
venue's timezone. Storage sits behind the SessionStore interface so the
rest of the client never touches a concrete backend.
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, time
from typing import Any, Dict, Optional

import pytz

from scoutboard.config import Config
from scoutboard.data_models.profile import RaterSession
from scoutboard.utils.redis_utils import RedisUtils

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Storage for a single serialized session."""

    @abstractmethod
    async def load(self) -> Optional[Dict[str, Any]]:
        """Return the stored session data, or None."""
        pass

    @abstractmethod
    async def save(self, data: Dict[str, Any]) -> None:
        """Replace the stored session data."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove the stored session."""
        pass


class InMemorySessionStore(SessionStore):
    """Process-local store, used for development and tests."""

    def __init__(self):
        self._data: Optional[str] = None

    async def load(self) -> Optional[Dict[str, Any]]:
        return json.loads(self._data) if self._data else None

    async def save(self, data: Dict[str, Any]) -> None:
        self._data = json.dumps(data)

    async def clear(self) -> None:
        self._data = None


class RedisSessionStore(SessionStore):
    """Session store backed by a Redis key."""

    def __init__(self, client, key: str = None):
        """
        Args:
            client: redis.asyncio client created with decode_responses=True
            key: Redis key for the session, defaults to Config.SESSION_KEY
        """
        self.client = client
        self.key = key or Config.SESSION_KEY

    async def load(self) -> Optional[Dict[str, Any]]:
        raw = await self.client.get(self.key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding unreadable session data under '{self.key}'")
            await self.client.delete(self.key)
            return None

    async def save(self, data: Dict[str, Any]) -> None:
        expiry = int(data.get('expiry') or 0)
        if expiry:
            # Let Redis drop the key at the same moment the session expires
            await self.client.set(self.key, json.dumps(data), pxat=expiry)
        else:
            await self.client.set(self.key, json.dumps(data))

    async def clear(self) -> None:
        await self.client.delete(self.key)


async def create_session_store() -> SessionStore:
    """Redis-backed store when Redis is reachable, otherwise in-memory."""
    client = await RedisUtils.create_redis_client()
    if client is None:
        logger.warning("Redis unavailable, sessions will not survive a restart")
        return InMemorySessionStore()
    return RedisSessionStore(client)


class SessionManager:
    """Creates, restores and ends rater sessions with day-based expiry."""

    def __init__(self, store: SessionStore, timezone_name: str = None):
        self.store = store
        self.timezone = pytz.timezone(timezone_name or Config.VENUE_TIMEZONE)

    def _now(self) -> datetime:
        return datetime.now(self.timezone)

    def end_of_day_ms(self, now: Optional[datetime] = None) -> int:
        """Epoch milliseconds of 23:59:59.999 on the current venue day."""
        now = now or self._now()
        local_date = now.astimezone(self.timezone).date()
        end_of_day = self.timezone.localize(datetime.combine(local_date, time(23, 59, 59, 999000)))
        return int(end_of_day.timestamp() * 1000)

    async def start(
        self,
        email: str,
        venue: str,
        first_name: str,
        last_name: str,
        is_new_login: Optional[bool] = None,
        now: Optional[datetime] = None
    ) -> RaterSession:
        """
        Persist session details.

        A new login gets a fresh end-of-day expiry; updating an existing
        session (e.g. switching venue) keeps the stored expiry. When
        is_new_login is None, the login is new if nothing is stored.
        """
        stored = await self.store.load()
        if is_new_login is None:
            is_new_login = stored is None

        if is_new_login:
            expiry = self.end_of_day_ms(now)
        else:
            expiry = int((stored or {}).get('expiry') or 0)

        session = RaterSession(
            email=email,
            venue=venue,
            first_name=first_name,
            last_name=last_name,
            expiry=expiry,
        )
        await self.store.save(session.to_dict())
        logger.debug(f"Saved session for {email} at {venue} (new login: {is_new_login})")
        return session

    async def restore(self, now: Optional[datetime] = None) -> Optional[RaterSession]:
        """Return the stored session, clearing it if it has expired."""
        data = await self.store.load()
        if not data:
            return None

        session = RaterSession.from_dict(data)
        now = now or self._now()
        if session.is_expired(int(now.timestamp() * 1000)):
            logger.info(f"Session for {session.email} expired, clearing")
            await self.store.clear()
            return None
        return session

    async def end(self) -> None:
        """Log out by removing the stored session."""
        await self.store.clear()
