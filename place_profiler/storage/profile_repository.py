"""
ProfileRepository - Registry of live profile snapshots, one per user.

Wraps an injected ProfileStore. Writes for the same user are serialized
with a per-user lock; last writer wins. Reads take no lock because
snapshots are immutable and stores replace entries atomically.
"""

import logging
import threading
import weakref
from datetime import datetime, timedelta
from typing import List, Optional

from place_profiler.models.user_profile import UserProfile
from place_profiler.utils.constants import PROFILE_TTL_HOURS, STALE_AFTER_NEW_RECORDS
from .profile_store import InMemoryProfileStore, ProfileStore


logger = logging.getLogger(__name__)


class ProfileRepository:
    """
    Registry of UserProfile snapshots keyed by user id.

    Example usage:
        repository = ProfileRepository()          # in-memory
        repository = ProfileRepository(PostgresProfileStore())
    """

    def __init__(
        self,
        store: Optional[ProfileStore] = None,
        ttl: timedelta = timedelta(hours=PROFILE_TTL_HOURS),
        stale_after_new_records: int = STALE_AFTER_NEW_RECORDS,
    ) -> None:
        """
        Initialize repository.

        Args:
            store: Storage backend. Defaults to InMemoryProfileStore.
            ttl: Age after which a snapshot counts as stale
            stale_after_new_records: New history records after which a
                                     snapshot counts as stale
        """
        self.store = store if store is not None else InMemoryProfileStore()
        self.ttl = ttl
        self.stale_after_new_records = stale_after_new_records
        # Entries vanish once no thread holds or waits on the lock
        self._locks: "weakref.WeakValueDictionary[str, threading.Lock]" = (
            weakref.WeakValueDictionary()
        )
        self._locks_guard = threading.Lock()

    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[user_id] = lock
            return lock

    def save(self, profile: UserProfile) -> UserProfile:
        """
        Register a snapshot, replacing any prior one for the same user.

        Store errors propagate to the caller; other users are unaffected.
        """
        with self._lock_for(profile.user_id):
            replaced = self.store.get_profile(profile.user_id) is not None
            self.store.save_profile(profile)

        if replaced:
            logger.info("Replaced profile for user %s", profile.user_id)
        else:
            logger.info("Registered profile for user %s", profile.user_id)
        return profile

    def get(self, user_id: str) -> Optional[UserProfile]:
        return self.store.get_profile(user_id)

    def delete(self, user_id: str) -> bool:
        with self._lock_for(user_id):
            return self.store.delete_profile(user_id)

    def user_ids(self) -> List[str]:
        return self.store.list_user_ids()

    def __contains__(self, user_id: str) -> bool:
        return self.get(user_id) is not None

    def is_stale(
        self,
        user_id: str,
        now: Optional[datetime] = None,
        history_size: Optional[int] = None,
    ) -> bool:
        """
        Check whether the user's snapshot should be rebuilt.

        A snapshot is stale when it is missing, older than the TTL, or when
        history_size exceeds the record count it was built from by at least
        stale_after_new_records. Age is measured from last_updated, which
        is the latest history timestamp unless the builder was given a
        reference date. Nothing is rebuilt automatically.

        Args:
            user_id: User to check
            now: Reference time (defaults to datetime.now())
            history_size: Current number of history records, if known

        Returns:
            True if the caller should rebuild
        """
        profile = self.get(user_id)
        if profile is None:
            return True

        now = now or datetime.now()
        if now - profile.last_updated >= self.ttl:
            return True

        if history_size is not None:
            new_records = history_size - profile.source_record_count
            if new_records >= self.stale_after_new_records:
                return True

        return False
