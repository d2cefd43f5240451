"""
ProfileStore - Storage backends for user profile snapshots.

InMemoryProfileStore is the default. PostgresProfileStore uses psycopg2
with connection pooling and keeps each snapshot as a JSONB document.
"""

import json
import os
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from psycopg2 import pool

from place_profiler.models.user_profile import UserProfile


class ProfileStore(ABC):
    """
    Key-value storage for UserProfile snapshots keyed by user id.

    Implementations replace whole snapshots; they never merge fields.
    """

    @abstractmethod
    def save_profile(self, profile: UserProfile) -> str:
        """Insert or replace the profile. Returns its user_id."""

    @abstractmethod
    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Return the stored profile, or None."""

    @abstractmethod
    def delete_profile(self, user_id: str) -> bool:
        """Delete a profile. Returns True if one existed."""

    @abstractmethod
    def list_user_ids(self) -> List[str]:
        """All user ids with a stored profile."""

    def close(self) -> None:
        """Release backend resources."""


class InMemoryProfileStore(ProfileStore):
    """
    Dict-backed store.

    A single dict assignment replaces the entry, so readers see either the
    old or the new snapshot.
    """

    def __init__(self) -> None:
        self._profiles: Dict[str, UserProfile] = {}

    def save_profile(self, profile: UserProfile) -> str:
        self._profiles[profile.user_id] = profile
        return profile.user_id

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return self._profiles.get(user_id)

    def delete_profile(self, user_id: str) -> bool:
        return self._profiles.pop(user_id, None) is not None

    def list_user_ids(self) -> List[str]:
        return list(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)


class PostgresProfileStore(ProfileStore):
    """
    PostgreSQL storage for user profiles.
    Why: Share snapshots between workers and survive restarts.
    """

    def __init__(self, connection_string: Optional[str] = None):
        """
        Initialize store with database connection.

        Args:
            connection_string: PostgreSQL connection string.
                             Defaults to DATABASE_URL env var.
        """
        self.connection_string = connection_string or os.getenv('DATABASE_URL')
        self._pool: Optional[pool.SimpleConnectionPool] = None

    def _get_connection(self):
        """Get a connection from the pool."""
        if not self._pool:
            self._pool = pool.SimpleConnectionPool(
                1, 10,  # min 1, max 10 connections
                self.connection_string
            )
        return self._pool.getconn()

    def _release_connection(self, conn):
        """Return connection to pool."""
        if self._pool:
            self._pool.putconn(conn)

    def init_schema(self) -> None:
        """Create the user_profiles table if it doesn't exist."""
        conn = self._get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute("""
                    CREATE TABLE IF NOT EXISTS user_profiles (
                        user_id TEXT PRIMARY KEY,
                        last_updated TIMESTAMP NOT NULL,
                        source_record_count INTEGER NOT NULL,
                        profile JSONB NOT NULL
                    );

                    CREATE INDEX IF NOT EXISTS idx_user_profiles_last_updated
                    ON user_profiles(last_updated DESC);
                """)
                conn.commit()
        finally:
            self._release_connection(conn)

    def save_profile(self, profile: UserProfile) -> str:
        """
        Save or replace a user profile.

        Args:
            profile: UserProfile to save

        Returns:
            user_id of saved profile
        """
        conn = self._get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO user_profiles (
                        user_id, last_updated, source_record_count, profile
                    ) VALUES (%s, %s, %s, %s)
                    ON CONFLICT (user_id) DO UPDATE SET
                        last_updated = EXCLUDED.last_updated,
                        source_record_count = EXCLUDED.source_record_count,
                        profile = EXCLUDED.profile
                """, (
                    profile.user_id,
                    profile.last_updated,
                    profile.source_record_count,
                    json.dumps(profile.to_dict()),
                ))
                conn.commit()
                return profile.user_id
        finally:
            self._release_connection(conn)

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """
        Retrieve a user profile by ID.

        Args:
            user_id: Id of profile to retrieve

        Returns:
            UserProfile if found, None otherwise
        """
        conn = self._get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT profile FROM user_profiles WHERE user_id = %s",
                    (user_id,)
                )

                row = cur.fetchone()
                if not row:
                    return None

                data = row[0]
                # psycopg2 decodes JSONB to dict; plain JSON text needs loading
                if isinstance(data, str):
                    data = json.loads(data)
                return UserProfile.from_dict(data)
        finally:
            self._release_connection(conn)

    def delete_profile(self, user_id: str) -> bool:
        """
        Delete a user profile.

        Args:
            user_id: Id of profile to delete

        Returns:
            True if deleted, False if not found
        """
        conn = self._get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM user_profiles WHERE user_id = %s",
                    (user_id,)
                )
                conn.commit()
                return cur.rowcount > 0
        finally:
            self._release_connection(conn)

    def list_user_ids(self) -> List[str]:
        conn = self._get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute("SELECT user_id FROM user_profiles ORDER BY user_id")
                return [row[0] for row in cur.fetchall()]
        finally:
            self._release_connection(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool:
            self._pool.closeall()
            self._pool = None
