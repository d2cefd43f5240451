"""Profile storage backends and the per-user registry."""

from .profile_store import ProfileStore, InMemoryProfileStore, PostgresProfileStore
from .profile_repository import ProfileRepository

__all__ = [
    'ProfileStore',
    'InMemoryProfileStore',
    'PostgresProfileStore',
    'ProfileRepository',
]
