"""Profile assembly."""

from .profile_builder import ProfileBuilder, build_user_profile

__all__ = [
    'ProfileBuilder',
    'build_user_profile',
]
