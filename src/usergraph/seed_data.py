"""
Seed data for a freshly started store.
"""

from __future__ import annotations

from .logging import get_logger
from .store import UserRecord, UserStore

logger = get_logger(__name__)

DEFAULT_USERS: tuple[UserRecord, ...] = (
    UserRecord(id="1", name="John Doe", email="john.doe@example.com"),
    UserRecord(id="2", name="Jane Doe", email="jane.doe@example.com"),
)


def create_default_store(include_sample_data: bool = True) -> UserStore:
    """
    Build the store the server starts with.

    Args:
        include_sample_data: Whether to preload the default users

    Returns:
        A new UserStore, seeded unless ``include_sample_data`` is False
    """
    users = DEFAULT_USERS if include_sample_data else ()
    store = UserStore(users)
    logger.info("User store initialized", user_count=len(store))
    return store
