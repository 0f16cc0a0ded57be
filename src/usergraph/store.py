"""
In-memory user record store guarded by a single lock.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from pydantic import BaseModel, Field

from .logging import get_logger

logger = get_logger(__name__)


class UserRecord(BaseModel):
    """A stored user."""

    id: str = Field(..., description="Logical primary key supplied by the caller")
    name: str
    email: str


class UserStoreError(Exception):
    """Base exception for store operations."""


class DuplicateUserError(UserStoreError):
    """Raised when inserting a user whose id is already present."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User with id '{user_id}' already exists")


class UserStore:
    """
    Ordered collection of user records.

    Every operation holds the lock for its whole scan and mutation and never
    suspends while holding it. Callers only ever receive copies, so records
    returned from one call are not affected by later mutations.
    """

    def __init__(self, users: Iterable[UserRecord] | None = None):
        self._lock = threading.Lock()
        self._users: list[UserRecord] = []
        # Initial records are loaded silently; only runtime inserts are logged
        with self._lock:
            for user in users or ():
                if self._index_of(user.id) is not None:
                    raise DuplicateUserError(user.id)
                self._users.append(user.model_copy())

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def _index_of(self, user_id: str) -> int | None:
        # Caller must hold the lock
        for index, user in enumerate(self._users):
            if user.id == user_id:
                return index
        return None

    def list(self) -> list[UserRecord]:
        """Return a snapshot of all users in insertion order."""
        with self._lock:
            return [user.model_copy() for user in self._users]

    def find(self, user_id: str) -> UserRecord | None:
        """Return the user with the given id, or None."""
        with self._lock:
            index = self._index_of(user_id)
            if index is None:
                return None
            return self._users[index].model_copy()

    def insert(self, user: UserRecord) -> UserRecord:
        """
        Append a user to the store.

        Raises:
            DuplicateUserError: If a user with the same id already exists
        """
        with self._lock:
            if self._index_of(user.id) is not None:
                raise DuplicateUserError(user.id)
            stored = user.model_copy()
            self._users.append(stored)

        logger.info("User created", user_id=user.id)
        return stored.model_copy()

    def update(
        self, user_id: str, name: str | None = None, email: str | None = None
    ) -> UserRecord | None:
        """
        Overwrite the supplied fields of an existing user.

        Fields passed as None are left unchanged. Returns the updated user,
        or None if no user has the given id.
        """
        with self._lock:
            index = self._index_of(user_id)
            if index is None:
                return None

            user = self._users[index]
            if name is not None:
                user.name = name
            if email is not None:
                user.email = email
            updated = user.model_copy()

        logger.info(
            "User updated",
            user_id=user_id,
            name_changed=name is not None,
            email_changed=email is not None,
        )
        return updated

    def delete(self, user_id: str) -> UserRecord | None:
        """Remove and return the user with the given id, or None."""
        with self._lock:
            index = self._index_of(user_id)
            if index is None:
                return None
            removed = self._users.pop(index)

        logger.info("User deleted", user_id=user_id)
        return removed
