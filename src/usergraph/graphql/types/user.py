"""
User GraphQL type definitions
"""

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...store import UserRecord


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: str
    name: str
    email: str

    @classmethod
    def from_record(cls, record: "UserRecord") -> "User":
        return cls(id=record.id, name=record.name, email=record.email)
