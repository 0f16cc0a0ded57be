from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ...store import UserRecord, UserStore

if TYPE_CHECKING:
    from ..types.user import User

logger = get_logger(__name__)


def get_store_from_info(info: strawberry.Info) -> UserStore:
    """Return the user store bound into the request context."""
    return info.context["store"]


def _to_graphql(record: UserRecord | None) -> User | None:
    if record is None:
        return None

    from ..types.user import User as UserType

    return UserType.from_record(record)


# Query resolvers
async def resolve_users(info: strawberry.Info) -> list[User]:
    store = get_store_from_info(info)
    return [_to_graphql(record) for record in store.list()]


async def resolve_user_by_id(info: strawberry.Info, id: str) -> User | None:
    store = get_store_from_info(info)
    record = store.find(id)
    if record is None:
        logger.info("User not found", user_id=id)
    return _to_graphql(record)


# Mutation resolvers
async def create_user(info: strawberry.Info, id: str, name: str, email: str) -> User:
    """
    Insert a new user.

    DuplicateUserError propagates so the response reports it in ``errors``.
    """
    store = get_store_from_info(info)
    record = store.insert(UserRecord(id=id, name=name, email=email))
    return _to_graphql(record)


async def update_user(
    info: strawberry.Info, id: str, name: str | None = None, email: str | None = None
) -> User | None:
    store = get_store_from_info(info)
    record = store.update(id, name=name, email=email)
    if record is None:
        logger.info("Update skipped, user not found", user_id=id)
    return _to_graphql(record)


async def delete_user(info: strawberry.Info, id: str) -> User | None:
    store = get_store_from_info(info)
    record = store.delete(id)
    if record is None:
        logger.info("Delete skipped, user not found", user_id=id)
    return _to_graphql(record)
