"""Tests for the in-memory user store."""

import threading
from unittest.mock import patch

import pytest

from usergraph.seed_data import DEFAULT_USERS, create_default_store
from usergraph.store import DuplicateUserError, UserRecord, UserStore, UserStoreError


@pytest.mark.unit
class TestUserStore:
    """Test UserStore operations."""

    def test_seeded_store_lists_in_insertion_order(self, store: UserStore) -> None:
        users = store.list()

        assert [u.id for u in users] == ["1", "2"]
        assert users[0].name == "John Doe"
        assert users[1].email == "jane.doe@example.com"

    def test_empty_store(self) -> None:
        store = create_default_store(include_sample_data=False)

        assert store.list() == []
        assert len(store) == 0

    def test_insert_then_list_contains_user(self, store: UserStore) -> None:
        alice = UserRecord(id="3", name="Alice", email="a@x.com")

        returned = store.insert(alice)

        assert returned == alice
        assert alice in store.list()
        assert len(store) == 3

    def test_insert_duplicate_id_rejected(self, store: UserStore) -> None:
        with pytest.raises(DuplicateUserError, match="User with id '1' already exists"):
            store.insert(UserRecord(id="1", name="Other", email="o@x.com"))

        assert len(store) == 2
        assert store.find("1").name == "John Doe"

    def test_duplicate_error_is_store_error(self) -> None:
        err = DuplicateUserError("7")
        assert isinstance(err, UserStoreError)
        assert err.user_id == "7"

    def test_find_existing(self, store: UserStore) -> None:
        user = store.find("2")

        assert user is not None
        assert user.name == "Jane Doe"

    def test_find_missing_returns_none(self, store: UserStore) -> None:
        assert store.find("99") is None

    def test_update_name_only_keeps_email(self, store: UserStore) -> None:
        updated = store.update("1", name="Johnny")

        assert updated is not None
        assert updated.name == "Johnny"
        assert updated.email == "john.doe@example.com"
        assert store.find("1") == updated

    def test_update_email_only_keeps_name(self, store: UserStore) -> None:
        updated = store.update("2", email="jane@new.example")

        assert updated.name == "Jane Doe"
        assert updated.email == "jane@new.example"

    def test_update_missing_returns_none_without_mutation(self, store: UserStore) -> None:
        before = store.list()

        assert store.update("99", name="Nobody", email="n@x.com") is None
        assert store.list() == before

    def test_delete_returns_removed_user(self, store: UserStore) -> None:
        removed = store.delete("2")

        assert removed is not None
        assert removed.id == "2"
        assert store.find("2") is None
        assert [u.id for u in store.list()] == ["1"]

    def test_delete_missing_returns_none_without_mutation(self, store: UserStore) -> None:
        before = store.list()

        assert store.delete("99") is None
        assert store.list() == before

    def test_list_returns_snapshot(self, store: UserStore) -> None:
        snapshot = store.list()
        snapshot[0].name = "Mutated outside"
        snapshot.append(UserRecord(id="x", name="x", email="x"))

        assert store.find("1").name == "John Doe"
        assert len(store) == 2

    def test_find_returns_copy(self, store: UserStore) -> None:
        user = store.find("1")
        user.email = "changed@example.com"

        assert store.find("1").email == "john.doe@example.com"

    def test_inserted_record_is_copied(self) -> None:
        store = UserStore()
        record = UserRecord(id="1", name="A", email="a@x.com")
        store.insert(record)
        record.name = "B"

        assert store.find("1").name == "A"

    def test_seed_records_are_not_shared_between_stores(self) -> None:
        first = create_default_store()
        second = create_default_store()

        first.update("1", name="Changed")

        assert second.find("1").name == "John Doe"
        assert DEFAULT_USERS[0].name == "John Doe"

    def test_store_usable_after_failed_operation(self, store: UserStore) -> None:
        with pytest.raises(DuplicateUserError):
            store.insert(UserRecord(id="2", name="Dup", email="d@x.com"))

        # The lock was released; later operations proceed
        assert store.insert(UserRecord(id="3", name="C", email="c@x.com")).id == "3"
        assert store.delete("3") is not None

    def test_concurrent_inserts(self) -> None:
        store = UserStore()

        def worker(offset: int) -> None:
            for i in range(50):
                store.insert(UserRecord(id=f"{offset}-{i}", name="n", email="e"))

        threads = [threading.Thread(target=worker, args=(t,)) for t in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        users = store.list()
        assert len(users) == 400
        assert len({u.id for u in users}) == 400


@pytest.mark.unit
class TestUserStoreLogging:
    def test_initial_records_not_logged_as_created(self) -> None:
        with patch("usergraph.store.logger") as store_logger:
            store = UserStore(DEFAULT_USERS)

        assert len(store) == 2
        store_logger.info.assert_not_called()

    def test_runtime_insert_is_logged(self) -> None:
        store = UserStore()

        with patch("usergraph.store.logger") as store_logger:
            store.insert(UserRecord(id="1", name="A", email="a@x.com"))

        store_logger.info.assert_called_once_with("User created", user_id="1")

    def test_duplicate_initial_records_rejected(self) -> None:
        with pytest.raises(DuplicateUserError):
            UserStore([DEFAULT_USERS[0], DEFAULT_USERS[0]])
