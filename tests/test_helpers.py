"""
Tests for the in-memory store and the owner-scoped database helpers.
"""

from datetime import datetime, timedelta, timezone

import pytest

import database.helpers as helpers
from api.errors import ConflictError, NotFoundError
from database.models import Location
from database.session import Stores, init_stores
from database.store import InMemoryStore


class TestInMemoryStore:
    def test_put_get_delete(self):
        store = InMemoryStore()
        store.put("k", 1)
        assert store.get("k") == 1
        assert "k" in store
        assert store.delete("k") == 1
        assert store.get("k") is None
        assert store.delete("k") is None

    def test_find_keeps_insertion_order(self):
        store = InMemoryStore()
        for key, value in [("b", 2), ("a", 1), ("c", 3)]:
            store.put(key, value)
        assert store.find(lambda v: v != 1) == [2, 3]
        assert len(store) == 3

    def test_close_clears_stores(self):
        stores = init_stores()
        stores.users.put("x", object())
        stores.close()
        assert len(stores.users) == 0


class TestCredentialStore:
    def setup_method(self):
        self.stores = Stores()

    def test_create_and_lookup(self):
        user = helpers.create_user(self.stores.users, "a@x.com", "hash")
        assert helpers.get_user_by_email(self.stores.users, "a@x.com") == user
        assert user.created_at == user.updated_at

    def test_duplicate_email_conflicts(self):
        helpers.create_user(self.stores.users, "a@x.com", "hash")
        with pytest.raises(ConflictError):
            helpers.create_user(self.stores.users, "a@x.com", "hash2")
        assert len(self.stores.users) == 1

    def test_email_lookup_is_case_sensitive(self):
        helpers.create_user(self.stores.users, "a@x.com", "hash")
        assert helpers.get_user_by_email(self.stores.users, "A@x.com") is None

    def test_public_view_hides_hash(self):
        user = helpers.create_user(self.stores.users, "a@x.com", "hash")
        public = user.to_public()
        assert set(public) == {"id", "email", "createdAt", "updatedAt"}


class TestTodoHelpers:
    def setup_method(self):
        self.todos = Stores().todos

    def test_list_is_scoped_to_owner(self):
        mine = helpers.create_todo(self.todos, "alice", "one")
        helpers.create_todo(self.todos, "bob", "two")
        assert helpers.list_todos(self.todos, "alice") == [mine]

    def test_ids_not_reused_after_delete(self):
        first = helpers.create_todo(self.todos, "alice", "one")
        second = helpers.create_todo(self.todos, "alice", "two")
        helpers.delete_todo(self.todos, "alice", first.id)
        third = helpers.create_todo(self.todos, "alice", "three")
        assert third.id not in {first.id, second.id}

    def test_foreign_todo_is_invisible(self):
        todo = helpers.create_todo(self.todos, "bob", "private")
        assert helpers.get_owned_todo(self.todos, "alice", todo.id) is None
        with pytest.raises(NotFoundError):
            helpers.update_todo(self.todos, "alice", todo.id, {"title": "pwned"})
        with pytest.raises(NotFoundError):
            helpers.delete_todo(self.todos, "alice", todo.id)
        assert self.todos.get(todo.id).title == "private"

    def test_update_merges_and_refreshes_timestamp(self, monkeypatch):
        t0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
        monkeypatch.setattr(helpers, "utc_now", lambda: t0)
        todo = helpers.create_todo(self.todos, "alice", "a")

        monkeypatch.setattr(helpers, "utc_now", lambda: t0 + timedelta(seconds=5))
        updated = helpers.update_todo(
            self.todos,
            "alice",
            todo.id,
            {"completed": True, "location": Location(latitude=1, longitude=2.5), "user_id": "bob"},
        )
        assert updated.title == "a"
        assert updated.completed is True
        assert updated.location.longitude == 2.5
        assert updated.user_id == "alice"
        assert updated.created_at == t0
        assert updated.updated_at == t0 + timedelta(seconds=5)

    def test_delete_returns_snapshot(self):
        todo = helpers.create_todo(self.todos, "alice", "a", photo_uri="file://x.jpg")
        removed = helpers.delete_todo(self.todos, "alice", todo.id)
        assert removed == todo
        with pytest.raises(NotFoundError):
            helpers.delete_todo(self.todos, "alice", todo.id)
