"""Tests for ``followgraph.core.repositories.connections.EdgeRepository``."""

from __future__ import annotations

import datetime

import pytest

from followgraph.core.errors import ConstraintViolationError
from followgraph.core.orm.session import session_factory
from followgraph.core.orm.tables import ConnectionTable
from followgraph.core.repositories.connections import Edge, EdgeRepository


class TestListing:
    def test_empty(self, repository):
        assert repository.list_followers("nobody") == []
        assert repository.list_followings("nobody") == []

    def test_followers_in_insertion_order(self, repository):
        repository.insert_edge("newuser", "zed")
        repository.insert_edge("newuser", "alice")
        repository.insert_edge("newuser", "mike")
        assert repository.list_followers("newuser") == ["zed", "alice", "mike"]

    def test_followings_in_insertion_order(self, repository):
        repository.insert_edge("zed", "laracroft")
        repository.insert_edge("alice", "laracroft")
        assert repository.list_followings("laracroft") == ["zed", "alice"]

    def test_ordered_by_created_not_id(self, repository):
        base = datetime.datetime(2024, 1, 1, tzinfo=datetime.UTC)
        # Later ids carry earlier timestamps.
        repository.session.add_all(
            [
                ConnectionTable(user="newuser", follower="first", created=base + datetime.timedelta(minutes=2)),
                ConnectionTable(user="newuser", follower="second", created=base + datetime.timedelta(minutes=1)),
                ConnectionTable(user="newuser", follower="third", created=base),
                ConnectionTable(user="alpha", follower="fan", created=base + datetime.timedelta(minutes=5)),
                ConnectionTable(user="zulu", follower="fan", created=base + datetime.timedelta(minutes=3)),
            ]
        )
        repository.session.commit()
        assert repository.list_followers("newuser") == ["third", "second", "first"]
        assert repository.list_followings("fan") == ["zulu", "alpha"]

    def test_directions_are_independent(self, seeded):
        assert seeded.list_followers("johndoe") == ["jojobizarre", "laracroft"]
        assert seeded.list_followings("johndoe") == []
        assert seeded.list_followings("laracroft") == ["johndoe"]

    def test_self_follow(self, seeded):
        assert seeded.list_followers("lonelyguy") == ["lonelyguy"]
        assert seeded.list_followings("lonelyguy") == ["lonelyguy"]


class TestFindEdge:
    def test_found(self, seeded):
        edge = seeded.find_edge("johndoe", "laracroft")
        assert isinstance(edge, Edge)
        assert edge.user == "johndoe"
        assert edge.follower == "laracroft"
        assert edge.created is not None

    def test_direction_matters(self, seeded):
        assert seeded.find_edge("laracroft", "johndoe") is None


class TestInsert:
    def test_returns_edge(self, repository):
        edge = repository.insert_edge("a", "b")
        assert edge.id is not None
        assert (edge.user, edge.follower) == ("a", "b")

    def test_duplicate_raises_constraint_violation(self, repository):
        repository.insert_edge("a", "b")
        with pytest.raises(ConstraintViolationError) as exc_info:
            repository.insert_edge("a", "b")
        assert exc_info.value.context == {"user": "a", "follower": "b"}

    def test_session_usable_after_duplicate(self, repository):
        repository.insert_edge("a", "b")
        with pytest.raises(ConstraintViolationError):
            repository.insert_edge("a", "b")
        repository.insert_edge("a", "c")
        assert repository.list_followers("a") == ["b", "c"]

    def test_commits(self, engine, repository):
        repository.insert_edge("a", "b")
        with session_factory(engine)() as other:
            assert EdgeRepository(other).list_followers("a") == ["b"]


class TestDelete:
    def test_removes_only_that_edge(self, seeded):
        seeded.delete_edge("johndoe", "laracroft")
        assert seeded.list_followers("johndoe") == ["jojobizarre"]
        assert seeded.list_followings("laracroft") == []

    def test_absent_edge_is_noop(self, seeded):
        seeded.delete_edge("johndoe", "nobody")
        seeded.delete_edge("johndoe", "nobody")
        assert seeded.list_followers("johndoe") == ["jojobizarre", "laracroft"]

    def test_reinsert_after_delete(self, seeded):
        seeded.delete_edge("johndoe", "jojobizarre")
        seeded.insert_edge("johndoe", "jojobizarre")
        assert seeded.list_followers("johndoe") == ["laracroft", "jojobizarre"]
