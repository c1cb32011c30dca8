"""Tests for ``followgraph.security.identity``."""

from __future__ import annotations

from followgraph.security.identity import Identity, bind_identity, current_identity


class TestBindIdentity:
    def test_unbound_by_default(self):
        assert current_identity() is None

    def test_bound_inside_block(self):
        identity = Identity(subject="johndoe", credential="tok")
        with bind_identity(identity):
            assert current_identity() is identity
        assert current_identity() is None

    def test_nested(self):
        outer = Identity(subject="outer")
        inner = Identity(subject="inner")
        with bind_identity(outer):
            with bind_identity(inner):
                assert current_identity() is inner
            assert current_identity() is outer
