"""Caller identity for the current request.

The auth middleware resolves an :class:`Identity` once per request and binds
it to a context variable.  Code further down the call chain (notably the
outbound user directory client) reads it with :func:`current_identity`
instead of having it threaded through every signature.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Identity:
    """Who is calling.

    Attributes:
        subject: The ``sub`` claim of the verified token (or ``"test"``).
        credential: Raw bearer token to forward downstream, if any.
        authenticated: Whether the identity may access protected routes.
    """

    subject: str
    credential: str | None = None
    authenticated: bool = True


ANONYMOUS_TEST_IDENTITY = Identity(subject="test", credential=None, authenticated=True)

_current_identity: contextvars.ContextVar[Identity | None] = contextvars.ContextVar(
    "followgraph_identity", default=None
)


def current_identity() -> Identity | None:
    """Identity bound to the running request, or ``None``."""
    return _current_identity.get()


def set_identity(identity: Identity | None) -> contextvars.Token[Identity | None]:
    return _current_identity.set(identity)


def reset_identity(token: contextvars.Token[Identity | None]) -> None:
    _current_identity.reset(token)


@contextmanager
def bind_identity(identity: Identity | None) -> Iterator[Identity | None]:
    """Bind *identity* for the duration of the ``with`` block."""
    token = set_identity(identity)
    try:
        yield identity
    finally:
        reset_identity(token)
