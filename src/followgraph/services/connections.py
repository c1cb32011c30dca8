"""
Connection service — follow, unfollow and list.

Orchestrates the user directory and the edge store.  Reads and adds are
gated on the directory confirming the referenced accounts; deletes are not,
so a connection to an account that has since disappeared can still be
removed.

Invariants:
    - At most one edge per ``(user, follower)`` pair.  Adding an existing
      pair is a successful no-op, including when a concurrent request wins
      the insert race (the store's unique constraint rejects the loser and
      the rejection is absorbed here).
    - ``user`` is checked before ``follower``; the first failing check
      names the missing account.
    - Listings come back in edge-creation order.
    - An id longer than the store column can never have been stored, so
      adding it answers "not found" like any other unconfirmed account.

Tags:
    service, follow-graph, idempotent
"""

from __future__ import annotations

from followgraph.core.errors import ConstraintViolationError, UserNotFoundError
from followgraph.core.logging import get_logger
from followgraph.core.orm.tables import USER_ID_MAX_LENGTH
from followgraph.core.repositories.connections import EdgeRepository
from followgraph.directory.client import UserDirectory

logger = get_logger(__name__)


class ConnectionService:
    def __init__(self, repository: EdgeRepository, directory: UserDirectory) -> None:
        self.repository = repository
        self.directory = directory

    def _require_user(self, user: str) -> None:
        if not self.directory.exists(user):
            raise UserNotFoundError(user)

    def _require_storable_user(self, user: str) -> None:
        if len(user) > USER_ID_MAX_LENGTH:
            logger.info("user_id_too_long", user=user[:USER_ID_MAX_LENGTH], length=len(user))
            raise UserNotFoundError(user)
        self._require_user(user)

    def get_followers(self, user: str) -> list[str]:
        """Followers of *user*, oldest first.

        Raises:
            UserNotFoundError: *user* could not be confirmed.
        """
        self._require_user(user)
        return self.repository.list_followers(user)

    def get_followings(self, user: str) -> list[str]:
        """Accounts *user* follows, oldest first.

        Raises:
            UserNotFoundError: *user* could not be confirmed.
        """
        self._require_user(user)
        return self.repository.list_followings(user)

    def add_connection(self, user: str, follower: str) -> list[str]:
        """Make *follower* follow *user* and return the followers of *user*.

        Raises:
            UserNotFoundError: *user* or *follower* could not be confirmed.
        """
        self._require_storable_user(user)
        self._require_storable_user(follower)

        if self.repository.find_edge(user, follower) is None:
            try:
                self.repository.insert_edge(user, follower)
                logger.info("connection_added", user=user, follower=follower)
            except ConstraintViolationError:
                logger.info("connection_already_exists", user=user, follower=follower)
        else:
            logger.debug("connection_already_exists", user=user, follower=follower)

        return self.repository.list_followers(user)

    def delete_connection(self, user: str, follower: str) -> list[str]:
        """Remove the edge if present and return the remaining followers of *user*."""
        logger.info("connection_deleted", user=user, follower=follower)
        self.repository.delete_edge(user, follower)
        return self.repository.list_followers(user)


__all__ = ["ConnectionService"]
