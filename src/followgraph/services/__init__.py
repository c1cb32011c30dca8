"""Service layer."""

from followgraph.services.connections import ConnectionService

__all__ = ["ConnectionService"]
