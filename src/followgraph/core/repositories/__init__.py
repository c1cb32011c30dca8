"""Domain repositories."""

from followgraph.core.repositories.connections import Edge, EdgeRepository

__all__ = ["Edge", "EdgeRepository"]
