"""
followgraph - who-follows-whom connection graph service.

Packages:
- followgraph.core: settings, logging, errors, cache, ORM and the edge store
- followgraph.directory: existence checks against the user directory service
- followgraph.security: bearer token verification and route policy
- followgraph.services: connection service (idempotent follow/unfollow)
- followgraph.api: FastAPI application
- followgraph.cli: Typer command line
"""

__version__ = "0.1.0"
