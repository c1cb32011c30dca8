"""
REST API layer for followgraph.

Provides a FastAPI application factory with typed endpoints that delegate
to the connection service (``followgraph.services``).  This package handles
only HTTP transport concerns: serialisation, authentication, error mapping,
and request context.

Quick start::

    from followgraph.api import create_app

    app = create_app()  # ready for uvicorn

Tags:
    api, REST, FastAPI, transport-layer

Doc-Types:
    api-reference
"""

from followgraph.api.app import create_app

__all__ = ["create_app"]
