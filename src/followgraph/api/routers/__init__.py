"""API routers package.

Manifesto:
    Each router module owns one API domain and delegates to
    ``followgraph.services`` for business logic.

Tags:
    api, routers, REST
"""
