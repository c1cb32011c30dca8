"""followgraph core -- settings, logging, errors, caching and persistence.

Architecture::

    errors.py          Structured error taxonomy (FollowgraphError, UserNotFoundError)
    settings.py        pydantic-settings configuration (FOLLOWGRAPH_*)
    logging.py         structlog configuration + context helpers
    cache.py           CacheBackend protocol, InMemoryCache, DiskCache
    health.py          /health, /health/ready, /health/live router factory
    orm/               SQLAlchemy schema, engine and session factory
    repositories/      EdgeRepository (the edge store)
"""
