"""User directory (existence oracle) client, service discovery and HTTP plumbing."""

from followgraph.directory.client import UserDirectory, UserDirectoryClient, freshness_lifetime
from followgraph.directory.discovery import ServiceResolver, StaticServiceRegistry, resolve_service_url
from followgraph.directory.http import build_http_client, forward_credential

__all__ = [
    "ServiceResolver",
    "StaticServiceRegistry",
    "UserDirectory",
    "UserDirectoryClient",
    "build_http_client",
    "forward_credential",
    "freshness_lifetime",
    "resolve_service_url",
]
