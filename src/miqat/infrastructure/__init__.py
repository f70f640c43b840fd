"""Infrastructure layer - Adapters and implementations."""

from miqat.infrastructure.ip_locator import IpInfoLocationResolver, resolve_from_network

__all__ = [
    "IpInfoLocationResolver",
    "resolve_from_network",
]
