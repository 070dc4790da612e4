"""Core utilities for the version manifest package.

- config: Configuration loading and section defaults
- network: HTTP session, GET with retries and backoff
"""

__all__ = [
    "config",
    "network",
]
