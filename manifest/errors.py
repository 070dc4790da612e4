"""Exception hierarchy for version manifest handling.

Every error raised by the catalog and the selector derives from
ManifestError so a host application can catch the whole family at once.
"""
from __future__ import annotations

from typing import Optional


class ManifestError(Exception):
    """Base class for all version manifest errors."""


# =============================================================================
# Catalog construction
# =============================================================================

class CatalogError(ManifestError):
    """A manifest document could not be turned into a Catalog."""


class MalformedEntry(CatalogError):
    """A record is missing a required field or has the wrong type."""

    def __init__(self, message: str, index: Optional[int] = None, field: Optional[str] = None):
        super().__init__(message)
        self.index = index
        self.field = field


class UnknownChannel(CatalogError):
    """A channel tag matches none of the recognized channels."""

    def __init__(self, tag: object):
        super().__init__(f"Unknown version type: {tag!r}")
        self.tag = tag


class EmptyCatalog(CatalogError):
    """The manifest lists no versions at all."""

    def __init__(self, message: str = "Manifest contains no versions"):
        super().__init__(message)


# =============================================================================
# Interactive selection
# =============================================================================

class SelectionError(ManifestError):
    """Interactive selection was aborted."""

    def __init__(self, message: str, raw_input: Optional[str] = None):
        super().__init__(message)
        self.raw_input = raw_input


class InvalidChannelChoice(SelectionError):
    """Channel choice was not a valid menu index."""


class InvalidEntryChoice(SelectionError):
    """Version choice was not a valid index into the channel list."""


class SelectionIncomplete(SelectionError):
    """A result was requested before the selection finished."""


# =============================================================================
# Fetch layer
# =============================================================================

class ManifestUnavailable(ManifestError):
    """The manifest document could not be retrieved."""

    def __init__(self, url: str, reason: str = ""):
        message = f"Could not retrieve manifest from {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url
        self.reason = reason


__all__ = [
    "ManifestError",
    "CatalogError",
    "MalformedEntry",
    "UnknownChannel",
    "EmptyCatalog",
    "SelectionError",
    "InvalidChannelChoice",
    "InvalidEntryChoice",
    "SelectionIncomplete",
    "ManifestUnavailable",
]
