"""Version manifest package.

This package provides the data model and classification logic for a remote
catalog of software releases (a version manifest), plus the thin fetch layer
that retrieves it.

Key modules:
- model: Channel enumeration and ReleaseEntry dataclass
- catalog: Catalog built from a manifest document, grouped by channel
- errors: Exception hierarchy rooted at ManifestError
- client: Fetch the manifest over HTTP and build a Catalog
- core: Configuration and network utilities

Usage:
    from manifest import Catalog, Channel
    from manifest.client import load_catalog
"""

from .catalog import Catalog
from .errors import (
    CatalogError,
    EmptyCatalog,
    InvalidChannelChoice,
    InvalidEntryChoice,
    MalformedEntry,
    ManifestError,
    ManifestUnavailable,
    SelectionError,
    SelectionIncomplete,
    UnknownChannel,
)
from .model import Channel, ReleaseEntry

__all__ = [
    "Catalog",
    "Channel",
    "ReleaseEntry",
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
