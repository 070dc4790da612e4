"""Classified, read-only view over one version manifest.

A Catalog is built once from a decoded manifest document and partitions the
listed versions by release channel, preserving the order the producer listed
them in (newest first). It performs no I/O.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import EmptyCatalog, MalformedEntry
from .model import Channel, ReleaseEntry, entry_from_record

logger = logging.getLogger(__name__)

# Lookup order used when the same identifier appears in several channels
SEARCH_ORDER: Tuple[Channel, ...] = (
    Channel.RELEASE,
    Channel.SNAPSHOT,
    Channel.OLD_BETA,
    Channel.OLD_ALPHA,
)


class Catalog:
    """Versions of one manifest grouped by channel.

    Use :meth:`from_document` to build one; the constructor expects
    already-typed entries in document order.
    """

    def __init__(self, entries: List[ReleaseEntry]):
        if not entries:
            raise EmptyCatalog()

        grouped: Dict[Channel, List[ReleaseEntry]] = {channel: [] for channel in Channel}
        for entry in entries:
            grouped[entry.channel].append(entry)

        self._entries: Tuple[ReleaseEntry, ...] = tuple(entries)
        self._by_channel: Dict[Channel, Tuple[ReleaseEntry, ...]] = {
            channel: tuple(items) for channel, items in grouped.items()
        }
        self._most_recent = self._entries[0]

    @classmethod
    def from_document(cls, document: Any) -> "Catalog":
        """Parse a decoded manifest document.

        Args:
            document: Mapping with a ``versions`` list of records carrying
                ``id``, ``type``, ``url`` and ``releaseTime`` strings

        Returns:
            Fully populated Catalog

        Raises:
            MalformedEntry: If the document has no ``versions`` list or a record is malformed
            UnknownChannel: If a record has an unrecognized ``type``
            EmptyCatalog: If the ``versions`` list is empty
        """
        if not isinstance(document, Mapping):
            raise MalformedEntry(
                f"manifest must be an object, got {type(document).__name__}"
            )
        records = document.get("versions")
        if not isinstance(records, list):
            raise MalformedEntry("manifest has no 'versions' list", field="versions")
        if not records:
            raise EmptyCatalog()

        entries = [entry_from_record(record, index) for index, record in enumerate(records)]
        catalog = cls(entries)
        logger.debug(
            "Parsed manifest with %d versions (%s)",
            len(catalog),
            ", ".join(f"{ch.value}={n}" for ch, n in catalog.counts().items()),
        )
        return catalog

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def most_recent(self) -> ReleaseEntry:
        return self._most_recent

    def get_most_recent(self) -> ReleaseEntry:
        """Return the first version listed in the manifest."""
        return self._most_recent

    @property
    def by_channel(self) -> Dict[Channel, Tuple[ReleaseEntry, ...]]:
        """Channel to versions mapping (a fresh dict on each access)."""
        return dict(self._by_channel)

    def list_channel(self, channel: Channel) -> Tuple[ReleaseEntry, ...]:
        """Return the versions of ``channel`` in manifest order (possibly empty)."""
        return self._by_channel.get(Channel.parse(channel), ())

    def counts(self) -> Dict[Channel, int]:
        """Number of versions per channel, in menu order."""
        return {channel: len(self._by_channel[channel]) for channel in Channel}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ReleaseEntry]:
        return iter(self._entries)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find_exact(self, identifier: str) -> Optional[ReleaseEntry]:
        """Find a version by identifier, or None if no channel lists it.

        Channels are searched release, snapshot, old_beta, old_alpha; the
        first match wins.
        """
        for channel in SEARCH_ORDER:
            for entry in self._by_channel[channel]:
                if entry.identifier == identifier:
                    return entry
        return None

    def find_by_identifier(self, identifier: str) -> ReleaseEntry:
        """Find a version by identifier, falling back to the most recent one.

        Callers that need to know whether the identifier was actually found
        must compare ``result.identifier`` with ``identifier`` or use
        :meth:`find_exact`.
        """
        entry = self.find_exact(identifier)
        if entry is None:
            logger.warning(
                "Version %r not found in manifest; using most recent version %r",
                identifier,
                self._most_recent.identifier,
            )
            return self._most_recent
        return entry

    def __repr__(self) -> str:
        return f"Catalog({len(self)} versions, most_recent={self._most_recent.identifier!r})"


__all__ = ["Catalog", "SEARCH_ORDER"]
