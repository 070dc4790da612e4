"""Data models for version manifests.

Provides the Channel enumeration and the ReleaseEntry dataclass, plus the
conversion from a raw manifest record into a ReleaseEntry.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .errors import MalformedEntry, UnknownChannel


class Channel(Enum):
    """Release channel of a manifest entry.

    Declaration order is the order channels are offered to the user.
    """

    RELEASE = "release"
    SNAPSHOT = "snapshot"
    OLD_BETA = "old_beta"
    OLD_ALPHA = "old_alpha"

    @classmethod
    def parse(cls, tag: Any) -> "Channel":
        """Map a manifest ``type`` tag onto a Channel.

        Raises:
            UnknownChannel: If the tag is not one of the four recognized values
        """
        if isinstance(tag, Channel):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise UnknownChannel(tag) from None

    @property
    def label(self) -> str:
        """Menu label for the channel."""
        return _CHANNEL_LABELS[self]


_CHANNEL_LABELS: Dict[Channel, str] = {
    Channel.RELEASE: "Release",
    Channel.SNAPSHOT: "Snapshot",
    Channel.OLD_BETA: "Beta",
    Channel.OLD_ALPHA: "Alpha",
}

# Wire name of each ReleaseEntry attribute, in the order they are extracted
RECORD_FIELDS = (
    ("identifier", "id"),
    ("channel", "type"),
    ("source_locator", "url"),
    ("published_at", "releaseTime"),
)


@dataclass(frozen=True)
class ReleaseEntry:
    """One addressable release from a version manifest.

    Attributes:
        identifier: Version name, unique within the manifest (e.g. "1.20.1")
        channel: Release channel the version belongs to
        source_locator: URL of the per-version detail document (not interpreted)
        published_at: Release timestamp as given by the manifest (not parsed)
    """

    identifier: str
    channel: Channel
    source_locator: str
    published_at: str

    def __post_init__(self) -> None:
        # Accept raw tags so entries can be built straight from manifest values
        object.__setattr__(self, "channel", Channel.parse(self.channel))

    def to_dict(self) -> Dict[str, str]:
        """Convert the entry back to manifest field names."""
        return {
            "id": self.identifier,
            "type": self.channel.value,
            "url": self.source_locator,
            "releaseTime": self.published_at,
        }


def _require_str(record: Mapping[str, Any], key: str, index: Optional[int]) -> str:
    where = f"version #{index}" if index is not None else "version record"
    if key not in record:
        raise MalformedEntry(f"{where} is missing '{key}'", index=index, field=key)
    value = record[key]
    if not isinstance(value, str):
        raise MalformedEntry(
            f"{where} field '{key}' must be a string, got {type(value).__name__}",
            index=index,
            field=key,
        )
    return value


def entry_from_record(record: Any, index: Optional[int] = None) -> ReleaseEntry:
    """Build a ReleaseEntry from one record of the manifest's ``versions`` list.

    All four fields are checked for presence and type before the channel tag
    is interpreted, so a record that is both incomplete and mistyped reports
    the missing field.

    Args:
        record: Raw record (normally a dict decoded from JSON)
        index: Position of the record in the manifest, used in error messages

    Returns:
        The typed entry

    Raises:
        MalformedEntry: If the record is not a mapping or a field is absent/not a string
        UnknownChannel: If the ``type`` tag is not a recognized channel
    """
    if not isinstance(record, Mapping):
        raise MalformedEntry(
            f"version #{index} must be an object, got {type(record).__name__}",
            index=index,
        )

    values = {attr: _require_str(record, key, index) for attr, key in RECORD_FIELDS}
    return ReleaseEntry(
        identifier=values["identifier"],
        channel=Channel.parse(values["channel"]),
        source_locator=values["source_locator"],
        published_at=values["published_at"],
    )


__all__ = ["Channel", "ReleaseEntry", "RECORD_FIELDS", "entry_from_record"]
