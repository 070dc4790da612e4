"""Two-step interactive version selection.

The user first picks a release channel, then a version within that channel.
Any invalid answer ends the selection in the FAILED state; there is no
re-prompt, so a host that wants another attempt starts a new Selector.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Tuple, Type

from manifest.catalog import Catalog
from manifest.errors import (
    InvalidChannelChoice,
    InvalidEntryChoice,
    SelectionError,
    SelectionIncomplete,
    UnknownChannel,
)
from manifest.model import Channel, ReleaseEntry

from .console_ui import InputSource

logger = logging.getLogger(__name__)

# Menu order: Release=0, Snapshot=1, Beta=2, Alpha=3
CHANNEL_MENU: Tuple[Channel, ...] = tuple(Channel)

_DISPLAY_PREFIXES = {
    Channel.RELEASE: "",
    Channel.SNAPSHOT: "Snapshot ",
    Channel.OLD_BETA: "Beta ",
    Channel.OLD_ALPHA: "Alpha ",
}


def display(entry: Any) -> str:
    """Human-readable label for a version, e.g. ``"Snapshot 23w10a"``.

    Raises:
        UnknownChannel: If the entry's channel is not a recognized Channel
    """
    channel = entry.channel
    if not isinstance(channel, Channel) or channel not in _DISPLAY_PREFIXES:
        raise UnknownChannel(channel)
    return f"{_DISPLAY_PREFIXES[channel]}{entry.identifier}"


def parse_index(text: str) -> Optional[int]:
    """Parse a menu answer as a non-negative integer, or None."""
    text = (text or "").strip()
    if not text or not text.isascii() or not text.isdigit():
        return None
    return int(text)


class SelectorState(Enum):
    CHOOSE_CHANNEL = "choose_channel"
    CHOOSE_ENTRY = "choose_entry"
    DONE = "done"
    FAILED = "failed"


class Selector:
    """State machine driving one channel-then-version selection.

    Args:
        catalog: Classified manifest to choose from
        source: Where answers come from (terminal, script, test harness)
        write: Callable receiving each line of menu text; defaults to print
    """

    def __init__(
        self,
        catalog: Catalog,
        source: InputSource,
        write: Optional[Callable[[str], Any]] = None,
    ):
        self.catalog = catalog
        self.source = source
        self.write = write or print
        self.state = SelectorState.CHOOSE_CHANNEL
        self.channel: Optional[Channel] = None
        self.candidates: Sequence[ReleaseEntry] = ()
        self.error: Optional[SelectionError] = None
        self._selected: Optional[ReleaseEntry] = None

    @property
    def finished(self) -> bool:
        return self.state in (SelectorState.DONE, SelectorState.FAILED)

    def _fail(self, error: SelectionError) -> None:
        self.state = SelectorState.FAILED
        self.error = error
        logger.debug("Selection failed: %s", error)
        raise error

    def _read(self, error_type: Type[SelectionError]) -> str:
        try:
            return self.source.read_line("Enter choice: ")
        except EOFError as e:
            self._fail(error_type(f"No answer given: {e or 'end of input'}", raw_input=""))

    def _choose_channel(self) -> None:
        self.write("Choose release type:")
        counts = self.catalog.counts()
        for index, channel in enumerate(CHANNEL_MENU):
            self.write(f"[{index}] {channel.label} ({counts[channel]})")

        answer = self._read(InvalidChannelChoice)
        index = parse_index(answer)
        if index is None or index >= len(CHANNEL_MENU):
            self._fail(InvalidChannelChoice(f"Unknown choice: {answer.strip()!r}", raw_input=answer))

        self.channel = CHANNEL_MENU[index]
        self.candidates = self.catalog.list_channel(self.channel)
        self.state = SelectorState.CHOOSE_ENTRY
        logger.debug("Channel %s chosen (%d versions)", self.channel.value, len(self.candidates))

    def _choose_entry(self) -> None:
        self.write("Choose version:")
        for index, entry in enumerate(self.candidates):
            self.write(f"[{index}] {entry.identifier}")

        answer = self._read(InvalidEntryChoice)
        index = parse_index(answer)
        if index is None:
            self._fail(InvalidEntryChoice(f"Not a valid integer: {answer.strip()!r}", raw_input=answer))
        if index >= len(self.candidates):
            self._fail(InvalidEntryChoice(
                f"Choice {index} is out of range (0-{len(self.candidates) - 1})"
                if self.candidates else f"No {self.channel.label.lower()} versions to choose from",
                raw_input=answer,
            ))

        self._selected = self.candidates[index]
        self.state = SelectorState.DONE

    def step(self) -> SelectorState:
        """Advance one transition and return the new state.

        Raises:
            InvalidChannelChoice: On a bad answer to the channel menu
            InvalidEntryChoice: On a bad answer to the version menu
        """
        if self.state is SelectorState.CHOOSE_CHANNEL:
            self._choose_channel()
        elif self.state is SelectorState.CHOOSE_ENTRY:
            self._choose_entry()
        elif self.state is SelectorState.FAILED:
            raise self.error
        return self.state

    def run(self) -> ReleaseEntry:
        """Drive the selection to completion and return the chosen version."""
        while not self.finished:
            self.step()
        if self.state is SelectorState.FAILED:
            raise self.error
        return self.result()

    def result(self) -> ReleaseEntry:
        """Return the chosen version.

        Raises:
            SelectionIncomplete: If the selection has not reached DONE
        """
        if self.state is not SelectorState.DONE or self._selected is None:
            raise SelectionIncomplete(f"Selection is not complete (state: {self.state.value})")
        return self._selected


def select_version(
    catalog: Catalog,
    source: InputSource,
    write: Optional[Callable[[str], Any]] = None,
) -> ReleaseEntry:
    """Run one selection and return the chosen version."""
    return Selector(catalog, source, write).run()


__all__ = [
    "CHANNEL_MENU",
    "Selector",
    "SelectorState",
    "display",
    "parse_index",
    "select_version",
]
