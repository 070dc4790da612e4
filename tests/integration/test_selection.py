"""Integration tests: manifest over (mocked) HTTP through to a selected version."""
from __future__ import annotations

from unittest.mock import patch

import pytest
import requests

from manifest.client import load_catalog
from manifest.errors import EmptyCatalog, InvalidChannelChoice, InvalidEntryChoice
from manifest.model import Channel
from picker.console_ui import ScriptedInput
from picker.selector import Selector, SelectorState, display, select_version

MANIFEST_URL = "https://piston-meta.mojang.com/mc/game/version_manifest_v2.json"


@pytest.fixture
def serve(mock_response):
    """Serve a document from requests.Session.get."""
    def _serve(document):
        return patch.object(requests.Session, "get", return_value=mock_response(json_data=document))
    return _serve


def quiet(_line):
    pass


class TestFetchAndSelect:
    """Manifest fetch, classification and selection together."""

    def test_pick_release(self, serve, two_entry_document):
        with serve(two_entry_document) as mock_get:
            catalog = load_catalog()
        assert mock_get.call_args.args[0] == MANIFEST_URL

        entry = select_version(catalog, ScriptedInput(["0", "0"]), write=quiet)
        assert entry.identifier == "1.20"
        assert display(entry) == "1.20"

    def test_pick_snapshot(self, serve, two_entry_document):
        with serve(two_entry_document):
            catalog = load_catalog()
        entry = select_version(catalog, ScriptedInput(["1", "0"]), write=quiet)
        assert entry.identifier == "23w10a"
        assert display(entry) == "Snapshot 23w10a"

    def test_pick_legacy_alpha(self, serve, sample_document):
        with serve(sample_document):
            catalog = load_catalog()
        entry = select_version(catalog, ScriptedInput(["3", "0"]), write=quiet)
        assert entry.channel is Channel.OLD_ALPHA
        assert display(entry) == "Alpha a1.2.6"
        assert entry.source_locator.endswith("a1.2.6.json")

    def test_bad_channel_then_fresh_run(self, serve, two_entry_document):
        """A host may retry by starting a new selector."""
        with serve(two_entry_document):
            catalog = load_catalog()

        first = Selector(catalog, ScriptedInput(["9"]), write=quiet)
        with pytest.raises(InvalidChannelChoice):
            first.run()
        assert first.state is SelectorState.FAILED

        second = Selector(catalog, ScriptedInput(["0", "0"]), write=quiet)
        assert second.run().identifier == "1.20"

    def test_entry_index_out_of_bounds(self, serve, record_factory):
        document = {"versions": [
            record_factory("1.20.1", "release"),
            record_factory("1.20", "release"),
        ]}
        with serve(document):
            catalog = load_catalog()
        with pytest.raises(InvalidEntryChoice):
            select_version(catalog, ScriptedInput(["0", "2"]), write=quiet)

    def test_empty_manifest(self, serve):
        with serve({"latest": {}, "versions": []}):
            with pytest.raises(EmptyCatalog):
                load_catalog()

    def test_lookup_matches_selection(self, serve, sample_document):
        """Looking up the selected id returns the same entry."""
        with serve(sample_document):
            catalog = load_catalog()
        entry = select_version(catalog, ScriptedInput(["2", "1"]), write=quiet)
        assert catalog.find_by_identifier(entry.identifier) == entry
        assert catalog.find_exact(entry.identifier) is entry
