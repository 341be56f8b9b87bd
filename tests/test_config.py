"""
Tests for export options and render modes.
"""

import attrs
import pytest

from prodgraph.config import ExportOptions, RenderMode


class TestExportOptions:
    """Test the immutable options record."""

    def test_defaults(self):
        options = ExportOptions()

        assert options.show_ids
        assert not options.show_ids_on_terminals
        assert options.highlight is None

    def test_frozen(self):
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            ExportOptions().show_ids = False

    def test_resolved_forces_ids(self):
        options = ExportOptions(show_ids=False, show_ids_on_terminals=True)

        assert options.resolved().show_ids
        assert not options.show_ids

    def test_resolved_unchanged_when_consistent(self):
        options = ExportOptions(show_ids=False)

        assert options.resolved() is options


class TestRenderModes:
    """Test mapping of redraw modes to options."""

    def test_ids_mode(self):
        assert ExportOptions.for_mode(RenderMode.IDS, 4) == ExportOptions(highlight=4)

    def test_full_mode(self):
        options = ExportOptions.for_mode(RenderMode.FULL, 4)

        assert options.show_ids_on_terminals
        assert options.highlight == 4

    def test_plain_mode_never_highlights(self):
        options = ExportOptions.for_mode(RenderMode.PLAIN, 4)

        assert options == ExportOptions(show_ids=False)
