"""Tests for the directory listing's selection and scroll model.

The core invariant: after ``reconcile_viewport`` the selection is visible
and the offset is within range, and scrolling only moves as much as needed.
"""

import unittest
from pathlib import Path
from unittest import mock

from quickfm.filesystem import EntryDescriptor
from quickfm.listing import DirectoryListing
from quickfm.log_buffer import LogBuffer


def _entries(count: int, directory: Path = Path("/data")) -> list[EntryDescriptor]:
    return [EntryDescriptor(directory / f"file{idx}", is_dir=False) for idx in range(count)]


class _FakeFileService:
    def __init__(self, tree: dict[Path, list[EntryDescriptor]] | None = None, error: OSError | None = None) -> None:
        self.tree = tree or {}
        self.error = error

    def list_entries(self, directory: Path) -> list[EntryDescriptor]:
        if self.error is not None:
            raise self.error
        return list(self.tree.get(directory, []))

    def is_directory(self, path: Path) -> bool:
        return path in self.tree


def _listing(count: int) -> DirectoryListing:
    listing = DirectoryListing(Path("/data"))
    listing.load(Path("/data"), _FakeFileService({Path("/data"): _entries(count)}))
    return listing


class ReconcileViewportTests(unittest.TestCase):
    def test_invariant_holds_for_all_sizes_and_positions(self) -> None:
        for count in range(0, 12):
            for viewport in range(1, 8):
                for target in range(0, max(1, count)):
                    listing = _listing(count)
                    listing.scroll_offset = 7
                    listing.move_selection(target)
                    listing.reconcile_viewport(viewport)
                    with self.subTest(count=count, viewport=viewport, target=target):
                        max_offset = max(0, count - viewport)
                        self.assertGreaterEqual(listing.scroll_offset, 0)
                        self.assertLessEqual(listing.scroll_offset, max_offset)
                        if count == 0:
                            self.assertIsNone(listing.selected_index)
                            continue
                        self.assertLessEqual(listing.scroll_offset, listing.selected_index)
                        self.assertLessEqual(listing.selected_index, listing.scroll_offset + viewport - 1)

    def test_end_then_up_scrolls_only_the_minimum(self) -> None:
        listing = _listing(5)

        listing.jump_end()
        listing.reconcile_viewport(3)
        self.assertEqual((listing.selected_index, listing.scroll_offset), (4, 2))

        indexes = []
        offsets = []
        for _ in range(3):
            listing.move_selection(-1)
            listing.reconcile_viewport(3)
            indexes.append(listing.selected_index)
            offsets.append(listing.scroll_offset)

        self.assertEqual(indexes, [3, 2, 1])
        self.assertEqual(offsets, [2, 2, 1])

    def test_shrinking_viewport_pulls_offset_to_selection(self) -> None:
        listing = _listing(20)
        listing.move_selection(15)
        listing.reconcile_viewport(10)
        self.assertEqual(listing.scroll_offset, 6)

        listing.reconcile_viewport(4)
        self.assertEqual(listing.scroll_offset, 12)


class MoveSelectionTests(unittest.TestCase):
    def test_moves_clamp_at_both_ends(self) -> None:
        listing = _listing(4)

        listing.move_selection(-1)
        self.assertEqual(listing.selected_index, 0)
        listing.jump_end()
        listing.move_selection(1)
        self.assertEqual(listing.selected_index, 3)
        listing.jump_home()
        self.assertEqual(listing.selected_index, 0)

    def test_page_move_steps_one_less_than_viewport(self) -> None:
        listing = _listing(30)

        listing.page_move(10, 1)
        self.assertEqual(listing.selected_index, 9)
        listing.page_move(10, -1)
        self.assertEqual(listing.selected_index, 0)
        listing.page_move(1, 1)
        self.assertEqual(listing.selected_index, 1)

    def test_empty_listing_ignores_navigation(self) -> None:
        listing = _listing(0)

        listing.move_selection(3)
        listing.jump_end()
        listing.reconcile_viewport(5)

        self.assertIsNone(listing.selected_index)
        self.assertIsNone(listing.selected_entry())
        self.assertEqual(listing.scroll_offset, 0)


class LoadTests(unittest.TestCase):
    def test_enumeration_failure_yields_single_synthetic_entry(self) -> None:
        listing = DirectoryListing(Path("/secret"))
        service = _FakeFileService(error=PermissionError(13, "Permission denied"))

        listing.load(Path("/secret"), service)

        self.assertEqual(len(listing.entries), 1)
        self.assertTrue(listing.entries[0].synthetic)
        self.assertEqual(listing.entries[0].display, "Access denied: Permission denied")
        self.assertEqual((listing.selected_index, listing.scroll_offset), (0, 0))

    def test_load_resets_selection_and_scroll(self) -> None:
        listing = _listing(10)
        listing.move_selection(8)
        listing.reconcile_viewport(3)

        listing.load(Path("/data"), _FakeFileService({Path("/data"): _entries(10)}))

        self.assertEqual((listing.selected_index, listing.scroll_offset), (0, 0))

    def test_reload_keeps_selected_path(self) -> None:
        listing = _listing(5)
        listing.move_selection(3)
        selected = listing.selected_entry().path
        shrunk = [entry for entry in _entries(5) if entry.path.name != "file1"]

        listing.reload(_FakeFileService({Path("/data"): shrunk}), viewport_height=10)

        self.assertEqual(listing.selected_entry().path, selected)
        self.assertEqual(listing.selected_index, 2)


class ActivateTests(unittest.TestCase):
    def test_activating_directory_loads_it_and_logs(self) -> None:
        child = Path("/data/sub")
        service = _FakeFileService(
            {
                Path("/data"): [EntryDescriptor(child, is_dir=True)],
                child: _entries(2, child),
            }
        )
        listing = DirectoryListing(Path("/data"))
        listing.load(Path("/data"), service)
        log = LogBuffer()
        editor = mock.Mock()

        moved = listing.activate(service, editor, log)

        self.assertTrue(moved)
        self.assertEqual(listing.directory, child)
        self.assertEqual(len(listing.entries), 2)
        self.assertEqual(list(log), [f"Changed directory to: {child}"])
        editor.assert_not_called()

    def test_activating_file_opens_editor_and_logs_result(self) -> None:
        listing = _listing(1)
        log = LogBuffer()
        editor = mock.Mock(side_effect=[None, "editor missing"])

        self.assertFalse(listing.activate(_FakeFileService(), editor, log))
        self.assertFalse(listing.activate(_FakeFileService(), editor, log))

        editor.assert_called_with(Path("/data/file0"))
        self.assertEqual(list(log), ["Opened: /data/file0", "Open failed: editor missing"])

    def test_synthetic_entry_only_logs_nothing_to_open(self) -> None:
        listing = DirectoryListing(Path("/secret"))
        listing.load(Path("/secret"), _FakeFileService(error=PermissionError(13, "Permission denied")))
        log = LogBuffer()
        editor = mock.Mock()

        self.assertFalse(listing.activate(_FakeFileService(), editor, log))
        editor.assert_not_called()
        self.assertEqual(list(log), ["Nothing to open."])

    def test_activating_empty_listing_logs_nothing_to_open(self) -> None:
        listing = _listing(0)
        log = LogBuffer()
        editor = mock.Mock()

        self.assertFalse(listing.activate(_FakeFileService(), editor, log))
        editor.assert_not_called()
        self.assertEqual(list(log), ["Nothing to open."])


if __name__ == "__main__":
    unittest.main()
