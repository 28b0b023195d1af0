"""Pane painting for the hotkey, log, and directory columns.

Supports a full repaint of every pane and an incremental repaint of just the
two directory rows whose highlight changed. All drawing goes through
``Screen.draw_region``.
"""

from __future__ import annotations

from collections.abc import Sequence

from .ansi import display_width
from .layout import FILE_PANE, HOTKEY_PANE, LOG_PANE, TerminalGeometry
from .listing import DirectoryListing
from .log_buffer import LogBuffer
from .screen import Screen, Style

APP_TITLE = "=== Quick File Manager ==="
DIVIDER_CHAR = "│"
NAVIGATION_HELP_LINES: tuple[str, ...] = (
    "Navigation:",
    "  Up/Down, k/j : move",
    "  PgUp/PgDn : page",
    "  Home/End : first/last",
    "  Enter : open",
)


def hotkey_pane_lines(binding_lines: Sequence[str]) -> list[str]:
    lines = [APP_TITLE, "Hotkeys:"]
    lines.extend(binding_lines)
    lines.append("------------------------")
    lines.extend(NAVIGATION_HELP_LINES)
    return lines


def directory_header(listing: DirectoryListing) -> str:
    return f"Dir: {listing.directory.name or listing.directory}"


class Renderer:
    """Paints session state onto a ``Screen``."""

    def __init__(self, screen: Screen) -> None:
        self.screen = screen

    def full_render(
        self,
        geometry: TerminalGeometry,
        listing: DirectoryListing,
        log: LogBuffer,
        hotkey_lines: Sequence[str],
    ) -> None:
        """Clear the terminal and repaint every pane from current state."""
        self.screen.clear()
        self._draw_dividers(geometry)
        self._draw_hotkey_pane(geometry, hotkey_lines)
        self._draw_log_pane(geometry, log)
        self._draw_prompt_row(geometry, "")
        self._draw_directory_pane(geometry, listing)
        self.screen.flush()

    def render_directory_pane(self, geometry: TerminalGeometry, listing: DirectoryListing) -> None:
        self._draw_directory_pane(geometry, listing)
        self.screen.flush()

    def render_log_pane(self, geometry: TerminalGeometry, log: LogBuffer) -> None:
        self._draw_log_pane(geometry, log)
        self.screen.flush()

    def render_prompt(self, geometry: TerminalGeometry, text: str, cursor_column: int) -> None:
        """Paint the whole prompt row and park a visible cursor in it."""
        self._draw_prompt_row(geometry, text)
        self._place_prompt_cursor(geometry, cursor_column)
        self.screen.flush()

    def render_prompt_cells(
        self,
        geometry: TerminalGeometry,
        column: int,
        text: str,
        cursor_column: int,
    ) -> None:
        """Repaint only the prompt-row cells starting at ``column``."""
        available = geometry.pane_width(LOG_PANE) - column
        width = min(available, max(1, display_width(text)))
        self.screen.draw_text(geometry.pane_x(LOG_PANE) + column, geometry.prompt_row, width, text)
        self._place_prompt_cursor(geometry, cursor_column)
        self.screen.flush()

    def end_prompt(self, geometry: TerminalGeometry) -> None:
        self._draw_prompt_row(geometry, "")
        self.screen.set_cursor_visible(False)
        self.screen.flush()

    def _place_prompt_cursor(self, geometry: TerminalGeometry, cursor_column: int) -> None:
        column = max(0, min(cursor_column, geometry.pane_width(LOG_PANE) - 1))
        self.screen.move_cursor(geometry.pane_x(LOG_PANE) + column, geometry.prompt_row)
        self.screen.set_cursor_visible(True)

    def render_selection_change(
        self,
        geometry: TerminalGeometry,
        listing: DirectoryListing,
        old_index: int | None,
        new_index: int | None,
    ) -> None:
        """Repaint only the previously and newly selected rows.

        Only valid while the scroll offset is unchanged; rows outside the
        viewport are skipped.
        """
        for index in (old_index, new_index):
            if index is None:
                continue
            self._draw_directory_row(geometry, listing, index)
        self.screen.flush()

    def _draw_dividers(self, geometry: TerminalGeometry) -> None:
        column = "\n".join(DIVIDER_CHAR for _ in range(geometry.total_height))
        for x in geometry.divider_positions:
            self.screen.draw_region(x, 0, 1, geometry.total_height, column, Style.DIVIDER)

    def _draw_hotkey_pane(self, geometry: TerminalGeometry, hotkey_lines: Sequence[str]) -> None:
        lines = list(hotkey_lines)[: geometry.total_height]
        x = geometry.pane_x(HOTKEY_PANE)
        width = geometry.pane_width(HOTKEY_PANE)
        if lines:
            self.screen.draw_text(x, 0, width, lines[0], Style.HEADER)
        self.screen.draw_region(x, 1, width, geometry.total_height - 1, "\n".join(lines[1:]))

    def _draw_log_pane(self, geometry: TerminalGeometry, log: LogBuffer) -> None:
        rows = geometry.log_rows
        self.screen.draw_region(
            geometry.pane_x(LOG_PANE),
            0,
            geometry.pane_width(LOG_PANE),
            rows,
            "\n".join(log.tail(rows)),
        )

    def _draw_prompt_row(self, geometry: TerminalGeometry, text: str) -> None:
        self.screen.draw_text(geometry.pane_x(LOG_PANE), geometry.prompt_row, geometry.pane_width(LOG_PANE), text)

    def _draw_directory_pane(self, geometry: TerminalGeometry, listing: DirectoryListing) -> None:
        x = geometry.pane_x(FILE_PANE)
        width = geometry.pane_width(FILE_PANE)
        self.screen.draw_text(x, 0, width, directory_header(listing), Style.HEADER)
        for row in range(geometry.viewport_height):
            self._draw_directory_row(geometry, listing, listing.scroll_offset + row)

    def _draw_directory_row(self, geometry: TerminalGeometry, listing: DirectoryListing, index: int) -> None:
        row = index - listing.scroll_offset
        if row < 0 or row >= geometry.viewport_height:
            return
        text = listing.entries[index].display if index < len(listing.entries) else ""
        style = Style.SELECTED if index == listing.selected_index else Style.NORMAL
        self.screen.draw_text(
            geometry.pane_x(FILE_PANE),
            row + 1,
            geometry.pane_width(FILE_PANE),
            text,
            style,
        )
