"""Pane geometry for the three-column terminal layout.

Splits the terminal into hotkey, log, and directory panes separated by
single-column dividers. All functions here are pure: the same terminal size
always yields the same geometry.
"""

from __future__ import annotations

from dataclasses import dataclass

MIN_TERMINAL_WIDTH = 60
MIN_TERMINAL_HEIGHT = 10
MIN_PANE_WIDTH = 12
DIVIDER_WIDTH = 1

HOTKEY_PANE = 0
LOG_PANE = 1
FILE_PANE = 2

# Hotkey and log pane shares of the non-divider columns, left to right. The
# directory pane, last, takes the remainder (about 35%).
PANE_PERCENTS: tuple[float, ...] = (20.0, 45.0)


@dataclass(frozen=True)
class TerminalGeometry:
    total_width: int
    total_height: int
    pane_widths: tuple[int, ...]
    divider_positions: tuple[int, ...]

    def pane_x(self, pane: int) -> int:
        """Return the first column of ``pane``."""
        if pane == 0:
            return 0
        return self.divider_positions[pane - 1] + DIVIDER_WIDTH

    def pane_width(self, pane: int) -> int:
        return self.pane_widths[pane]

    @property
    def viewport_height(self) -> int:
        """Directory rows visible below the pane's header row."""
        return max(1, self.total_height - 1)

    @property
    def log_rows(self) -> int:
        """Log rows shown above the reserved prompt row."""
        return max(1, self.total_height - 1)

    @property
    def prompt_row(self) -> int:
        return self.total_height - 1


def clamp_terminal_size(columns: int, lines: int) -> tuple[int, int]:
    return max(MIN_TERMINAL_WIDTH, columns), max(MIN_TERMINAL_HEIGHT, lines)


def split_widths(available: int, percents: tuple[float, ...] = PANE_PERCENTS) -> tuple[int, ...]:
    """Split ``available`` columns into ``len(percents) + 1`` panes.

    Each leading pane takes its percentage (at least ``MIN_PANE_WIDTH``); the
    last pane absorbs the remainder so the widths sum to ``available``.
    """
    pane_count = len(percents) + 1
    widths: list[int] = []
    remaining = available
    for idx, percent in enumerate(percents):
        panes_after = pane_count - idx - 1
        reserved = panes_after * MIN_PANE_WIDTH
        width = max(MIN_PANE_WIDTH, int(available * percent / 100.0))
        width = min(width, max(MIN_PANE_WIDTH, remaining - reserved))
        widths.append(width)
        remaining -= width
    widths.append(remaining)
    return tuple(widths)


def compute_geometry(columns: int, lines: int) -> TerminalGeometry:
    """Compute pane widths and divider columns for a terminal of the given size."""
    total_width, total_height = clamp_terminal_size(columns, lines)
    pane_count = len(PANE_PERCENTS) + 1
    divider_count = pane_count - 1
    widths = split_widths(total_width - divider_count * DIVIDER_WIDTH)

    dividers: list[int] = []
    running = 0
    for width in widths[:-1]:
        running += width
        dividers.append(running)
        running += DIVIDER_WIDTH
    return TerminalGeometry(
        total_width=total_width,
        total_height=total_height,
        pane_widths=widths,
        divider_positions=tuple(dividers),
    )
