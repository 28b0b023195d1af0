"""Blocking single-line editor shown on the log pane's last row.

``LineEditor.feed`` is the pure state machine (editing, committed, cancelled);
``LineEditor.run`` owns terminal input until the line is resolved and then
echoes the exchange into the log buffer.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .ansi import display_width
from .keys import KeyEvent
from .layout import LOG_PANE, TerminalGeometry, compute_geometry
from .log_buffer import LogBuffer
from .render import Renderer

PROMPT_POLL_MS = 120
# Columns kept free for typing when a long prompt would fill the pane.
MIN_INPUT_COLUMNS = 8


class PromptOutcome(Enum):
    EDITING = "editing"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


@dataclass
class PromptState:
    prompt_text: str
    input: str = ""
    cursor_column: int = 0


@dataclass(frozen=True)
class PromptIO:
    """Terminal hooks the editor needs while it owns input."""

    read_key: Callable[[int | None], KeyEvent | None]
    terminal_size: Callable[[], tuple[int, int]]
    renderer: Renderer


def normalize_prompt_text(text: str) -> str:
    if not text:
        return ""
    return text if text.endswith(" ") else text + " "


def visible_prompt(prompt_text: str, pane_width: int) -> str:
    """Return the prompt truncated to leave room for input in the pane."""
    limit = max(0, pane_width - MIN_INPUT_COLUMNS)
    return prompt_text[:limit]


class LineEditor:
    def __init__(self, prompt_text: str, pane_width: int) -> None:
        self.state = PromptState(normalize_prompt_text(prompt_text))
        self.outcome = PromptOutcome.EDITING
        self.pane_width = pane_width
        self.geometry: TerminalGeometry | None = None
        self._sync_cursor()

    @property
    def shown_prompt(self) -> str:
        return visible_prompt(self.state.prompt_text, self.pane_width)

    @property
    def max_input_width(self) -> int:
        """Display columns of input that fit after the prompt, keeping the cursor cell."""
        return max(0, self.pane_width - display_width(self.shown_prompt) - 1)

    @property
    def result(self) -> str:
        if self.outcome is PromptOutcome.COMMITTED:
            return self.state.input.strip()
        return ""

    @property
    def echo_line(self) -> str:
        return f"> {self.state.prompt_text}{self.state.input}"

    def resize(self, pane_width: int) -> None:
        self.pane_width = pane_width
        self._sync_cursor()

    def _sync_cursor(self) -> None:
        self.state.cursor_column = display_width(self.shown_prompt) + display_width(self.state.input)

    def feed(self, event: KeyEvent) -> PromptOutcome:
        """Apply one key press and return the resulting outcome."""
        if self.outcome is not PromptOutcome.EDITING:
            return self.outcome
        if event.key == "ENTER":
            self.outcome = PromptOutcome.COMMITTED
        elif event.key == "ESCAPE":
            self.state.input = ""
            self.outcome = PromptOutcome.CANCELLED
        elif event.key == "BACKSPACE":
            self.state.input = self.state.input[:-1]
        else:
            char = event.text
            if char and display_width(self.state.input + char) <= self.max_input_width:
                self.state.input += char
        self._sync_cursor()
        return self.outcome

    def run(self, io: PromptIO, geometry: TerminalGeometry, log: LogBuffer) -> str:
        """Block until Enter or Escape, then log the exchange and return the input.

        Returns the stripped input on commit and ``""`` on cancel. A terminal
        resize while editing only recomputes layout and repaints the log pane
        with the prompt; the typed input is kept. ``self.geometry`` holds the
        layout in effect when the editor returned.
        """
        self.geometry = geometry
        renderer = io.renderer
        self.resize(geometry.pane_width(LOG_PANE))
        renderer.render_log_pane(geometry, log)
        renderer.render_prompt(geometry, self.shown_prompt + self.state.input, self.state.cursor_column)

        while self.outcome is PromptOutcome.EDITING:
            columns, lines = io.terminal_size()
            live_changed = renderer.screen.resize(columns, lines)
            live_geometry = compute_geometry(columns, lines)
            if live_changed or live_geometry != self.geometry:
                self.geometry = live_geometry
                self.resize(self.geometry.pane_width(LOG_PANE))
                renderer.render_log_pane(self.geometry, log)
                renderer.render_prompt(
                    self.geometry,
                    self.shown_prompt + self.state.input,
                    self.state.cursor_column,
                )

            try:
                event = io.read_key(PROMPT_POLL_MS)
            except KeyboardInterrupt:
                continue
            if event is None:
                continue

            before = self.state.input
            self.feed(event)
            after = self.state.input
            if self.outcome is not PromptOutcome.EDITING or before == after:
                continue
            prompt_width = display_width(self.shown_prompt)
            if len(after) < len(before):
                column = prompt_width + display_width(after)
                erased = " " * display_width(before[len(after) :])
                renderer.render_prompt_cells(self.geometry, column, erased, self.state.cursor_column)
            else:
                column = prompt_width + display_width(before)
                typed = after[len(before) :]
                renderer.render_prompt_cells(self.geometry, column, typed, self.state.cursor_column)

        renderer.end_prompt(self.geometry)
        log.append(self.echo_line)
        return self.result
