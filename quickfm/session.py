"""Main interactive loop for the file manager.

Reads one key at a time, offers it to listing navigation first and then to
the hotkey table, and keeps the screen current before every blocking read.
Action failures are reported in the log pane; they never end the session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .actions import SessionActions
from .config import AppConfig
from .filesystem import FileService
from .hotkeys import TERMINAL_CAPTURED_KEYS, Action, HotkeyTable
from .keys import KeyEvent, canonical_key
from .layout import LOG_PANE, TerminalGeometry, compute_geometry
from .listing import DirectoryListing
from .log_buffer import LogBuffer
from .prompt import LineEditor, PromptIO, PromptOutcome
from .render import Renderer, hotkey_pane_lines
from .screen import Screen

logger = logging.getLogger(__name__)

KEY_POLL_MS = 120


class SessionState(Enum):
    RUNNING = "running"
    EXIT_REQUESTED = "exit_requested"


@dataclass(frozen=True)
class SessionCallbacks:
    """Injected terminal and process operations used by ``Session``.

    ``open_in_editor`` receives the file and the directory to run the editor
    in; it and ``copy_to_clipboard`` return an error message or ``None``.
    """

    read_key: Callable[[int | None], KeyEvent | None]
    terminal_size: Callable[[], tuple[int, int]]
    open_in_editor: Callable[[Path, Path], str | None]
    copy_to_clipboard: Callable[[str], str | None]


class Session:
    def __init__(
        self,
        config: AppConfig,
        hotkeys: HotkeyTable,
        callbacks: SessionCallbacks,
        screen: Screen,
        start_directory: Path,
        filesystem: FileService | None = None,
    ) -> None:
        self.config = config
        self.hotkeys = hotkeys
        self.callbacks = callbacks
        self.filesystem = filesystem or FileService()
        self.renderer = Renderer(screen)
        self.log = LogBuffer()
        self.state = SessionState.RUNNING
        self.previous_directory: Path | None = None
        self.bookmarks = list(config.bookmarks)
        self.bookmark_index = -1
        self.clipboard_path: Path | None = None
        self.last_prompt_outcome = PromptOutcome.EDITING
        columns, lines = callbacks.terminal_size()
        screen.resize(columns, lines)
        self.geometry: TerminalGeometry = compute_geometry(columns, lines)
        self.hotkey_lines = hotkey_pane_lines(hotkeys.help_lines())
        self.listing = DirectoryListing(start_directory)
        self.listing.load(start_directory, self.filesystem)
        self.actions = SessionActions(self).action_table()

    @property
    def current_directory(self) -> Path:
        return self.listing.directory

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    def request_exit(self) -> None:
        self.state = SessionState.EXIT_REQUESTED

    def run(self) -> int:
        """Render once, then process keys until the exit action runs."""
        self.full_render()
        while self.running:
            self.check_resize()
            try:
                event = self.callbacks.read_key(KEY_POLL_MS)
            except KeyboardInterrupt:
                continue
            if event is None:
                continue
            self.handle_key(event)
        logger.info("Session finished in %s", self.current_directory)
        return 0

    def check_resize(self) -> bool:
        """Recompute layout and repaint everything when the terminal size changed."""
        columns, lines = self.callbacks.terminal_size()
        live_changed = self.renderer.screen.resize(columns, lines)
        geometry = compute_geometry(columns, lines)
        if geometry == self.geometry and not live_changed:
            return False
        logger.debug("Terminal resized to %sx%s", columns, lines)
        self.geometry = geometry
        self.full_render()
        return True

    def full_render(self) -> None:
        self.listing.reconcile_viewport(self.geometry.viewport_height)
        self.renderer.full_render(self.geometry, self.listing, self.log, self.hotkey_lines)

    def handle_key(self, event: KeyEvent) -> None:
        if self.handle_navigation_key(event):
            return

        key = canonical_key(event)
        if key in TERMINAL_CAPTURED_KEYS:
            self.log.append(f"Note: {key} may be intercepted by the terminal. Use another key or run: stty -ixon")

        action = self.hotkeys.lookup(key)
        if action is None:
            self.log.append(f"Unknown hotkey: {key}")
            self.renderer.render_log_pane(self.geometry, self.log)
            return
        self.invoke(action)

    def invoke(self, action: Action) -> None:
        """Run ``action``, report any failure, and bring the screen up to date."""
        logger.debug("Running action %s", action.value)
        try:
            self.actions[action]()
        except Exception as exc:
            logger.exception("Action %s failed", action.value)
            self.log.append(f"Action error: {exc}")
        if not self.running:
            return
        self.listing.reload(self.filesystem, self.geometry.viewport_height)
        self.full_render()

    def handle_navigation_key(self, event: KeyEvent) -> bool:
        """Apply listing navigation keys; returns ``False`` for anything else."""
        if event.ctrl or event.alt:
            return False
        listing = self.listing
        viewport_height = self.geometry.viewport_height
        old_index = listing.selected_index
        old_offset = listing.scroll_offset

        key = event.key
        if key in ("UP", "k"):
            listing.move_selection(-1)
        elif key in ("DOWN", "j"):
            listing.move_selection(1)
        elif key == "PAGEUP":
            listing.page_move(viewport_height, -1)
        elif key == "PAGEDOWN":
            listing.page_move(viewport_height, 1)
        elif key == "HOME":
            listing.jump_home()
        elif key == "END":
            listing.jump_end()
        elif key == "ENTER":
            self.activate_selected()
            return True
        else:
            return False

        listing.reconcile_viewport(viewport_height)
        if listing.scroll_offset != old_offset:
            self.renderer.render_directory_pane(self.geometry, listing)
        elif listing.selected_index != old_index:
            self.renderer.render_selection_change(self.geometry, listing, old_index, listing.selected_index)
        return True

    def activate_selected(self) -> None:
        previous = self.current_directory
        if self.listing.activate(self.filesystem, self.open_in_editor, self.log):
            self.previous_directory = previous
        self.full_render()

    def open_in_editor(self, path: Path) -> str | None:
        return self.callbacks.open_in_editor(path, self.current_directory)

    def change_directory(self, target: Path) -> bool:
        """Make ``target`` the listed directory, remembering where we were."""
        if not self.filesystem.is_directory(target):
            return False
        self.previous_directory = self.current_directory
        self.listing.load(target, self.filesystem)
        logger.info("Directory changed to %s", target)
        return True

    def prompt(self, text: str) -> str:
        """Ask for one line of input on the log pane's prompt row.

        Returns the trimmed input, or ``""`` when the user pressed Escape;
        ``last_prompt_outcome`` tells the two empty cases apart.
        """
        editor = LineEditor(text, self.geometry.pane_width(LOG_PANE))
        io = PromptIO(self.callbacks.read_key, self.callbacks.terminal_size, self.renderer)
        result = editor.run(io, self.geometry, self.log)
        self.last_prompt_outcome = editor.outcome
        if editor.geometry is not None and editor.geometry != self.geometry:
            self.geometry = editor.geometry
            self.full_render()
        return result
