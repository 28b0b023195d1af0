"""Hotkey action implementations.

Each ``Action`` maps to one ``SessionActions`` method. Actions ask for input
through the session's line editor, report every outcome as log-pane lines,
and catch collaborator ``OSError`` failures themselves.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING

from .highlight import PREVIEW_LINE_LIMIT, highlight_preview
from .hotkeys import Action
from .prompt import PromptOutcome

if TYPE_CHECKING:
    from .session import Session

logger = logging.getLogger(__name__)

APPEND_TERMINATOR = "::end"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_path(text: str, base: Path) -> Path:
    """Expand ``~`` and resolve ``text`` against ``base`` without touching the filesystem."""
    candidate = Path(text).expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate
    return Path(os.path.normpath(candidate))


def confirmed(answer: str) -> bool:
    return answer.strip().lower() == "y"


class SessionActions:
    def __init__(self, session: Session) -> None:
        self.session = session

    @property
    def log(self):
        return self.session.log

    @property
    def fs(self):
        return self.session.filesystem

    def action_table(self) -> dict[Action, Callable[[], None]]:
        return {
            Action.CREATE_FILE: self.create_file,
            Action.APPEND_FILE: self.append_file,
            Action.DELETE_FILE: self.delete_file,
            Action.LIST_FILES: self.list_files,
            Action.SEARCH_FILES: self.search_file,
            Action.READ_FILE: self.read_file,
            Action.EXIT: self.exit,
            Action.OPEN_IN_EDITOR: self.open_in_editor,
            Action.JUMP_TO_DEFAULT: self.jump_to_default,
            Action.ADD_BOOKMARK: self.add_bookmark,
            Action.CYCLE_BOOKMARKS: self.cycle_bookmarks,
            Action.BATCH_DELETE: self.batch_delete,
            Action.BATCH_RENAME: self.batch_rename,
            Action.BATCH_MOVE: self.batch_move,
            Action.QUICK_PREVIEW: self.quick_preview,
            Action.MULTI_FILE_SEARCH: self.multi_file_search,
            Action.FILTER_BY_SIZE: self.filter_by_size,
            Action.FILTER_BY_DATE: self.filter_by_date,
            Action.FILE_INFO: self.file_info,
            Action.COPY_FILE_PATH: self.copy_file_path,
            Action.PASTE_FILE: self.paste_file,
            Action.CREATE_FROM_TEMPLATE: self.create_from_template,
            Action.APPEND_SNIPPET: self.append_snippet,
            Action.CHANGE_DIRECTORY: self.change_directory,
            Action.GO_BACK_DIRECTORY: self.go_back_directory,
        }

    # Helpers

    def resolve(self, text: str) -> Path:
        return resolve_path(text, self.session.current_directory)

    def prompt_path(self, text: str) -> Path | None:
        """Prompt for a required path; logs and returns ``None`` when left empty."""
        answer = self.session.prompt(text)
        if not answer:
            self.log.append("Path cannot be empty.")
            return None
        return self.resolve(answer)

    def path_or_selected(self, text: str) -> Path | None:
        """Prompt for a path, falling back to the selected listing entry."""
        answer = self.session.prompt(text)
        if answer:
            return self.resolve(answer)
        entry = self.session.listing.selected_entry()
        if entry is None or entry.synthetic:
            self.log.append("Nothing selected and no path provided.")
            return None
        self.log.append(f"Inspecting selected: {entry.name}")
        return entry.path

    def matching_files(self, pattern: str) -> list[Path]:
        return [
            path
            for path in self.fs.list_files(self.session.current_directory)
            if fnmatch.fnmatch(path.name, pattern)
        ]

    def prompt_pattern(self, text: str) -> tuple[str, list[Path]] | None:
        pattern = self.session.prompt(text)
        if not pattern:
            self.log.append("Pattern cannot be empty.")
            return None
        matches = self.matching_files(pattern)
        if not matches:
            self.log.append(f"No files match: {pattern}")
            return None
        return pattern, matches

    # Single-file operations

    def create_file(self) -> None:
        path = self.prompt_path("Enter file path to create:")
        if path is None:
            return
        try:
            if self.fs.create_file(path):
                self.log.append(f"File created: {path}")
            else:
                self.log.append(f"File already exists: {path}")
        except OSError as exc:
            self.log.append(f"Create failed: {exc}")

    def read_file(self) -> None:
        path = self.prompt_path("Enter file path to read:")
        if path is None:
            return
        try:
            content = self.fs.read_text(path)
        except OSError as exc:
            self.log.append(f"Read failed: {exc}")
            return
        self.log.append("--- File contents start ---")
        self.log.append(content)
        self.log.append("--- File contents end ---")

    def append_file(self) -> None:
        path = self.prompt_path("Enter file path to append to:")
        if path is None:
            return
        self.log.append(f"Enter text to append. Finish with a single line containing only '{APPEND_TERMINATOR}'")
        lines: list[str] = []
        while True:
            line = self.session.prompt("")
            if self.session.last_prompt_outcome is PromptOutcome.CANCELLED:
                self.log.append("Append cancelled.")
                return
            if line == APPEND_TERMINATOR:
                break
            lines.append(line)
        try:
            self.fs.append_text(path, "".join(f"{line}\n" for line in lines))
        except OSError as exc:
            self.log.append(f"Append failed: {exc}")
            return
        self.log.append("Append complete.")

    def delete_file(self) -> None:
        path = self.prompt_path("Enter file path to delete:")
        if path is None:
            return
        if not confirmed(self.session.prompt(f"Are you sure you want to delete {path}? (y/N):")):
            self.log.append("Delete cancelled.")
            return
        try:
            self.fs.delete(path)
        except OSError as exc:
            self.log.append(f"Delete failed: {exc}")
            return
        self.log.append("File deleted (if existed).")

    def list_files(self) -> None:
        answer = self.session.prompt("Enter directory path (leave empty for current):")
        directory = self.resolve(answer) if answer else self.session.current_directory
        try:
            files = self.fs.list_files(directory)
        except OSError as exc:
            self.log.append(f"List failed: {exc}")
            return
        self.log.append(f"Files in {directory}:")
        for path in files:
            self.log.append(str(path))

    def search_file(self) -> None:
        path = self.prompt_path("Enter file path to search:")
        if path is None:
            return
        term = self.session.prompt("Enter search text:")
        if not term:
            self.log.append("Search text cannot be empty.")
            return
        try:
            hits = self.fs.search(path, term)
        except OSError as exc:
            self.log.append(f"Search failed: {exc}")
            return
        self.log.append(f"Found {len(hits)} matching lines:")
        for hit in hits:
            self.log.append(str(hit))

    def open_in_editor(self) -> None:
        path = self.prompt_path("Enter file path to open in editor:")
        if path is None:
            return
        error = self.session.open_in_editor(path)
        if error:
            self.log.append(f"Open editor failed: {error}")
        else:
            self.log.append(f"Opened in editor: {path}")

    def file_info(self) -> None:
        path = self.path_or_selected("Enter file path (leave empty for selected):")
        if path is None:
            return
        try:
            info = self.fs.file_info(path)
        except OSError as exc:
            self.log.append(f"Info failed: {exc}")
            return
        self.log.append(f"--- Info: {info.name} ---")
        modified = info.modified.strftime(TIMESTAMP_FORMAT)
        if info.is_dir:
            self.log.append("Type: Directory")
            self.log.append(f"Modified: {modified}")
            return
        self.log.append("Type: File")
        self.log.append(f"Size: {info.size} bytes")
        self.log.append(f"Modified: {modified}")
        self.log.append(f"Extension: {info.extension}")

    def quick_preview(self) -> None:
        path = self.path_or_selected("Enter file path to preview (leave empty for selected):")
        if path is None:
            return
        if self.fs.is_directory(path):
            self.log.append(f"Cannot preview a directory: {path}")
            return
        try:
            lines = self.fs.read_lines(path)
        except OSError as exc:
            self.log.append(f"Preview failed: {exc}")
            return
        self.log.append(f"--- Preview: {path.name} ---")
        for row in highlight_preview(path, lines):
            self.log.append_styled(row)
        if len(lines) > PREVIEW_LINE_LIMIT:
            self.log.append(f"... ({len(lines) - PREVIEW_LINE_LIMIT} more lines)")
        self.log.append("--- Preview end ---")

    # Directories and bookmarks

    def change_directory(self) -> None:
        answer = self.session.prompt("cd to (.., ~/Documents, absolute or relative):")
        if not answer:
            return
        target = self.resolve(answer)
        if self.session.change_directory(target):
            self.log.append(f"Directory changed to: {target}")
        else:
            self.log.append(f"Directory does not exist: {target}")

    def go_back_directory(self) -> None:
        previous = self.session.previous_directory
        if previous is None or not self.fs.is_directory(previous):
            self.log.append("No previous directory to return to.")
            return
        self.session.change_directory(previous)
        self.log.append(f"Returned to: {previous}")

    def jump_to_default(self) -> None:
        target = self.resolve(self.session.config.default_directory or ".")
        if self.session.change_directory(target):
            self.log.append(f"Changed directory: {target}")
        else:
            self.log.append(f"Directory not found: {target}")

    def add_bookmark(self) -> None:
        answer = self.session.prompt("Enter directory to bookmark:")
        bookmark = str(self.resolve(answer)) if answer else str(self.session.current_directory)
        if bookmark in self.session.bookmarks:
            self.log.append("Bookmark exists.")
            return
        self.session.bookmarks.append(bookmark)
        self.log.append(f"Bookmark added: {bookmark}")

    def cycle_bookmarks(self) -> None:
        bookmarks = self.session.bookmarks
        if not bookmarks:
            self.log.append("No bookmarks.")
            return
        self.session.bookmark_index = (self.session.bookmark_index + 1) % len(bookmarks)
        target = self.resolve(bookmarks[self.session.bookmark_index])
        if self.session.change_directory(target):
            self.log.append(f"Jumped to: {target}")
        else:
            self.log.append(f"Bookmark not found: {target}")

    # Batch operations over the current directory

    def batch_delete(self) -> None:
        found = self.prompt_pattern("Enter file pattern to delete (e.g. *.tmp):")
        if found is None:
            return
        pattern, matches = found
        if not confirmed(self.session.prompt(f"Delete {len(matches)} files matching {pattern}? (y/N):")):
            self.log.append("Batch delete cancelled.")
            return
        deleted = 0
        for path in matches:
            try:
                self.fs.delete(path)
            except OSError as exc:
                self.log.append(f"Delete failed: {path.name}: {exc}")
                continue
            deleted += 1
            self.log.append(f"Deleted: {path.name}")
        self.log.append(f"Batch delete complete: {deleted} deleted.")

    def batch_move(self) -> None:
        found = self.prompt_pattern("Enter file pattern to move (e.g. *.log):")
        if found is None:
            return
        _pattern, matches = found
        destination = self.prompt_path("Enter destination directory:")
        if destination is None:
            return
        if not self.fs.is_directory(destination):
            self.log.append(f"Directory does not exist: {destination}")
            return
        moved = 0
        for path in matches:
            try:
                target = self.fs.move(path, destination)
            except OSError as exc:
                self.log.append(f"Move failed: {path.name}: {exc}")
                continue
            moved += 1
            self.log.append(f"Moved: {path.name} -> {target}")
        self.log.append(f"Batch move complete: {moved} moved.")

    def batch_rename(self) -> None:
        found = self.prompt_pattern("Enter file pattern to rename (e.g. *.txt):")
        if found is None:
            return
        _pattern, matches = found
        old_text = self.session.prompt("Text to replace in names:")
        if not old_text:
            self.log.append("Search text cannot be empty.")
            return
        new_text = self.session.prompt("Replace with:")
        renamed = 0
        for path in matches:
            new_name = path.name.replace(old_text, new_text)
            if not new_name or new_name == path.name:
                continue
            try:
                self.fs.move(path, path.with_name(new_name))
            except OSError as exc:
                self.log.append(f"Rename failed: {path.name}: {exc}")
                continue
            renamed += 1
            self.log.append(f"Renamed: {path.name} -> {new_name}")
        self.log.append(f"Batch rename complete: {renamed} renamed.")

    def multi_file_search(self) -> None:
        term = self.session.prompt("Enter search text:")
        if not term:
            self.log.append("Search text cannot be empty.")
            return
        try:
            files = self.fs.list_files(self.session.current_directory)
        except OSError as exc:
            self.log.append(f"Search failed: {exc}")
            return
        rows: list[str] = []
        matched_files = 0
        for path in files:
            try:
                hits = self.fs.search(path, term)
            except OSError as exc:
                logger.debug("Skipping %s during search: %s", path, exc)
                continue
            if hits:
                matched_files += 1
                rows.extend(f"{path.name}:{hit}" for hit in hits)
        self.log.append(f"Found {len(rows)} matches in {matched_files} files:")
        for row in rows:
            self.log.append(row)

    def filter_by_size(self) -> None:
        answer = self.session.prompt("Minimum size in KB:")
        try:
            minimum_kb = float(answer)
        except ValueError:
            self.log.append(f"Invalid size: {answer}")
            return
        if minimum_kb < 0:
            self.log.append(f"Invalid size: {answer}")
            return
        minimum = int(minimum_kb * 1024)
        directory = self.session.current_directory
        matches: list[tuple[Path, int]] = []
        for path in self.fs.list_files(directory):
            info = self.fs.file_info(path)
            if info.size is not None and info.size >= minimum:
                matches.append((path, info.size))
        if not matches:
            self.log.append(f"No files of at least {answer} KB in {directory}.")
            return
        self.log.append(f"Files of at least {answer} KB in {directory}:")
        for path, size in matches:
            self.log.append(f"  {path.name} ({size} bytes)")

    def filter_by_date(self) -> None:
        answer = self.session.prompt("Modified within how many days:")
        try:
            days = int(answer)
        except ValueError:
            self.log.append(f"Invalid number of days: {answer}")
            return
        if days < 0:
            self.log.append(f"Invalid number of days: {answer}")
            return
        cutoff = datetime.now() - timedelta(days=days)
        directory = self.session.current_directory
        matches = []
        for path in self.fs.list_files(directory):
            info = self.fs.file_info(path)
            if info.modified >= cutoff:
                matches.append(info)
        if not matches:
            self.log.append(f"No files modified in the last {days} days in {directory}.")
            return
        self.log.append(f"Files modified in the last {days} days in {directory}:")
        for info in matches:
            self.log.append(f"  {info.name} ({info.modified.strftime(TIMESTAMP_FORMAT)})")

    # Clipboard

    def copy_file_path(self) -> None:
        path = self.path_or_selected("Enter file path to copy (leave empty for selected):")
        if path is None:
            return
        self.session.clipboard_path = path
        error = self.session.callbacks.copy_to_clipboard(str(path))
        if error:
            self.log.append(f"Copy failed: {error}")
            self.log.append(f"Path kept for paste: {path}")
            return
        self.log.append("Copied to clipboard.")

    def paste_file(self) -> None:
        source = self.session.clipboard_path
        if source is None:
            self.log.append("Nothing to paste. Copy a file path first.")
            return
        try:
            target = self.fs.copy(source, self.session.current_directory)
        except OSError as exc:
            self.log.append(f"Paste failed: {exc}")
            return
        self.log.append(f"Pasted: {target}")

    # Templates and snippets

    def choose_entry(self, kind: str, entries: dict[str, str]) -> tuple[str, str] | None:
        if not entries:
            self.log.append(f"No {kind}s configured.")
            return None
        self.log.append(f"{kind.capitalize()}s: {', '.join(sorted(entries))}")
        name = self.session.prompt(f"{kind.capitalize()} name:")
        if not name:
            self.log.append(f"{kind.capitalize()} name cannot be empty.")
            return None
        if name not in entries:
            self.log.append(f"Unknown {kind}: {name}")
            return None
        return name, entries[name]

    def create_from_template(self) -> None:
        chosen = self.choose_entry("template", self.session.config.templates)
        if chosen is None:
            return
        name, contents = chosen
        path = self.prompt_path("Enter file path to create:")
        if path is None:
            return
        try:
            created = self.fs.create_file(path, contents)
        except OSError as exc:
            self.log.append(f"Create failed: {exc}")
            return
        if created:
            self.log.append(f"Created {path} from template {name}")
        else:
            self.log.append(f"File already exists: {path}")

    def append_snippet(self) -> None:
        chosen = self.choose_entry("snippet", self.session.config.snippets)
        if chosen is None:
            return
        name, snippet = chosen
        path = self.prompt_path("Enter file path to append to:")
        if path is None:
            return
        text = snippet if snippet.endswith("\n") else snippet + "\n"
        try:
            self.fs.append_text(path, text)
        except OSError as exc:
            self.log.append(f"Append failed: {exc}")
            return
        self.log.append(f"Snippet {name} appended to {path}")

    def exit(self) -> None:
        self.session.request_exit()
