"""Filesystem operations used by the browser and its hotkey actions.

Thin wrappers over ``pathlib``/``shutil``. Failures surface as ``OSError``
(``FileServiceError`` for conditions detected here) so the UI layer can report
them as one log line.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .ansi import sanitize_terminal_text

logger = logging.getLogger(__name__)


class FileServiceError(OSError):
    """Filesystem operation rejected with a human-readable reason."""


@dataclass(frozen=True)
class EntryDescriptor:
    """One directory-listing row."""

    path: Path
    is_dir: bool
    synthetic: bool = False
    message: str = ""

    @property
    def name(self) -> str:
        return self.path.name or str(self.path)

    @property
    def display(self) -> str:
        if self.synthetic:
            return sanitize_terminal_text(self.message)
        name = sanitize_terminal_text(self.name)
        if self.is_dir:
            return f"[DIR]  {name}"
        return f"[FILE] {name}"


@dataclass(frozen=True)
class FileInfo:
    path: Path
    name: str
    is_dir: bool
    size: int | None
    modified: datetime
    extension: str


@dataclass(frozen=True)
class SearchHit:
    line_number: int
    text: str

    def __str__(self) -> str:
        return f"{self.line_number}: {self.text}"


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def _entry_sort_key(entry: EntryDescriptor) -> tuple[bool, str, str]:
    return (not entry.is_dir, entry.name.casefold(), entry.name)


class FileService:
    """Filesystem collaborator; all paths are expected to be absolute."""

    def list_entries(self, directory: Path) -> list[EntryDescriptor]:
        """Return ``directory`` children, directories first, then by name.

        Raises ``OSError`` when the directory cannot be enumerated.
        """
        entries: list[EntryDescriptor] = []
        with os.scandir(directory) as scanned:
            for child in scanned:
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                entries.append(EntryDescriptor(Path(child.path), is_dir))
        entries.sort(key=_entry_sort_key)
        return entries

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_directory(self, path: Path) -> bool:
        return path.is_dir()

    def list_files(self, directory: Path) -> list[Path]:
        if not directory.is_dir():
            raise FileServiceError(f"Directory does not exist: {directory}")
        return [entry.path for entry in self.list_entries(directory) if not entry.is_dir]

    def create_file(self, path: Path, contents: str = "") -> bool:
        """Create ``path``; returns ``False`` when it already exists."""
        if path.exists():
            logger.info("File already exists: %s", path)
            return False
        path.write_text(contents, encoding="utf-8")
        logger.info("File created: %s", path)
        return True

    def read_text(self, path: Path) -> str:
        if not path.exists():
            raise FileServiceError(f"File does not exist: {path}")
        if path.is_dir():
            raise FileServiceError(f"Is a directory: {path}")
        return read_text(path)

    def read_lines(self, path: Path) -> list[str]:
        return self.read_text(path).splitlines()

    def append_text(self, path: Path, text: str) -> None:
        if not path.exists():
            logger.warning("File does not exist, creating: %s", path)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(text)
        logger.info("Text appended: %s", path)

    def delete(self, path: Path) -> bool:
        """Delete a file; returns ``False`` when nothing was there."""
        if not path.exists() and not path.is_symlink():
            logger.warning("File does not exist: %s", path)
            return False
        if path.is_dir() and not path.is_symlink():
            raise FileServiceError(f"Is a directory: {path}")
        path.unlink()
        logger.info("File deleted: %s", path)
        return True

    def move(self, source: Path, destination: Path) -> Path:
        """Move ``source`` to ``destination`` (into it when it is a directory)."""
        if not source.exists():
            raise FileServiceError(f"File does not exist: {source}")
        target = destination / source.name if destination.is_dir() else destination
        if target.exists():
            raise FileServiceError(f"Target already exists: {target}")
        moved = Path(shutil.move(str(source), str(target)))
        logger.info("Moved %s -> %s", source, moved)
        return moved

    def copy(self, source: Path, destination: Path) -> Path:
        """Copy a file to ``destination`` (into it when it is a directory)."""
        if not source.is_file():
            raise FileServiceError(f"Not a file: {source}")
        target = destination / source.name if destination.is_dir() else destination
        if target.exists():
            raise FileServiceError(f"Target already exists: {target}")
        copied = Path(shutil.copy2(source, target))
        logger.info("Copied %s -> %s", source, copied)
        return copied

    def search(self, path: Path, term: str) -> list[SearchHit]:
        """Return case-insensitive matches of ``term`` as 1-based line hits."""
        needle = (term or "").casefold()
        return [
            SearchHit(idx, line)
            for idx, line in enumerate(self.read_lines(path), start=1)
            if needle in line.casefold()
        ]

    def file_info(self, path: Path) -> FileInfo:
        stat = path.stat()
        is_dir = path.is_dir()
        return FileInfo(
            path=path,
            name=path.name or str(path),
            is_dir=is_dir,
            size=None if is_dir else int(stat.st_size),
            modified=datetime.fromtimestamp(stat.st_mtime),
            extension=path.suffix,
        )
