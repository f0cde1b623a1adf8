"""
Directory Operations Manager
Filesystem queries for the engine and the move primitive for the apply phase
"""

import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set

from ..settings import config, normalize_extensions


class DirectoryManager:
    """Enumerates documents, checks existence and reads timestamps"""

    def __init__(self, tracked_extensions: Optional[Iterable[str]] = None,
                 blacklist_dirs: Optional[List[str]] = None):
        """
        Initialize directory manager

        Args:
            tracked_extensions: Extensions (without dot) considered documents (uses config if not provided)
            blacklist_dirs: Directory names never descended into (uses config if not provided)
        """
        self.tracked_extensions: Set[str] = normalize_extensions(
            tracked_extensions if tracked_extensions is not None else config.tracked_extensions
        )
        self.blacklist_dirs = set(blacklist_dirs if blacklist_dirs is not None else config.blacklist_dirs)

    @staticmethod
    def is_hidden(name: str) -> bool:
        return name.startswith('.')

    def is_tracked(self, path: Path) -> bool:
        return path.suffix.lower().lstrip('.') in self.tracked_extensions

    def iter_documents(self, directory: Path) -> Iterator[Path]:
        """
        Recursively yield tracked, non-hidden documents in sorted order

        Hidden and blacklisted subdirectories are never entered.
        """
        directory = Path(directory)
        if not directory.is_dir():
            return

        for root, dirs, files in os.walk(directory):
            # Prune in place so os.walk never enters hidden/blacklisted trees
            dirs[:] = sorted(
                d for d in dirs
                if not self.is_hidden(d) and d not in self.blacklist_dirs
            )
            for filename in sorted(files):
                path = Path(root) / filename
                if not self.is_hidden(filename) and self.is_tracked(path):
                    yield path

    def file_exists(self, path: Path) -> bool:
        return Path(path).exists()

    def get_creation_time(self, path: Path) -> Optional[datetime]:
        """Birth time where the platform records one, else None"""
        try:
            stat = Path(path).stat()
        except (OSError, ValueError):
            return None
        birthtime = getattr(stat, 'st_birthtime', None)
        if birthtime is None:
            return None
        return datetime.fromtimestamp(birthtime)

    def get_modification_time(self, path: Path) -> Optional[datetime]:
        try:
            return datetime.fromtimestamp(Path(path).stat().st_mtime)
        except (OSError, ValueError):
            return None

    def move_document(self, source_path: Path, target_path: Path) -> Path:
        """
        Move a document, creating the target folder if needed

        Raises:
            FileNotFoundError: If the source no longer exists
            FileExistsError: If the target name is already taken
            OSError: For any other filesystem failure
        """
        source = Path(source_path)
        target = Path(target_path)

        if not source.is_file():
            raise FileNotFoundError(f"Source file not found: {source}")
        if target.exists():
            raise FileExistsError(f"Target already exists: {target}")

        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(source), str(target))
        return target
