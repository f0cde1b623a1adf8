"""
Move Service
Applies selected proposals: renames each document into its destination folder
"""

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ..directory import DirectoryManager
from ..monitoring import get_logger, get_performance_tracker, log_performance
from ..pdf import PDFProcessor
from .date_extraction import DateResolver
from .file_renaming import FilenameGenerator, folder_exists_check
from .naming_patterns import NamingPatternInferencer


@dataclass(frozen=True)
class MoveRequest:
    source_path: Path
    destination_folder: Path


@dataclass
class MoveReport:
    """Outcome of one apply run; failures never stop the remaining moves"""
    moved: List[Tuple[Path, Path]] = field(default_factory=list)
    failures: List[Tuple[Path, str]] = field(default_factory=list)
    started_at: str = ""
    completed_at: Optional[str] = None

    def __post_init__(self):
        if not self.started_at:
            self.started_at = datetime.now().isoformat()

    @property
    def success(self) -> bool:
        return not self.failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'moved_count': len(self.moved),
            'failed_count': len(self.failures),
            'moved': [{'source_path': str(s), 'target_path': str(t)} for s, t in self.moved],
            'failures': [{'source_path': str(s), 'error': e} for s, e in self.failures],
            'started_at': self.started_at,
            'completed_at': self.completed_at,
        }


class MoveService:
    """
    Executes moves with one lock per destination folder

    The target name is recomputed under the folder lock right before the
    move, so concurrent applies into one folder see each other's files and
    can never pick the same name. Different folders proceed independently.
    """

    def __init__(self, text_extractor: Optional[PDFProcessor] = None,
                 directory_manager: Optional[DirectoryManager] = None):
        self.logger = get_logger('move_service')
        self.directory_manager = directory_manager or DirectoryManager()
        self.date_resolver = DateResolver(text_extractor, self.directory_manager)
        self.inferencer = NamingPatternInferencer()
        self.generator = FilenameGenerator()
        # resolved folder -> (lock, number of movers holding or waiting on it)
        self._folder_locks: Dict[Path, Tuple[threading.Lock, int]] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _locked_folder(self, folder: Path) -> Iterator[None]:
        """Hold the folder's lock; the entry is dropped once no mover needs it"""
        key = Path(folder).resolve()
        with self._locks_guard:
            lock, users = self._folder_locks.get(key, (None, 0))
            lock = lock or threading.Lock()
            self._folder_locks[key] = (lock, users + 1)

        try:
            with lock:
                yield
        finally:
            with self._locks_guard:
                lock, users = self._folder_locks[key]
                if users == 1:
                    del self._folder_locks[key]
                else:
                    self._folder_locks[key] = (lock, users - 1)

    def target_filename(self, source_path: Path, destination_folder: Path) -> str:
        extension = source_path.suffix.lstrip('.')
        pattern = self.inferencer.infer(destination_folder, extension.lower())
        return self.generator.generate(
            pattern,
            self.date_resolver.resolve(source_path),
            extension,
            folder_exists_check(destination_folder, self.directory_manager),
        )

    def move_one(self, request: MoveRequest) -> Path:
        source_path = Path(request.source_path)
        destination_folder = Path(request.destination_folder)

        with self._locked_folder(destination_folder):
            target = destination_folder / self.target_filename(source_path, destination_folder)
            return self.directory_manager.move_document(source_path, target)

    @log_performance("apply_moves")
    def apply(self, requests: Iterable[MoveRequest]) -> MoveReport:
        """Attempt every move independently and collect a partial-failure report"""
        report = MoveReport()
        start_time = time.time()

        for request in requests:
            try:
                target = self.move_one(request)
            except (OSError, ValueError) as e:
                # ValueError covers unusable paths such as embedded NUL bytes
                report.failures.append((Path(request.source_path), str(e)))
                self.logger.warning("Move failed",
                                    source_path=str(request.source_path),
                                    destination_folder=str(request.destination_folder),
                                    error=str(e))
                continue

            report.moved.append((Path(request.source_path), target))
            self.logger.info("Document moved",
                             source_path=str(request.source_path),
                             target_path=str(target))

        report.completed_at = datetime.now().isoformat()
        get_performance_tracker().record_operation('apply', time.time() - start_time, report.success)
        self.logger.info("Apply finished",
                         moved=len(report.moved),
                         failed=len(report.failures))
        return report


# Global move service instance
move_service = MoveService()
