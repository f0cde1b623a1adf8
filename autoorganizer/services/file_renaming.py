"""
File Renaming Service
Turns a naming pattern and a document date into a collision-free filename
"""

from datetime import date
from pathlib import Path
from typing import Callable, Optional

from ..directory import DirectoryManager
from ..matching.models import NamingPattern
from .naming_patterns import format_date

ExistsCheck = Callable[[str], bool]


def folder_exists_check(folder: Path, directory_manager: Optional[DirectoryManager] = None) -> ExistsCheck:
    """Predicate answering 'is this name already used in folder' against live contents"""
    manager = directory_manager or DirectoryManager()
    folder = Path(folder)
    return lambda filename: manager.file_exists(folder / filename)


class FilenameGenerator:
    """Builds prefix + date + suffix names; never touches the filesystem"""

    def build_filename(self, pattern: NamingPattern, date_string: str, extension: str) -> str:
        extension = extension.lstrip('.')
        if not extension:
            return f"{pattern.prefix}{date_string}{pattern.suffix}"
        return f"{pattern.prefix}{date_string}{pattern.suffix}.{extension}"

    def generate(self, pattern: NamingPattern, document_date: date, extension: str,
                 exists: ExistsCheck) -> str:
        """
        Generate a filename that exists() reports as free

        Collisions append a two-digit counter to the date part:
        'Chase_2023-04.pdf' -> 'Chase_2023-04_01.pdf' -> 'Chase_2023-04_02.pdf'
        """
        date_string = format_date(document_date, pattern.date_format)
        filename = self.build_filename(pattern, date_string, extension)

        counter = 1
        while exists(filename):
            filename = self.build_filename(pattern, f"{date_string}_{counter:02d}", extension)
            counter += 1

        return filename
