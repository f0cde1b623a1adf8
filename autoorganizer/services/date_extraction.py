"""
Date Extraction Service
Finds a statement date in document text, falling back to file timestamps
"""

import re
from datetime import date, datetime
from pathlib import Path
from typing import Callable, List, Optional, Pattern, Tuple

from ..directory import DirectoryManager
from ..monitoring import get_logger
from ..pdf import PDFProcessor
from ..settings import config

logger = get_logger('date_extraction')

MONTHS = {
    'jan': 1, 'january': 1,
    'feb': 2, 'february': 2,
    'mar': 3, 'march': 3,
    'apr': 4, 'april': 4,
    'may': 5,
    'jun': 6, 'june': 6,
    'jul': 7, 'july': 7,
    'aug': 8, 'august': 8,
    'sep': 9, 'sept': 9, 'september': 9,
    'oct': 10, 'october': 10,
    'nov': 11, 'november': 11,
    'dec': 12, 'december': 12,
}


def _parse_year_month_day(match) -> Optional[date]:
    year, month, day = match.groups()
    return date(int(year), int(month), int(day))


def _parse_month_day_year(match) -> Optional[date]:
    month, day, year = match.groups()
    return date(int(year), int(month), int(day))


def _parse_month_year(match) -> Optional[date]:
    month, year = match.groups()
    return date(int(year), int(month), 1)


def _parse_month_name_year(match) -> Optional[date]:
    month_name, year = match.groups()
    month = MONTHS.get(month_name.lower())
    if month is None:
        return None
    return date(int(year), month, 1)


# Priority order: the first recognizer that matches anywhere in the text wins
DATE_RECOGNIZERS: Tuple[Tuple[str, Pattern, Callable], ...] = (
    ('YYYY-MM-DD',
     re.compile(r'(20\d{2})[-/](0[1-9]|1[0-2])[-/](0[1-9]|[12]\d|3[01])', re.IGNORECASE),
     _parse_year_month_day),
    ('MM-DD-YYYY',
     re.compile(r'(0[1-9]|1[0-2])[-/](0[1-9]|[12]\d|3[01])[-/](20\d{2})', re.IGNORECASE),
     _parse_month_day_year),
    ('MM-YYYY',
     re.compile(r'(0[1-9]|1[0-2])[-/](20\d{2})', re.IGNORECASE),
     _parse_month_year),
    ('Month YYYY',
     re.compile(r'\b((?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*)\.?,?\s+(20\d{2})', re.IGNORECASE),
     _parse_month_name_year),
)


def extract_date(text: str) -> Optional[date]:
    """
    Return the first recognizable date in text, or None

    Each recognizer is tried in order against its leftmost match only. A
    match that is not a real calendar date (e.g. 02/31/2023) falls through
    to the next recognizer.
    """
    if not text:
        return None

    for label, pattern, parser in DATE_RECOGNIZERS:
        match = pattern.search(text)
        if not match:
            continue
        try:
            parsed = parser(match)
        except ValueError:
            parsed = None
        if parsed is not None:
            logger.debug("Date found in text", recognizer=label, matched=match.group(0))
            return parsed

    return None


class DateResolver:
    """Ordered fallback chain: content date, creation time, modification time, today"""

    def __init__(self, text_extractor: Optional[PDFProcessor] = None,
                 directory_manager: Optional[DirectoryManager] = None,
                 date_pages: Optional[int] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.text_extractor = text_extractor or PDFProcessor(max_pages=config.max_pages)
        self.directory_manager = directory_manager or DirectoryManager()
        self.date_pages = date_pages or config.date_pages
        self.clock = clock
        self.providers: List[Tuple[str, Callable[[Path], Optional[date]]]] = [
            ('content', self.content_date),
            ('created', self.creation_date),
            ('modified', self.modification_date),
        ]

    def content_date(self, path: Path) -> Optional[date]:
        return extract_date(self.text_extractor.extract_text(str(path), self.date_pages))

    def creation_date(self, path: Path) -> Optional[date]:
        created = self.directory_manager.get_creation_time(path)
        return created.date() if created else None

    def modification_date(self, path: Path) -> Optional[date]:
        modified = self.directory_manager.get_modification_time(path)
        return modified.date() if modified else None

    def resolve_with_source(self, path: Path) -> Tuple[date, str]:
        for name, provider in self.providers:
            resolved = provider(Path(path))
            if resolved is not None:
                return resolved, name
        return self.clock().date(), 'now'

    def resolve(self, path: Path) -> date:
        """Never raises; today's date is the last resort"""
        resolved, _ = self.resolve_with_source(path)
        return resolved
