"""
Naming Pattern Inference
Mines existing filenames in a folder for a recurring prefix + date + suffix template
"""

import re
from collections import Counter
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, Optional, Pattern, Tuple

from ..matching.models import NamingPattern
from ..monitoring import get_logger

logger = get_logger('naming_patterns')

DEFAULT_DATE_FORMAT = 'YYYY-MM'

# (label, filename regex, strftime format) in priority order
FILENAME_DATE_FORMATS: Tuple[Tuple[str, Pattern, str], ...] = (
    ('YYYY-MM-DD', re.compile(r'20\d{2}-\d{2}-\d{2}'), '%Y-%m-%d'),
    ('MM-DD-YYYY', re.compile(r'\d{2}-\d{2}-20\d{2}'), '%m-%d-%Y'),
    ('YYYY_MM_DD', re.compile(r'20\d{2}_\d{2}_\d{2}'), '%Y_%m_%d'),
    ('YYYY-MM', re.compile(r'20\d{2}-\d{2}'), '%Y-%m'),
    ('MM-YYYY', re.compile(r'\d{2}-20\d{2}'), '%m-%Y'),
    ('YYYYMMDD', re.compile(r'20\d{2}\d{2}\d{2}'), '%Y%m%d'),
)

STRFTIME_FORMATS: Dict[str, str] = {label: fmt for label, _, fmt in FILENAME_DATE_FORMATS}


def format_date(value: date, date_format: str) -> str:
    """Render a date using one of the FILENAME_DATE_FORMATS labels"""
    try:
        return value.strftime(STRFTIME_FORMATS[date_format])
    except KeyError:
        raise ValueError(f"Unsupported date format: {date_format}") from None


def default_pattern(folder_name: str) -> NamingPattern:
    return NamingPattern(prefix=f"{folder_name}_", date_format=DEFAULT_DATE_FORMAT, suffix='')


def tally_patterns(stems: Iterable[str]) -> Counter:
    """
    Count (prefix, format, suffix) triples over filename stems

    Every format that matches a stem contributes one count, so a stem like
    'Chase_2023-01-31' counts toward both YYYY-MM-DD and YYYY-MM. Counter
    keeps insertion order, which decides ties.
    """
    tally: Counter = Counter()
    for stem in stems:
        for label, regex, _ in FILENAME_DATE_FORMATS:
            match = regex.search(stem)
            if match:
                tally[NamingPattern(
                    prefix=stem[:match.start()],
                    date_format=label,
                    suffix=stem[match.end():],
                )] += 1
    return tally


def most_common_pattern(tally: Counter) -> Optional[NamingPattern]:
    """Highest count wins; the first-seen pattern wins ties"""
    best: Optional[NamingPattern] = None
    best_count = 0
    for pattern, count in tally.items():
        if count > best_count:
            best, best_count = pattern, count
    return best


class NamingPatternInferencer:
    """Infers the dominant naming convention of a destination folder"""

    def folder_stems(self, folder: Path, extension: str) -> list:
        extension = extension.lower().lstrip('.')
        try:
            entries = sorted(Path(folder).iterdir())
        except (OSError, ValueError) as e:
            logger.warning("Cannot list destination folder", folder=str(folder), error=str(e))
            return []
        return [
            entry.stem for entry in entries
            if entry.is_file()
            and not entry.name.startswith('.')
            and entry.suffix.lower().lstrip('.') == extension
        ]

    def infer(self, folder: Path, extension: str = 'pdf') -> NamingPattern:
        """
        Infer the naming pattern for new files of the given extension

        Falls back to '<folder name>_YYYY-MM' when no filename holds a date.
        """
        folder = Path(folder)
        pattern = most_common_pattern(tally_patterns(self.folder_stems(folder, extension)))
        if pattern is None:
            pattern = default_pattern(folder.name)
            logger.debug("No dated filenames, using default pattern",
                         folder=str(folder), prefix=pattern.prefix)
        return pattern
