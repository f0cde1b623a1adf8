"""
Scan-scoped value types shared by the profiler, scorer and planner
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Tuple

from .tokenizer import TokenSet


@dataclass(frozen=True)
class SourceDocument:
    """An unsorted document waiting for a destination"""
    path: Path
    tokens: TokenSet
    extension: str
    token_source: str = 'content'

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class DestinationProfile:
    """Aggregated vocabulary and extensions of one destination folder"""
    folder: Path
    tokens: TokenSet
    extensions: FrozenSet[str]
    document_count: int = 0

    @property
    def folder_name(self) -> str:
        return self.folder.name


@dataclass(frozen=True)
class NamingPattern:
    """prefix + date + suffix template, e.g. ('Chase_', 'YYYY-MM', '')"""
    prefix: str
    date_format: str
    suffix: str


@dataclass(frozen=True)
class MatchCandidate:
    """Best destination for one source, or none when below the threshold"""
    source: SourceDocument
    destination: Optional[DestinationProfile]
    score: float
    proposed_filename: Optional[str] = None

    @property
    def is_matched(self) -> bool:
        return self.destination is not None

    @property
    def proposed_path(self) -> Optional[Path]:
        if self.destination is None or self.proposed_filename is None:
            return None
        return self.destination.folder / self.proposed_filename

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_path': str(self.source.path),
            'source_name': self.source.name,
            'destination_path': str(self.destination.folder) if self.destination else None,
            'destination_name': self.destination.folder_name if self.destination else None,
            'score': self.score,
            'proposed_filename': self.proposed_filename,
        }


@dataclass(frozen=True)
class ScanResult:
    """Immutable outcome of one scan; candidates sorted by descending score"""
    candidates: Tuple[MatchCandidate, ...]
    profiles: Tuple[DestinationProfile, ...]
    threshold: float
    source_dir: Optional[Path] = None
    destination_root: Optional[Path] = None
    scanned_at: datetime = field(default_factory=datetime.now)

    @property
    def matched(self) -> Tuple[MatchCandidate, ...]:
        return tuple(c for c in self.candidates if c.is_matched)

    @property
    def unmatched(self) -> Tuple[MatchCandidate, ...]:
        return tuple(c for c in self.candidates if not c.is_matched)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'threshold': self.threshold,
            'source_dir': str(self.source_dir) if self.source_dir else None,
            'destination_root': str(self.destination_root) if self.destination_root else None,
            'scanned_at': self.scanned_at.isoformat(),
            'destination_count': len(self.profiles),
            'matched_count': len(self.matched),
            'candidates': [c.to_dict() for c in self.candidates],
        }
