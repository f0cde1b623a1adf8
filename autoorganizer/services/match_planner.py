"""
Match Planner
Scores every source document against every destination profile and proposes moves
"""

from dataclasses import replace
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from ..directory import DestinationProfiler, DirectoryManager, DocumentTokenizer
from ..errors import ScanCancelledError, ScanError
from ..matching.models import DestinationProfile, MatchCandidate, ScanResult, SourceDocument
from ..matching.scorer import score, score_breakdown
from ..monitoring import get_logger, log_performance
from ..pdf import PDFProcessor
from ..settings import config
from .date_extraction import DateResolver
from .file_renaming import FilenameGenerator, folder_exists_check
from .naming_patterns import NamingPatternInferencer

logger = get_logger('match_planner')

StopCheck = Callable[[], bool]


def _never_stop() -> bool:
    return False


class MatchPlanner:
    """Orchestrates tokenization, profiling, scoring, dating and naming"""

    def __init__(self,
                 text_extractor: Optional[PDFProcessor] = None,
                 directory_manager: Optional[DirectoryManager] = None,
                 max_pages: Optional[int] = None,
                 date_pages: Optional[int] = None):
        self.text_extractor = text_extractor or PDFProcessor(max_pages=config.max_pages)
        self.directory_manager = directory_manager or DirectoryManager()
        self.document_tokenizer = DocumentTokenizer(self.text_extractor, max_pages=max_pages)
        self.profiler = DestinationProfiler(self.directory_manager, self.document_tokenizer)
        self.date_resolver = DateResolver(self.text_extractor, self.directory_manager, date_pages=date_pages)
        self.inferencer = NamingPatternInferencer()
        self.generator = FilenameGenerator()

    def build_sources(self, source_dir: Path, should_stop: StopCheck = _never_stop) -> List[SourceDocument]:
        sources = []
        for path in self.directory_manager.iter_documents(Path(source_dir)):
            if should_stop():
                raise ScanCancelledError("Scan cancelled while reading sources", path=str(path))
            sources.append(self.document_tokenizer.build_source(path))
        return sources

    def best_match(self, source: SourceDocument,
                   profiles: Sequence[DestinationProfile]) -> Tuple[Optional[DestinationProfile], float]:
        """
        Highest-scoring profile for a source

        Equal scores resolve to the lexicographically smallest folder path.
        """
        best_profile = None
        best_score = 0.0
        for profile in sorted(profiles, key=lambda p: str(p.folder)):
            candidate_score = score(source, profile)
            if best_profile is None or candidate_score > best_score:
                best_profile, best_score = profile, candidate_score
        return best_profile, best_score

    def propose_filename(self, source: SourceDocument, destination: DestinationProfile,
                         reserved: Optional[Set[str]] = None) -> str:
        """
        Infer the folder pattern now so it reflects the folder's current contents

        Names in reserved count as taken, so two sources planned into the same
        folder during one scan never receive the same proposal.
        """
        reserved = reserved if reserved is not None else set()
        on_disk = folder_exists_check(destination.folder, self.directory_manager)

        document_date = self.date_resolver.resolve(source.path)
        pattern = self.inferencer.infer(destination.folder, source.extension)
        filename = self.generator.generate(
            pattern,
            document_date,
            source.path.suffix.lstrip('.'),
            lambda name: name in reserved or on_disk(name),
        )
        reserved.add(filename)
        return filename

    def plan(self, sources: Sequence[SourceDocument], profiles: Sequence[DestinationProfile],
             threshold: float, should_stop: StopCheck = _never_stop) -> ScanResult:
        """
        Build one candidate per source, sorted by descending score

        Sources whose best score is below threshold are still returned, with
        no destination and no proposed filename.
        """
        candidates = []
        reserved: Dict[Path, Set[str]] = {}
        for source in sources:
            if should_stop():
                raise ScanCancelledError("Scan cancelled while scoring", path=str(source.path))

            destination, best_score = self.best_match(source, profiles)
            if destination is None:
                logger.info("No destinations considered", source=source.name)
            else:
                breakdown = score_breakdown(source, destination)
                logger.info("Best destination",
                            source=source.name,
                            destination=destination.folder_name,
                            score=round(best_score, 6),
                            jaccard=round(breakdown.jaccard, 6),
                            extension_bonus=breakdown.extension_bonus,
                            anchor_bonus=breakdown.anchor_bonus)

            if destination is not None and best_score >= threshold:
                candidates.append(MatchCandidate(
                    source=source,
                    destination=destination,
                    score=best_score,
                    proposed_filename=self.propose_filename(
                        source, destination, reserved.setdefault(destination.folder, set())
                    ),
                ))
            else:
                candidates.append(MatchCandidate(source=source, destination=None, score=best_score))

        candidates.sort(key=lambda c: (-c.score, str(c.source.path)))
        return ScanResult(candidates=tuple(candidates), profiles=tuple(profiles), threshold=threshold)

    @log_performance("propose_moves")
    def propose_moves(self, source_dir: Path, destination_root: Path, threshold: Optional[float] = None,
                      should_stop: StopCheck = _never_stop) -> ScanResult:
        """Full scan: profile the destination tree, read sources, plan"""
        source_dir = Path(source_dir)
        destination_root = Path(destination_root)
        threshold = config.match_threshold if threshold is None else float(threshold)

        if not source_dir.is_dir():
            raise ScanError(f"Source directory not found: {source_dir}", path=str(source_dir))
        if not destination_root.is_dir():
            raise ScanError(f"Destination root not found: {destination_root}", path=str(destination_root))
        if threshold < 0:
            raise ScanError(f"Threshold must be non-negative: {threshold}")

        profiles = self.profiler.build_profiles(destination_root, should_stop=should_stop)
        if should_stop():
            raise ScanCancelledError("Scan cancelled while profiling destinations")

        sources = self.build_sources(source_dir, should_stop=should_stop)
        result = replace(
            self.plan(sources, profiles, threshold, should_stop=should_stop),
            source_dir=source_dir,
            destination_root=destination_root,
        )

        logger.info("Scan finished",
                    source_dir=str(source_dir),
                    destination_root=str(destination_root),
                    sources=len(result.candidates),
                    destinations=len(result.profiles),
                    matched=len(result.matched))
        return result
