"""
Destination profiling
Builds one vocabulary/extension profile per folder that already holds documents
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Set

from ..matching.models import DestinationProfile, SourceDocument
from ..matching.tokenizer import TokenSet, tokenize_filename, tokenize_text
from ..monitoring import get_logger
from ..pdf import PDFProcessor
from ..settings import config
from .manager import DirectoryManager

logger = get_logger('destination_profiler')

TokenProvider = Callable[[Path], TokenSet]


class DocumentTokenizer:
    """Content tokens first, filename tokens when extraction yields nothing"""

    def __init__(self, text_extractor: Optional[PDFProcessor] = None,
                 max_pages: Optional[int] = None):
        self.text_extractor = text_extractor or PDFProcessor(max_pages=config.max_pages)
        self.max_pages = max_pages or config.max_pages
        self.providers: Sequence[tuple] = (
            ('content', self.content_tokens),
            ('filename', self.filename_tokens),
        )

    def content_tokens(self, path: Path) -> TokenSet:
        return tokenize_text(self.text_extractor.extract_text(str(path), self.max_pages))

    def filename_tokens(self, path: Path) -> TokenSet:
        return tokenize_filename(path.stem)

    def tokens_for(self, path: Path) -> tuple:
        """Return (tokens, provider name) from the first provider with a non-empty result"""
        for name, provider in self.providers:
            tokens = provider(path)
            if tokens:
                return tokens, name
        return frozenset(), 'none'

    def build_source(self, path: Path) -> SourceDocument:
        tokens, token_source = self.tokens_for(path)
        return SourceDocument(
            path=path,
            tokens=tokens,
            extension=path.suffix.lower().lstrip('.'),
            token_source=token_source,
        )


class DestinationProfiler:
    """Walks a destination root and aggregates tokens per leaf folder"""

    def __init__(self, directory_manager: Optional[DirectoryManager] = None,
                 document_tokenizer: Optional[DocumentTokenizer] = None):
        self.directory_manager = directory_manager or DirectoryManager()
        self.document_tokenizer = document_tokenizer or DocumentTokenizer()

    def build_profiles(self, root: Path, should_stop: Callable[[], bool] = lambda: False) -> List[DestinationProfile]:
        """
        Profile every folder under root that contains at least one tracked document

        Args:
            root: Destination root directory
            should_stop: Polled between documents; a true result aborts with an empty list

        Returns:
            Profiles sorted by folder path
        """
        tokens_by_folder: Dict[Path, Set[str]] = {}
        extensions_by_folder: Dict[Path, Set[str]] = {}
        counts: Dict[Path, int] = {}

        for path in self.directory_manager.iter_documents(Path(root)):
            if should_stop():
                return []

            folder = path.parent
            document_tokens, _ = self.document_tokenizer.tokens_for(path)
            folder_tokens = tokenize_filename(folder.name)

            tokens_by_folder.setdefault(folder, set()).update(document_tokens | folder_tokens)
            extension = path.suffix.lower().lstrip('.')
            if extension:
                extensions_by_folder.setdefault(folder, set()).add(extension)
            counts[folder] = counts.get(folder, 0) + 1

        profiles = [
            DestinationProfile(
                folder=folder,
                tokens=frozenset(tokens),
                extensions=frozenset(extensions_by_folder.get(folder, ())),
                document_count=counts[folder],
            )
            for folder, tokens in sorted(tokens_by_folder.items())
        ]

        for profile in profiles:
            logger.info("Destination folder profiled",
                        folder=str(profile.folder),
                        token_count=len(profile.tokens),
                        extensions=sorted(profile.extensions),
                        document_count=profile.document_count)

        if not profiles:
            logger.info("No destination documents found", root=str(root))

        return profiles
