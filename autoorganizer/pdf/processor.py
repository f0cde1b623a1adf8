"""
PDF Text Processing Module
Extracts leading-page text used for tokenization and date detection
"""

from pathlib import Path
from typing import Callable, List, Optional, Tuple

import fitz  # PyMuPDF
import PyPDF2

from ..monitoring import get_logger

logger = get_logger('pdf_processor')


def _read_with_pymupdf(pdf_path: Path, page_limit: int) -> List[str]:
    doc = fitz.open(str(pdf_path))
    try:
        return [doc[page_num].get_text() for page_num in range(min(page_limit, len(doc)))]
    finally:
        doc.close()


def _read_with_pypdf2(pdf_path: Path, page_limit: int) -> List[str]:
    with open(pdf_path, 'rb') as handle:
        reader = PyPDF2.PdfReader(handle)
        return [(page.extract_text() or '') for page in reader.pages[:page_limit]]


# Tried in order until one returns text
PAGE_READERS: Tuple[Tuple[str, Callable[[Path, int], List[str]]], ...] = (
    ('pymupdf', _read_with_pymupdf),
    ('pypdf2', _read_with_pypdf2),
)


class PDFProcessor:
    """Handles PDF text extraction"""

    supported_extensions = {'pdf'}

    def __init__(self, max_pages: int = 3):
        """
        Initialize PDF processor

        Args:
            max_pages: Maximum number of leading pages to read
        """
        self.max_pages = max_pages

    def supports(self, file_path: str) -> bool:
        return Path(file_path).suffix.lower().lstrip('.') in self.supported_extensions

    def extract_text_by_page(self, pdf_path: str, max_pages: Optional[int] = None) -> List[str]:
        """
        Extract text from the first pages of a PDF

        Args:
            pdf_path: Path to PDF file
            max_pages: Override default max pages limit

        Returns:
            List of page texts; empty when the file is unsupported or unreadable
        """
        path = Path(pdf_path)
        if not self.supports(path) or not path.is_file():
            return []

        page_limit = max_pages if max_pages is not None else self.max_pages

        for reader_name, reader in PAGE_READERS:
            try:
                pages = reader(path, page_limit)
            except Exception as e:
                # Corrupt or encrypted documents degrade to filename tokens
                logger.debug("PDF reader failed",
                             reader=reader_name,
                             pdf_path=str(path),
                             error=str(e))
                continue
            if any(page.strip() for page in pages):
                return pages

        logger.debug("No extractable text", pdf_path=str(path))
        return []

    def extract_text(self, pdf_path: str, max_pages: Optional[int] = None) -> str:
        """
        Extract text content from PDF

        Returns:
            Joined page text, or "" when nothing could be extracted
        """
        return "\n".join(self.extract_text_by_page(pdf_path, max_pages)).strip()
