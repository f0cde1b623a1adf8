"""
Test configuration and fixtures
"""
import shutil
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from autoorganizer.directory import DirectoryManager


class StubTextExtractor:
    """Reads '.pdf' fixtures as plain UTF-8 text so tests need no real PDFs"""

    def __init__(self):
        self.calls = []

    def extract_text(self, pdf_path, max_pages=None):
        self.calls.append((str(pdf_path), max_pages))
        path = Path(pdf_path)
        if path.suffix.lower() != '.pdf' or not path.is_file():
            return ""
        return path.read_text(encoding='utf-8', errors='ignore').strip()


class FixedTimesDirectoryManager(DirectoryManager):
    """DirectoryManager with injectable timestamps"""

    def __init__(self, created=None, modified=None, **kwargs):
        super().__init__(**kwargs)
        self.created = created
        self.modified = modified

    def get_creation_time(self, path):
        return self.created

    def get_modification_time(self, path):
        return self.modified


@pytest.fixture
def temp_dirs():
    """Create temporary source and destination roots"""
    source_dir = tempfile.mkdtemp(prefix='test_source_')
    destination_root = tempfile.mkdtemp(prefix='test_destination_')

    yield {
        'source_dir': Path(source_dir),
        'destination_root': Path(destination_root)
    }

    shutil.rmtree(source_dir, ignore_errors=True)
    shutil.rmtree(destination_root, ignore_errors=True)


@pytest.fixture
def stub_extractor():
    return StubTextExtractor()


@pytest.fixture
def fixed_times_manager():
    def build(created=None, modified=None):
        return FixedTimesDirectoryManager(created=created, modified=modified, tracked_extensions=['pdf'])
    return build


@pytest.fixture
def write_document():
    """Write a fake document whose 'extracted text' is its file content"""
    def write(folder, name, text=""):
        path = Path(folder) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')
        return path
    return write


@pytest.fixture
def bank_layout(temp_dirs, write_document):
    """Two institutions in the destination tree and one inbox statement"""
    destination = temp_dirs['destination_root']
    write_document(destination / 'Chase', 'Chase_2023-01.pdf',
                   "chase bank monthly statement checking account")
    write_document(destination / 'Chase', 'Chase_2023-02.pdf',
                   "chase bank statement checking balance")
    write_document(destination / 'Electric', 'Electric_2023-01-15.pdf',
                   "power utility electric bill kilowatt usage")
    write_document(temp_dirs['source_dir'], 'scan001.pdf',
                   "Chase Bank statement\nStatement Date: 03/15/2023\nchecking account")
    return temp_dirs


@pytest.fixture
def fixed_now():
    return lambda: datetime(2024, 6, 1, 12, 0, 0)
