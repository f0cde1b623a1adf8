"""
Tests for background scan jobs
"""
import threading

import pytest

from autoorganizer.directory import DirectoryManager
from autoorganizer.errors import ScanCancelledError, ScanError
from autoorganizer.services.match_planner import MatchPlanner
from autoorganizer.services.scan_service import JobStatus, ScanService


class BlockingPlanner:
    """Holds the scan open until it is told to stop"""

    def __init__(self):
        self.started = threading.Event()

    def propose_moves(self, source_dir, destination_root, threshold=None, should_stop=lambda: False):
        self.started.set()
        while not should_stop():
            threading.Event().wait(0.01)
        raise ScanCancelledError("stopped")


class FailingPlanner:

    def propose_moves(self, source_dir, destination_root, threshold=None, should_stop=lambda: False):
        raise ScanError(f"Source directory not found: {source_dir}")


@pytest.fixture
def real_service(stub_extractor):
    planner = MatchPlanner(text_extractor=stub_extractor,
                           directory_manager=DirectoryManager(tracked_extensions=['pdf']))
    return ScanService(planner)


class TestScanService:

    def test_run_scan_synchronously(self, real_service, bank_layout):
        result = real_service.run_scan(bank_layout['source_dir'], bank_layout['destination_root'], 0.35)
        assert result.matched[0].proposed_filename == 'Chase_2023-03.pdf'

    def test_run_scan_propagates_input_errors(self):
        with pytest.raises(ScanError):
            ScanService(FailingPlanner()).run_scan('/nope', '/nope', 0.35)

    def test_background_job_completes(self, real_service, bank_layout):
        job_id = real_service.submit_scan(bank_layout['source_dir'], bank_layout['destination_root'], 0.35)

        job = real_service.wait_for(job_id, timeout=10)

        assert job.status == JobStatus.COMPLETED
        assert job.result.matched[0].destination.folder_name == 'Chase'
        status = real_service.get_job_status(job_id)
        assert status['status'] == 'completed'
        assert status['result']['matched_count'] == 1

    def test_failed_job_records_error(self):
        service = ScanService(FailingPlanner())
        job_id = service.submit_scan('/nope', '/nope', 0.35)

        job = service.wait_for(job_id, timeout=10)

        assert job.status == JobStatus.FAILED
        assert 'not found' in job.error_message
        assert job.result is None

    def test_cancel_running_job_discards_result(self):
        planner = BlockingPlanner()
        service = ScanService(planner)
        job_id = service.submit_scan('/in', '/out', 0.35)
        assert planner.started.wait(5)

        assert service.cancel_scan(job_id) is True

        job = service.wait_for(job_id, timeout=5)
        assert job.status == JobStatus.CANCELLED
        assert job.result is None

    def test_cannot_cancel_finished_or_unknown_job(self, real_service, bank_layout):
        job_id = real_service.submit_scan(bank_layout['source_dir'], bank_layout['destination_root'], 0.35)
        real_service.wait_for(job_id, timeout=10)

        assert real_service.cancel_scan(job_id) is False
        assert real_service.cancel_scan('unknown') is False

    def test_unknown_job_status(self, real_service):
        assert real_service.get_job_status('unknown') is None

    def test_finished_jobs_evicted_beyond_limit(self):
        service = ScanService(FailingPlanner(), max_jobs=2)
        first = service.submit_scan('/a', '/b', 0.35)
        service.wait_for(first)
        second = service.submit_scan('/a', '/b', 0.35)
        service.wait_for(second)
        third = service.submit_scan('/a', '/b', 0.35)
        service.wait_for(third)

        assert service.get_job(first) is None
        assert service.get_job(third) is not None
