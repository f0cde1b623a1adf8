"""
Tests for structured logging and performance tracking
"""
import json
from unittest.mock import patch

import psutil
import pytest

from autoorganizer.monitoring.logger import StructuredLogger, get_logger, log_performance
from autoorganizer.monitoring.performance_tracker import PerformanceTracker


class TestStructuredLogger:

    @pytest.fixture
    def logger(self, tmp_path):
        return StructuredLogger('test_autoorganizer_logger', str(tmp_path))

    def test_logger_initialization(self, logger):
        assert logger.name == 'test_autoorganizer_logger'
        assert len(logger.logger.handlers) > 0

    def test_info_entry_is_json_with_fields(self, logger):
        with patch.object(logger.logger, 'info') as mock_info:
            logger.info("Destination folder profiled", folder="/dest/Chase", token_count=7)

            logged_data = json.loads(mock_info.call_args[0][0])
            assert logged_data['level'] == 'INFO'
            assert logged_data['message'] == "Destination folder profiled"
            assert logged_data['token_count'] == 7

    def test_error_with_exception(self, logger):
        with patch.object(logger.logger, 'error') as mock_error:
            logger.error("Move failed", exception=FileExistsError("taken"))

            logged_data = json.loads(mock_error.call_args[0][0])
            assert logged_data['exception']['type'] == 'FileExistsError'

    def test_non_json_values_are_stringified(self, logger, tmp_path):
        with patch.object(logger.logger, 'info') as mock_info:
            logger.info("Document moved", target_path=tmp_path / 'a.pdf')
            assert json.loads(mock_info.call_args[0][0])['target_path'] == str(tmp_path / 'a.pdf')

    def test_get_logger_reuses_instances(self):
        assert get_logger('autoorganizer_test_registry') is get_logger('autoorganizer_test_registry')


class TestLogPerformance:

    def test_success_is_logged(self):
        @log_performance("unit_operation")
        def work():
            return 42

        with patch.object(get_logger('performance').logger, 'info') as mock_info:
            assert work() == 42
            logged_data = json.loads(mock_info.call_args[0][0])
            assert logged_data['operation'] == 'unit_operation'
            assert logged_data['status'] == 'success'

    def test_failure_is_logged_and_reraised(self):
        @log_performance("unit_operation")
        def work():
            raise OSError("disk gone")

        with patch.object(get_logger('performance').logger, 'error') as mock_error:
            with pytest.raises(OSError):
                work()
            assert json.loads(mock_error.call_args[0][0])['status'] == 'error'


class TestPerformanceTracker:

    def test_operation_stats(self):
        tracker = PerformanceTracker()
        tracker.record_operation('scan', 0.2)
        tracker.record_operation('scan', 0.4, success=False)

        stats = tracker.get_operation_stats()['scan']
        assert stats['count'] == 2
        assert stats['failures'] == 1
        assert stats['avg'] == pytest.approx(0.3)
        assert stats['max'] == 0.4

    def test_summary_contains_system_snapshot(self):
        summary = PerformanceTracker().get_summary()
        assert 'process_rss' in summary['system']

    def test_system_snapshot_survives_psutil_errors(self):
        with patch('autoorganizer.monitoring.performance_tracker.psutil.Process',
                   side_effect=psutil.AccessDenied()):
            assert PerformanceTracker().get_system_snapshot() == {}
