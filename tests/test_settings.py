"""
Tests for configuration loading
"""
import pytest

from autoorganizer.settings import Config, normalize_extensions


class TestConfig:

    def test_defaults(self, monkeypatch):
        for name in ('SOURCE_DIR', 'DESTINATION_ROOT', 'MATCH_THRESHOLD', 'MAX_PAGES', 'TRACKED_EXTENSIONS'):
            monkeypatch.delenv(name, raising=False)

        config = Config()

        assert config.max_pages == 3
        assert config.date_pages == 1
        assert config.tracked_extensions == {'pdf'}
        assert '.git' in config.blacklist_dirs

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv('SOURCE_DIR', str(tmp_path / 'inbox'))
        monkeypatch.setenv('MATCH_THRESHOLD', '0.5')
        monkeypatch.setenv('TRACKED_EXTENSIONS', '.PDF, txt')
        monkeypatch.setenv('PORT', '8080')

        config = Config()

        assert config.source_path == tmp_path / 'inbox'
        assert config.match_threshold == 0.5
        assert config.tracked_extensions == {'pdf', 'txt'}
        assert config.port == 8080
        assert config.config_dict['TRACKED_EXTENSIONS'] == ['pdf', 'txt']

    def test_negative_threshold_rejected(self, monkeypatch):
        monkeypatch.setenv('MATCH_THRESHOLD', '-1')
        with pytest.raises(ValueError):
            Config()

    def test_summary_reports_path_existence(self, monkeypatch, tmp_path):
        monkeypatch.setenv('DESTINATION_ROOT', str(tmp_path))
        summary = Config().get_summary()

        assert summary['paths_exist']['destination_root'] is True


def test_normalize_extensions():
    assert normalize_extensions(['.PDF', ' txt ', '', 'Doc']) == {'pdf', 'txt', 'doc'}
