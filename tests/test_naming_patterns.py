"""
Tests for naming pattern inference
"""
from datetime import date
from pathlib import Path

import pytest

from autoorganizer.matching.models import NamingPattern
from autoorganizer.services.naming_patterns import (
    NamingPatternInferencer,
    default_pattern,
    format_date,
    most_common_pattern,
    tally_patterns,
)


class TestTallyPatterns:

    def test_year_month_names(self):
        tally = tally_patterns(['Chase_2023-01', 'Chase_2023-02'])
        assert most_common_pattern(tally) == NamingPattern('Chase_', 'YYYY-MM', '')

    def test_full_date_counts_toward_every_matching_format(self):
        tally = tally_patterns(['Chase_2023-01-31'])
        assert tally[NamingPattern('Chase_', 'YYYY-MM-DD', '')] == 1
        assert tally[NamingPattern('Chase_', 'YYYY-MM', '-31')] == 1

    def test_tie_goes_to_first_seen(self):
        tally = tally_patterns(['Chase_2023-01-31', 'Chase_2023-02-28'])
        assert most_common_pattern(tally) == NamingPattern('Chase_', 'YYYY-MM-DD', '')

    def test_majority_wins(self):
        tally = tally_patterns(['Bill 05-2023 paid', 'Bill 06-2023 paid', 'Bill_20230701'])
        assert most_common_pattern(tally) == NamingPattern('Bill ', 'MM-YYYY', ' paid')

    def test_undated_names(self):
        assert most_common_pattern(tally_patterns(['notes', 'receipt'])) is None


class TestFormatDate:

    @pytest.mark.parametrize('label, expected', [
        ('YYYY-MM-DD', '2023-04-09'),
        ('MM-DD-YYYY', '04-09-2023'),
        ('YYYY_MM_DD', '2023_04_09'),
        ('YYYY-MM', '2023-04'),
        ('MM-YYYY', '04-2023'),
        ('YYYYMMDD', '20230409'),
    ])
    def test_labels(self, label, expected):
        assert format_date(date(2023, 4, 9), label) == expected

    def test_unknown_label(self):
        with pytest.raises(ValueError):
            format_date(date(2023, 4, 9), 'DD.MM.YYYY')


class TestNamingPatternInferencer:

    def test_infers_from_folder(self, temp_dirs, write_document):
        chase = temp_dirs['destination_root'] / 'Chase'
        write_document(chase, 'Chase_2023-01.pdf')
        write_document(chase, 'Chase_2023-02.pdf')
        write_document(chase, 'Chase_2023-03.pdf')

        assert NamingPatternInferencer().infer(chase, 'pdf') == NamingPattern('Chase_', 'YYYY-MM', '')

    def test_ignores_other_extensions_and_hidden_files(self, temp_dirs, write_document):
        folder = temp_dirs['destination_root'] / 'Taxes'
        write_document(folder, 'return_2022_04_15.pdf')
        write_document(folder, 'notes 2021-01-01.txt')
        write_document(folder, 'notes 2021-02-01.txt')
        write_document(folder, '.hidden_2020-01-01.pdf')

        assert NamingPatternInferencer().infer(folder, 'pdf') == NamingPattern('return_', 'YYYY_MM_DD', '')

    def test_default_when_nothing_dated(self, temp_dirs, write_document):
        folder = temp_dirs['destination_root'] / 'Insurance'
        write_document(folder, 'policy.pdf')

        assert NamingPatternInferencer().infer(folder) == default_pattern('Insurance')
        assert default_pattern('Insurance') == NamingPattern('Insurance_', 'YYYY-MM', '')

    def test_missing_folder_falls_back(self, temp_dirs):
        missing = Path(temp_dirs['destination_root']) / 'Gone'
        assert NamingPatternInferencer().infer(missing) == default_pattern('Gone')
