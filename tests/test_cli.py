"""
Tests for the command-line interface using click's CliRunner.
"""

import os
import tempfile
import unittest
from unittest.mock import patch

from click.testing import CliRunner

from cli.main import cli, resolve_output_path
from search.orchestrator import BillSearch
from utils.config import AppConfig
from bill_fixtures import sample_csv, read_csv_rows


class TestSearchCommand(unittest.TestCase):
    """Test the search, stats and list-records commands"""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.data_file = sample_csv(self.tmpdir.name)
        self.runner = CliRunner()
        self.base_args = ['--config', os.path.join(self.tmpdir.name, 'missing.env')]

    def invoke(self, *args):
        return self.runner.invoke(cli, self.base_args + list(args))

    def test_search_by_committee(self):
        result = self.invoke('search', self.data_file, '-o', self.tmpdir.name, '-c', 'Judiciary')

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('Search results saved to:', result.output)
        self.assertIn('1 matching bills', result.output)

        _, rows = read_csv_rows(os.path.join(self.tmpdir.name, 'TEMPORARYsearchResults.csv'))
        self.assertEqual(rows[0]['Committee'], 'Judiciary')

    def test_search_keywords_and_preview(self):
        result = self.invoke('search', self.data_file, '-o', self.tmpdir.name,
                             '-k', 'Drugs', '--preview', '5')

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('2 matching bills', result.output)
        self.assertIn('2023 Assembly Bill 2', result.output)

    def test_preview_reuses_search_matches(self):
        calls = []
        original = BillSearch.find_matches

        def counting_find_matches(search, criteria):
            calls.append(criteria)
            return original(search, criteria)

        with patch.object(BillSearch, 'find_matches', counting_find_matches):
            result = self.invoke('search', self.data_file, '-o', self.tmpdir.name,
                                 '-k', 'Drugs', '--preview', '5')

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('2023 Senate Bill 1', result.output)
        self.assertEqual(len(calls), 1)

    def test_search_without_matches(self):
        result = self.invoke('search', self.data_file, '-o', self.tmpdir.name, '-c', 'Agriculture')

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('No matching results found.', result.output)
        self.assertFalse(os.path.exists(os.path.join(self.tmpdir.name, 'TEMPORARYsearchResults.csv')))

    def test_search_json_format(self):
        result = self.invoke('search', self.data_file, '-o', self.tmpdir.name,
                             '-c', 'Finance', '--format', 'json')

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(os.path.exists(os.path.join(self.tmpdir.name, 'TEMPORARYsearchResults.json')))

    def test_invalid_output_folder(self):
        missing = os.path.join(self.tmpdir.name, 'nowhere', 'results.csv')
        result = self.invoke('search', self.data_file, '-o', missing, '-c', 'Judiciary')

        self.assertEqual(result.exit_code, 2)
        self.assertIn('Please select a valid output folder', result.output)

    def test_search_requires_file(self):
        result = self.invoke('search', '-o', self.tmpdir.name)

        self.assertEqual(result.exit_code, 2)
        self.assertIn('Please load a file first', result.output)

    def test_unreadable_file_reports_error(self):
        result = self.invoke('search', os.path.join(self.tmpdir.name, 'nope.csv'), '-o', self.tmpdir.name)

        self.assertEqual(result.exit_code, 1)
        self.assertIn('An error occurred', result.output)

    def test_stats_command(self):
        output = os.path.join(self.tmpdir.name, 'stats.csv')
        result = self.invoke('stats', self.data_file, '-o', output)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('Committee statistics have been generated', result.output)
        headers, rows = read_csv_rows(output)
        self.assertEqual(headers, ['Committee', 'Count'])
        self.assertEqual(len(rows), 3)

    def test_list_records(self):
        result = self.invoke('list-records', self.data_file, '--limit', '2')

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('2023 Senate Bill 1', result.output)
        self.assertIn('Author: Carpenter', result.output)
        self.assertNotIn('2021 Senate Bill 300', result.output)


class TestResolveOutputPath(unittest.TestCase):
    """Test output path resolution"""

    def test_directory_gets_results_filename(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = resolve_output_path(tmpdir, AppConfig(), 'csv')
            self.assertEqual(path, os.path.join(tmpdir, 'TEMPORARYsearchResults.csv'))

    def test_json_changes_extension(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = resolve_output_path(tmpdir, AppConfig(), 'json')
            self.assertEqual(path, os.path.join(tmpdir, 'TEMPORARYsearchResults.json'))

    def test_file_path_in_existing_folder(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = os.path.join(tmpdir, 'mine.csv')
            self.assertEqual(resolve_output_path(target, AppConfig(), 'csv'), target)

    def test_defaults_to_configured_folder(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = resolve_output_path(None, AppConfig(output_dir=tmpdir), 'csv')
            self.assertEqual(path, os.path.join(tmpdir, 'TEMPORARYsearchResults.csv'))


if __name__ == '__main__':
    unittest.main()
