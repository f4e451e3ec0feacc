"""
Unit tests for header validation and structured logging helpers.
"""

import json
import logging
import unittest

from storage.models import CSV_HEADERS
from validation.validators import SchemaValidator
from utils.logging_config import JSONFormatter, get_contextual_logger, log_search_stage


class TestSchemaValidator(unittest.TestCase):
    """Test spreadsheet header checks"""

    def test_full_header_passes(self):
        validator = SchemaValidator('bills.csv')

        self.assertTrue(validator.validate_headers(CSV_HEADERS))
        self.assertEqual(validator.get_failures(), [])
        self.assertEqual(validator.summary(), 'schema valid')

    def test_missing_and_unknown_columns_are_warnings(self):
        validator = SchemaValidator('bills.csv')

        self.assertTrue(validator.validate_headers(['Title', ' Committee ', 'Sponsor']))

        statuses = {r.check_name: r.status for r in validator.get_results()}
        self.assertEqual(statuses['missing_columns'], 'WARNING')
        self.assertEqual(statuses['unknown_columns'], 'WARNING')
        missing = [r for r in validator.get_results() if r.check_name == 'missing_columns'][0]
        self.assertNotIn('Committee', missing.actual)

    def test_no_header(self):
        validator = SchemaValidator('empty.csv')

        self.assertFalse(validator.validate_headers(None))
        self.assertIn('no header row', validator.summary())

    def test_no_known_columns(self):
        validator = SchemaValidator('other.csv')

        self.assertFalse(validator.validate_headers(['Name', 'Price']))
        self.assertIn('Name, Price', validator.summary())

        validator.clear_results()
        self.assertEqual(validator.get_results(), [])


class _ListHandler(logging.Handler):

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestStructuredLogging(unittest.TestCase):
    """Test JSON formatting and context propagation"""

    def setUp(self):
        self.handler = _ListHandler()
        self.logger = logging.getLogger('tests.structured')
        self.logger.addHandler(self.handler)
        self.logger.setLevel(logging.DEBUG)
        self.addCleanup(self.logger.removeHandler, self.handler)

    def test_context_fields_in_json(self):
        adapter = get_contextual_logger('tests.structured', source='bills.csv')
        adapter.info("Searching 3 bills")

        entry = json.loads(JSONFormatter().format(self.handler.records[0]))
        self.assertEqual(entry['message'], 'Searching 3 bills')
        self.assertEqual(entry['source'], 'bills.csv')
        self.assertEqual(entry['level'], 'INFO')

    def test_search_stage_fields(self):
        log_search_stage(self.logger, 'single_search', 10, 4, ['Committee'])

        record = self.handler.records[0]
        self.assertEqual(record.levelno, logging.DEBUG)
        self.assertEqual(record.ctx_stage_output, 4)
        self.assertIn('4 of 10 records matched', record.getMessage())

    def test_pass_through_message(self):
        log_search_stage(self.logger, 'single_search', 10, 10, passed_through=True)
        self.assertIn('passing 10 records through', self.handler.records[0].getMessage())


if __name__ == '__main__':
    unittest.main()
