"""
Validation system for Bill Search Tool

Checks loaded bill spreadsheets against the known column schema
before records are handed to the search engine.
"""

import logging
from typing import Dict, List, Any, Optional, Sequence
from dataclasses import dataclass
from datetime import datetime

from storage.models import CSV_HEADERS
from utils.logging_config import get_contextual_logger

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check"""
    validator_name: str
    check_name: str
    status: str  # 'PASS', 'FAIL', 'WARNING'
    expected: Any
    actual: Any
    message: str
    details: Optional[Dict[str, Any]] = None
    timestamp: str = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now().isoformat()


class BaseValidator:
    """Base class for all validators"""

    def __init__(self, source: Optional[str] = None):
        self.source = source
        self.logger = get_contextual_logger(
            f'validation.{self.__class__.__name__}', source=source
        )
        self.results: List[ValidationResult] = []

    def add_result(self, check_name: str, status: str, expected: Any, actual: Any,
                   message: str, details: Optional[Dict] = None):
        """Add a validation result"""
        result = ValidationResult(
            validator_name=self.__class__.__name__,
            check_name=check_name,
            status=status,
            expected=expected,
            actual=actual,
            message=message,
            details=details
        )
        self.results.append(result)

        if status == 'FAIL':
            self.logger.error(f"{check_name}: {message}")
        elif status == 'WARNING':
            self.logger.warning(f"{check_name}: {message}")
        elif status == 'PASS':
            self.logger.debug(f"{check_name}: {message}")

    def get_results(self) -> List[ValidationResult]:
        """Get all validation results"""
        return self.results

    def get_failures(self) -> List[ValidationResult]:
        return [r for r in self.results if r.status == 'FAIL']

    def clear_results(self):
        """Clear all validation results"""
        self.results.clear()


class SchemaValidator(BaseValidator):
    """
    Validates a spreadsheet header against the bill column schema

    Missing columns are tolerated and reported as warnings; a header
    with none of the known columns is a schema mismatch.
    """

    def __init__(self, source: Optional[str] = None,
                 expected_headers: Optional[Sequence[str]] = None):
        super().__init__(source)
        self.expected_headers = list(expected_headers or CSV_HEADERS)

    def validate_headers(self, headers: Optional[Sequence[str]]) -> bool:
        """
        Check a header row

        Args:
            headers: Column names as read from the file (None if the file is empty)

        Returns:
            False if the header cannot describe bill records at all
        """
        if not headers:
            self.add_result(
                'header_present', 'FAIL',
                expected=self.expected_headers, actual=[],
                message="File has no header row"
            )
            return False

        headers = [h.strip() if h else '' for h in headers]
        known = [h for h in headers if h in self.expected_headers]
        missing = [h for h in self.expected_headers if h not in headers]
        unknown = [h for h in headers if h and h not in self.expected_headers]

        if not known:
            self.add_result(
                'known_columns', 'FAIL',
                expected=self.expected_headers, actual=headers,
                message=f"None of the bill columns were found (got: {', '.join(headers)})"
            )
            return False

        self.add_result(
            'known_columns', 'PASS',
            expected=len(self.expected_headers), actual=len(known),
            message=f"{len(known)} of {len(self.expected_headers)} bill columns present"
        )

        if missing:
            self.add_result(
                'missing_columns', 'WARNING',
                expected=[], actual=missing,
                message=f"Missing columns will load as empty: {', '.join(missing)}"
            )

        if unknown:
            self.add_result(
                'unknown_columns', 'WARNING',
                expected=[], actual=unknown,
                message=f"Ignoring unrecognized columns: {', '.join(unknown)}",
                details={'columns': unknown}
            )

        return True

    def summary(self) -> str:
        """One line summary of the failures, for error messages"""
        failures = self.get_failures()
        if not failures:
            return "schema valid"
        return "; ".join(f.message for f in failures)
