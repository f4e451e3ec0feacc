"""
In-memory record store for a loaded bill spreadsheet
"""

import csv
import logging
import time
from collections import Counter
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from storage.models import BillRecord, CommitteeStatistic
from validation.validators import SchemaValidator
from utils.logging_config import log_file_operation

logger = logging.getLogger(__name__)


class RecordLoadError(Exception):
    """Raised when a bill spreadsheet cannot be read"""
    pass


class SchemaMismatchError(RecordLoadError):
    """Raised when a spreadsheet header does not describe bill records"""
    pass


class RecordStore:
    """
    Holds the bills of one loaded spreadsheet

    The records are exposed as a tuple so searches work on a read-only
    snapshot. Loading another file replaces the snapshot as a whole.
    """

    def __init__(self, records: Optional[List[BillRecord]] = None,
                 source_path: Optional[str] = None):
        self._records: Tuple[BillRecord, ...] = tuple(records or ())
        self.source_path = source_path

    @classmethod
    def from_csv(cls, file_path: str,
                 progress_callback: Optional[Callable[[int], None]] = None) -> 'RecordStore':
        store = cls()
        store.load(file_path, progress_callback=progress_callback)
        return store

    @property
    def records(self) -> Tuple[BillRecord, ...]:
        return self._records

    @property
    def is_loaded(self) -> bool:
        return self.source_path is not None

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def load(self, file_path: str,
             progress_callback: Optional[Callable[[int], None]] = None) -> int:
        """
        Read a bill spreadsheet, replacing anything previously loaded

        Args:
            file_path: Path to a CSV file with bill columns
            progress_callback: Called with the running row count every 1000 rows

        Returns:
            Number of records loaded

        Raises:
            SchemaMismatchError: header missing or without any bill column
            RecordLoadError: file could not be opened or decoded
        """
        start_time = time.time()
        path = Path(file_path)
        validator = SchemaValidator(source=str(path))
        records: List[BillRecord] = []

        try:
            # utf-8-sig strips the BOM spreadsheet programs put on exported CSVs
            with open(path, 'r', newline='', encoding='utf-8-sig') as csvfile:
                reader = csv.DictReader(csvfile)

                if not validator.validate_headers(reader.fieldnames):
                    raise SchemaMismatchError(
                        f"{path} is not a bill spreadsheet: {validator.summary()}"
                    )
                # Row keys must match the names the validator checked
                reader.fieldnames = [h.strip() if h else h for h in reader.fieldnames]

                for i, row in enumerate(reader):
                    records.append(BillRecord.from_csv_row(row))
                    if progress_callback and (i + 1) % 1000 == 0:
                        progress_callback(i + 1)

        except SchemaMismatchError as e:
            log_file_operation(logger, 'LOAD', str(path), 0,
                               time.time() - start_time, success=False, error=str(e))
            raise
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            log_file_operation(logger, 'LOAD', str(path), len(records),
                               time.time() - start_time, success=False, error=str(e))
            raise RecordLoadError(f"Could not read {path}: {e}") from e

        if progress_callback:
            progress_callback(len(records))

        self._records = tuple(records)
        self.source_path = str(path)

        log_file_operation(logger, 'LOAD', self.source_path, len(self._records),
                           time.time() - start_time)
        return len(self._records)

    def committee_statistics(self) -> List[CommitteeStatistic]:
        """
        Count loaded bills per committee

        Committees appear in the order they are first seen; bills without
        a committee are grouped under None.
        """
        counts = Counter(record.committee for record in self._records)
        return [
            CommitteeStatistic(committee=committee, count=count)
            for committee, count in counts.items()
        ]
