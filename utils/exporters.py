"""
Export System for Bill Search Tool

Writes search results in the input spreadsheet schema (CSV) or as JSON,
and writes per-committee bill counts.
"""

import logging
import csv
import json
import time
from typing import List, Dict, Any, Optional, Iterable, Callable, Type
from dataclasses import dataclass
from datetime import datetime

from storage.models import BillRecord, CommitteeStatistic, CSV_HEADERS
from utils.config import results_filename_for
from utils.logging_config import log_file_operation

logger = logging.getLogger(__name__)


class ExportError(IOError):
    """Raised when an export file cannot be written"""
    pass


@dataclass
class ExportConfig:
    """Configuration for export operations"""
    format: str = "csv"  # csv, json
    output_path: Optional[str] = None
    progress_callback: Optional[Callable[[int, Optional[int]], None]] = None


class BaseExporter:
    """Base class for all exporters"""

    extension = ""

    def __init__(self, config: Optional[ExportConfig] = None):
        self.config = config or ExportConfig(format=self.extension)
        self.exported_count = 0

    def export(self, records: Iterable[BillRecord], output_path: Optional[str] = None) -> str:
        """
        Export records and return the output file path

        Raises:
            ExportError: the destination could not be written
        """
        start_time = time.time()
        path = output_path or self._get_output_path()
        self.exported_count = 0

        try:
            self._write(records, path)
        except (OSError, csv.Error, TypeError, ValueError) as e:
            log_file_operation(logger, 'EXPORT', path, self.exported_count,
                               time.time() - start_time, success=False, error=str(e))
            raise ExportError(f"Error writing search results to file: {e}") from e

        log_file_operation(logger, 'EXPORT', path, self.exported_count,
                           time.time() - start_time)
        return path

    def _write(self, records: Iterable[BillRecord], path: str) -> None:
        raise NotImplementedError

    def _get_output_path(self) -> str:
        """Configured output path, else the default results file in the working directory"""
        if self.config.output_path:
            return self.config.output_path
        return results_filename_for(self.extension)

    def _progress_update(self, current: int, total: Optional[int] = None):
        self.exported_count = current
        if self.config.progress_callback:
            self.config.progress_callback(current, total)


class CSVExporter(BaseExporter):
    """Export records to CSV using the same columns as the input spreadsheet"""

    extension = "csv"

    def _write(self, records: Iterable[BillRecord], path: str) -> None:
        with open(path, 'w', newline='', encoding='utf-8') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=CSV_HEADERS)
            writer.writeheader()

            for i, record in enumerate(records):
                writer.writerow(record.to_csv_row())
                self._progress_update(i + 1)


class JSONExporter(BaseExporter):
    """Export records to JSON format"""

    extension = "json"

    def _write(self, records: Iterable[BillRecord], path: str) -> None:
        records_list = []
        for i, record in enumerate(records):
            records_list.append(record.to_dict())
            self._progress_update(i + 1)

        with open(path, 'w', encoding='utf-8') as jsonfile:
            json.dump({
                'metadata': {
                    'exported_at': datetime.now().isoformat(),
                    'total_records': len(records_list)
                },
                'records': records_list
            }, jsonfile, indent=2, ensure_ascii=False)


EXPORTERS: Dict[str, Type[BaseExporter]] = {
    'csv': CSVExporter,
    'json': JSONExporter,
}


def get_exporter(format: str = "csv", config: Optional[ExportConfig] = None) -> BaseExporter:
    """Look up an exporter by format name"""
    try:
        exporter_class = EXPORTERS[format.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported export format: {format} (supported: {', '.join(get_supported_formats())})"
        )
    return exporter_class(config or ExportConfig(format=format.lower()))


def get_supported_formats() -> List[str]:
    return list(EXPORTERS.keys())


def export_committee_statistics(statistics: Iterable[CommitteeStatistic],
                                output_path: str = "committee_statistics.csv") -> str:
    """
    Write a Committee,Count CSV

    Raises:
        ExportError: the destination could not be written
    """
    start_time = time.time()
    rows: List[Dict[str, Any]] = [stat.to_csv_row() for stat in statistics]

    try:
        with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=['Committee', 'Count'])
            writer.writeheader()
            writer.writerows(rows)
    except OSError as e:
        log_file_operation(logger, 'STATS', output_path, 0,
                           time.time() - start_time, success=False, error=str(e))
        raise ExportError(f"Error writing committee statistics: {e}") from e

    log_file_operation(logger, 'STATS', output_path, len(rows), time.time() - start_time)
    return output_path
