"""
Local storage layer for Bill Search Tool
Holds loaded bill spreadsheets in memory
"""

from .models import BillRecord, CommitteeStatistic, CSV_COLUMNS, CSV_HEADERS
from .record_store import RecordStore, RecordLoadError, SchemaMismatchError

__all__ = [
    'BillRecord',
    'CommitteeStatistic',
    'CSV_COLUMNS',
    'CSV_HEADERS',
    'RecordStore',
    'RecordLoadError',
    'SchemaMismatchError'
]
