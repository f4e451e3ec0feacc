"""
Two-stage bill search: exact-field filtering followed by token-set filtering
"""

from .criteria import SearchCriteria, UnknownCriterionError, InvalidCriterionError, CRITERIA_KEYS, \
    SINGLE_SEARCH_KEYS
from .single_search import single_search
from .multi_search import multi_search, split_terms
from .orchestrator import BillSearch, SearchOutcome, SearchStatus, ResultsWriteError

__all__ = [
    'SearchCriteria',
    'UnknownCriterionError',
    'InvalidCriterionError',
    'CRITERIA_KEYS',
    'SINGLE_SEARCH_KEYS',
    'single_search',
    'multi_search',
    'split_terms',
    'BillSearch',
    'SearchOutcome',
    'SearchStatus',
    'ResultsWriteError'
]
