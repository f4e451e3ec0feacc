"""
Exact-field filtering of bill records

Substring matching on the scalar fields (title, description, session,
committee) and first-author matching on the senator and representative
lists.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from storage.models import BillRecord
from utils.logging_config import log_search_stage
from .criteria import SearchCriteria, SINGLE_SEARCH_KEYS

logger = logging.getLogger(__name__)

# Criterion key -> BillRecord attribute
_SCALAR_FIELDS = {
    'Title': 'title',
    'Description': 'description',
    'LegislativeSession': 'legislative_session',
    'Committee': 'committee',
}


def contains_ignore_case(value: Optional[str], term: str) -> bool:
    """
    Ordinal case-insensitive substring test

    An absent value behaves like an empty string, so it only contains
    the empty term.
    """
    return term.lower() in (value or '').lower()


def field_matches(value: Optional[str], terms: Sequence[str]) -> bool:
    """True if any term is contained in the field"""
    return any(contains_ignore_case(value, term) for term in terms)


def first_segment(value: Optional[str]) -> Optional[str]:
    """The author part of a comma separated name list, None if blank"""
    if value is None or not value.strip():
        return None
    return value.split(',')[0]


def author_matches(value: Optional[str], terms: Sequence[str]) -> bool:
    """
    True if the first listed name contains any of the terms

    A blank name list has no author and only matches the empty term.
    """
    author = first_segment(value)
    return any(contains_ignore_case(author, term) for term in terms)


def has_single_search_criteria(criteria: SearchCriteria) -> bool:
    return any(criteria.has(key) for key in SINGLE_SEARCH_KEYS)


def record_matches(record: BillRecord, criteria: SearchCriteria) -> bool:
    """Apply every present scalar and author criterion to one record"""
    for key, attribute in _SCALAR_FIELDS.items():
        terms = criteria.get(key)
        if terms is not None and not field_matches(getattr(record, attribute), terms):
            return False

    if criteria.senator_author is not None:
        if not author_matches(record.senators_intro_committee, criteria.senator_author):
            return False

    if criteria.representative_author is not None:
        if not author_matches(record.representatives, criteria.representative_author):
            return False

    return True


def single_search(records: Iterable[BillRecord],
                  criteria: SearchCriteria) -> Optional[List[BillRecord]]:
    """
    First search stage

    Without any of the Title, Description, LegislativeSession or Committee
    criteria every record is passed through unchanged (author criteria are
    not checked in that case either). Otherwise a record must satisfy all
    present criteria.

    Returns:
        The matching records, or None when nothing matched
    """
    records = list(records)

    if not has_single_search_criteria(criteria):
        log_search_stage(logger, 'single_search', len(records), len(records),
                         criteria.present_keys(), passed_through=True)
        return records

    matched = [record for record in records if record_matches(record, criteria)]

    log_search_stage(logger, 'single_search', len(records), len(matched),
                     criteria.present_keys())
    return matched or None
