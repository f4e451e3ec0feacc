"""
Token-set filtering of bill records

Every comma separated token entered for keywords, senators/intro
committee and representatives must appear in the matching field.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from storage.models import BillRecord
from utils.logging_config import log_search_stage
from .criteria import SearchCriteria
from .single_search import contains_ignore_case

logger = logging.getLogger(__name__)


def split_terms(terms: Optional[Sequence[str]], trim: bool = False) -> List[str]:
    """
    Flatten raw search strings into comma separated tokens

    Tokens keep surrounding whitespace unless ``trim`` is set, in which
    case they are stripped and empty tokens dropped.
    """
    tokens = []
    for term in terms or ():
        for token in term.split(','):
            if trim:
                token = token.strip()
                if not token:
                    continue
            tokens.append(token)
    return tokens


def tokens_match(value: Optional[str], tokens: Sequence[str]) -> bool:
    """True if there are no tokens or the field contains every one of them"""
    return all(contains_ignore_case(value, token) for token in tokens)


def multi_search(criteria: SearchCriteria,
                 records: Iterable[BillRecord],
                 trim_tokens: bool = False) -> Optional[List[BillRecord]]:
    """
    Second search stage

    Args:
        criteria: Search criteria; only Keywords, SenatorsIntroCommittee and
            Representatives are used here
        records: Records that survived the first stage
        trim_tokens: Strip whitespace around comma separated tokens

    Returns:
        The matching records, or None when nothing matched
    """
    records = list(records)

    keywords = split_terms(criteria.keywords, trim_tokens)
    senators = split_terms(criteria.senators_intro_committee, trim_tokens)
    representatives = split_terms(criteria.representatives, trim_tokens)

    matched = [
        record for record in records
        if tokens_match(record.keywords, keywords)
        and tokens_match(record.senators_intro_committee, senators)
        and tokens_match(record.representatives, representatives)
    ]

    log_search_stage(logger, 'multi_search', len(records), len(matched),
                     [key for key in ('Keywords', 'SenatorsIntroCommittee', 'Representatives')
                      if criteria.has(key)])
    return matched or None
