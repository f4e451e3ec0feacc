"""
Search criteria for bill searches

Each recognized criterion is an optional list of raw search strings.
None means the criterion was not given at all; a list (even one holding
an empty string) means it was.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


# Criterion key -> SearchCriteria attribute
CRITERIA_KEYS: Dict[str, str] = {
    'Title': 'title',
    'Description': 'description',
    'LegislativeSession': 'legislative_session',
    'Committee': 'committee',
    'SenatorAuthor': 'senator_author',
    'RepresentativeAuthor': 'representative_author',
    'Keywords': 'keywords',
    'SenatorsIntroCommittee': 'senators_intro_committee',
    'Representatives': 'representatives',
}

# Criteria the exact-field filter evaluates by substring on a scalar field
SINGLE_SEARCH_KEYS = ('Title', 'Description', 'LegislativeSession', 'Committee')


class UnknownCriterionError(ValueError):
    """Raised by strict parsing when a criteria mapping has unrecognized keys"""
    pass


class InvalidCriterionError(ValueError):
    """Raised when a criterion value is neither a string nor a list of strings"""
    pass


@dataclass(frozen=True)
class SearchCriteria:
    """Search terms per bill field"""

    title: Optional[List[str]] = None
    description: Optional[List[str]] = None
    legislative_session: Optional[List[str]] = None
    committee: Optional[List[str]] = None
    senator_author: Optional[List[str]] = None
    representative_author: Optional[List[str]] = None
    keywords: Optional[List[str]] = None
    senators_intro_committee: Optional[List[str]] = None
    representatives: Optional[List[str]] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], strict: bool = False) -> 'SearchCriteria':
        """
        Build criteria from a mapping like ``{"Committee": ["Judiciary"]}``

        A plain string value is taken as a single term. Unrecognized keys
        are ignored unless ``strict`` is set.

        Raises:
            UnknownCriterionError: strict parsing found unrecognized keys
            InvalidCriterionError: a value is not a string or list of strings
        """
        unknown = [key for key in mapping if key not in CRITERIA_KEYS]
        if unknown:
            if strict:
                raise UnknownCriterionError(
                    f"Unrecognized search criteria: {', '.join(sorted(unknown))}"
                )
            logger.debug(f"Ignoring unrecognized criteria: {unknown}")

        values = {}
        for key, attribute in CRITERIA_KEYS.items():
            if key not in mapping:
                continue
            terms = mapping[key]
            if terms is None:
                continue
            if isinstance(terms, str):
                terms = [terms]
            if not isinstance(terms, (list, tuple)) or not all(isinstance(t, str) for t in terms):
                raise InvalidCriterionError(
                    f"{key} must be a string or a list of strings, got {terms!r}"
                )
            values[attribute] = list(terms)

        return cls(**values)

    @classmethod
    def from_form(cls,
                  title: Optional[str] = None,
                  description: Optional[str] = None,
                  legislative_session: Optional[str] = None,
                  committee: Optional[str] = None,
                  senator_author: Optional[str] = None,
                  representative_author: Optional[str] = None,
                  keywords: Optional[str] = None,
                  senators_intro_committee: Optional[str] = None,
                  representatives: Optional[str] = None) -> 'SearchCriteria':
        """
        Build criteria from single text boxes, one raw string per field

        Every field is present, as it is on the form; a blank box becomes an
        empty term, which matches every record.
        """

        def term(value):
            return [value if value and value.strip() else '']

        return cls(
            title=term(title),
            description=term(description),
            legislative_session=term(legislative_session),
            committee=term(committee),
            senator_author=term(senator_author),
            representative_author=term(representative_author),
            keywords=term(keywords),
            senators_intro_committee=term(senators_intro_committee),
            representatives=term(representatives),
        )

    def get(self, key: str) -> Optional[List[str]]:
        """Terms for a criterion key, None if absent or unrecognized"""
        attribute = CRITERIA_KEYS.get(key)
        if attribute is None:
            return None
        return getattr(self, attribute)

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def present_keys(self) -> List[str]:
        return [key for key in CRITERIA_KEYS if self.has(key)]

    def is_empty(self) -> bool:
        return not self.present_keys()

    def to_mapping(self) -> Dict[str, List[str]]:
        return {key: list(self.get(key)) for key in self.present_keys()}

    def describe(self) -> str:
        """Human readable summary of the non-blank criteria"""
        parts = []
        for key in self.present_keys():
            terms = [t for t in self.get(key) if t.strip()]
            if terms:
                parts.append(f"{key}={'|'.join(terms)}")
        return ", ".join(parts) if parts else "(no criteria)"
