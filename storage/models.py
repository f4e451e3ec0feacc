"""
Data models for legislative bill records
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Any


# Attribute name -> CSV column header, in input-schema order
CSV_COLUMNS: Dict[str, str] = {
    'title': 'Title',
    'description': 'Description',
    'keywords': 'Keywords',
    'legislative_session': 'Legislative Session',
    'senators_intro_committee': 'Senators/Intro Committee',
    'representatives': 'Representatives',
    'committee': 'Committee',
}

CSV_HEADERS: List[str] = list(CSV_COLUMNS.values())


@dataclass(frozen=True)
class BillRecord:
    """Represents a single bill row from a legislative bill spreadsheet"""

    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[str] = None
    legislative_session: Optional[str] = None
    senators_intro_committee: Optional[str] = None
    representatives: Optional[str] = None
    committee: Optional[str] = None

    @classmethod
    def from_csv_row(cls, row: Dict[str, Any]) -> 'BillRecord':
        """
        Create a BillRecord from a csv.DictReader row

        Missing columns and blank cells become None; unknown columns
        are ignored.
        """
        values = {}
        for attribute, column in CSV_COLUMNS.items():
            value = row.get(column)
            if value is None or value == '':
                values[attribute] = None
            else:
                values[attribute] = str(value)
        return cls(**values)

    def to_csv_row(self) -> Dict[str, str]:
        """Return the record keyed by CSV header, None written as an empty cell"""
        return {
            column: getattr(self, attribute) or ''
            for attribute, column in CSV_COLUMNS.items()
        }

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert to dictionary keyed by attribute name"""
        return asdict(self)


@dataclass(frozen=True)
class CommitteeStatistic:
    """Number of loaded bills referred to one committee"""

    committee: Optional[str]
    count: int

    def to_csv_row(self) -> Dict[str, Any]:
        return {'Committee': self.committee or '', 'Count': self.count}
