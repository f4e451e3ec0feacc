"""
Bill search orchestration

Runs the exact-field stage, then the token-set stage, and hands the
surviving records to an exporter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Optional, Union

from storage.models import BillRecord
from storage.record_store import RecordStore
from utils.exporters import BaseExporter, CSVExporter, ExportError
from utils.logging_config import get_contextual_logger
from .criteria import SearchCriteria
from .single_search import single_search
from .multi_search import multi_search

CriteriaInput = Union[SearchCriteria, Mapping[str, object]]


class ResultsWriteError(IOError):
    """Raised when search results cannot be written to the destination"""

    def __init__(self, message: str, output_path: str):
        super().__init__(message)
        self.output_path = output_path


class SearchStatus(Enum):
    DONE = "done"
    NO_RESULTS = "no_results"


@dataclass
class SearchOutcome:
    """Result of one search_by_criteria call"""
    status: SearchStatus
    output_path: Optional[str] = None
    match_count: int = 0
    records: List[BillRecord] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.DONE

    @classmethod
    def no_results(cls) -> 'SearchOutcome':
        return cls(status=SearchStatus.NO_RESULTS)


class BillSearch:
    """
    Searches the bills of one RecordStore

    Each search reads the store's current snapshot; the store is never
    modified.
    """

    def __init__(self, store: RecordStore,
                 exporter: Optional[BaseExporter] = None,
                 trim_tokens: bool = False,
                 strict_criteria: bool = False):
        self.store = store
        self.exporter = exporter or CSVExporter()
        self.trim_tokens = trim_tokens
        self.strict_criteria = strict_criteria

    def _coerce(self, criteria: CriteriaInput) -> SearchCriteria:
        if isinstance(criteria, SearchCriteria):
            return criteria
        return SearchCriteria.from_mapping(criteria, strict=self.strict_criteria)

    def single_search(self, criteria: CriteriaInput) -> Optional[List[BillRecord]]:
        return single_search(self.store.records, self._coerce(criteria))

    def multi_search(self, criteria: CriteriaInput,
                     records: List[BillRecord]) -> Optional[List[BillRecord]]:
        return multi_search(self._coerce(criteria), records, trim_tokens=self.trim_tokens)

    def find_matches(self, criteria: CriteriaInput) -> List[BillRecord]:
        """Run both stages without writing anything; [] when nothing matched"""
        criteria = self._coerce(criteria)

        single_filtered = self.single_search(criteria)
        if not single_filtered:
            return []

        multi_filtered = self.multi_search(criteria, single_filtered)
        return multi_filtered or []

    def search_by_criteria(self, criteria: CriteriaInput, output_path: str) -> SearchOutcome:
        """
        Search the loaded bills and write the matches to ``output_path``

        Args:
            criteria: SearchCriteria or a mapping like {"Committee": ["Judiciary"]}
            output_path: Destination file for the results

        Returns:
            SearchOutcome with status DONE and the output path, or NO_RESULTS
            when either stage matched nothing (the exporter is not called)

        Raises:
            ResultsWriteError: the results could not be written
        """
        criteria = self._coerce(criteria)
        search_logger = get_contextual_logger(
            __name__,
            criteria=criteria.present_keys(),
            source=self.store.source_path,
            output_path=output_path
        )
        search_logger.info(f"Searching {len(self.store)} bills: {criteria.describe()}")

        matches = self.find_matches(criteria)
        if not matches:
            search_logger.info("No matching results found")
            return SearchOutcome.no_results()

        try:
            written_path = self.exporter.export(matches, output_path)
        except ExportError as e:
            search_logger.error(f"Failed to write {len(matches)} results: {e}")
            raise ResultsWriteError(str(e), output_path) from e

        search_logger.info(f"Search results saved to {written_path} ({len(matches)} bills)")
        return SearchOutcome(
            status=SearchStatus.DONE,
            output_path=written_path,
            match_count=len(matches),
            records=matches
        )
