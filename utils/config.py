"""
Runtime configuration for Bill Search Tool

Values come from the environment, optionally seeded from a ``config.env``
file via python-dotenv.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_RESULTS_FILENAME = "TEMPORARYsearchResults.csv"
DEFAULT_STATS_FILENAME = "committee_statistics.csv"

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in _TRUE_VALUES


def results_filename_for(export_format: str = "csv",
                         filename: str = DEFAULT_RESULTS_FILENAME) -> str:
    """Results file name with the extension of the export format"""
    if export_format == "csv":
        return filename
    return f"{os.path.splitext(filename)[0]}.{export_format}"


@dataclass
class AppConfig:
    """Configuration for search, export and the web form"""
    data_file: Optional[str] = None
    output_dir: str = "."
    results_filename: str = DEFAULT_RESULTS_FILENAME
    stats_filename: str = DEFAULT_STATS_FILENAME
    trim_tokens: bool = False
    strict_criteria: bool = False
    export_format: str = "csv"  # csv, json

    def results_path_for(self, export_format: Optional[str] = None,
                         output_dir: Optional[str] = None) -> str:
        """Results file path for a format, in ``output_dir`` or the configured folder"""
        filename = results_filename_for(export_format or self.export_format, self.results_filename)
        return os.path.join(output_dir or self.output_dir, filename)

    @classmethod
    def from_environment(cls) -> 'AppConfig':
        """Build a config from BILLSEARCH_* environment variables"""
        return cls(
            data_file=os.getenv('BILLSEARCH_DATA_FILE') or None,
            output_dir=os.getenv('BILLSEARCH_OUTPUT_DIR') or ".",
            results_filename=os.getenv('BILLSEARCH_RESULTS_FILENAME') or DEFAULT_RESULTS_FILENAME,
            stats_filename=os.getenv('BILLSEARCH_STATS_FILENAME') or DEFAULT_STATS_FILENAME,
            trim_tokens=_env_flag('BILLSEARCH_TRIM_TOKENS'),
            strict_criteria=_env_flag('BILLSEARCH_STRICT_CRITERIA'),
            export_format=(os.getenv('BILLSEARCH_EXPORT_FORMAT') or "csv").lower()
        )


def load_config(env_file: str = 'config.env') -> AppConfig:
    """
    Load configuration

    Variables already set in the environment win over the env file.
    """
    if load_dotenv(env_file):
        logger.debug(f"Loaded environment from {env_file}")
    return AppConfig.from_environment()
