"""
Utility modules for Bill Search Tool
"""

from .logging_config import (
    setup_logging,
    get_contextual_logger,
    log_search_stage,
    log_file_operation,
    init_from_environment
)
from .config import AppConfig, load_config

__all__ = [
    'setup_logging',
    'get_contextual_logger',
    'log_search_stage',
    'log_file_operation',
    'init_from_environment',
    'AppConfig',
    'load_config'
]
