"""
Validation system for Bill Search Tool

- Schema validation of loaded bill spreadsheets
"""

from .validators import (
    ValidationResult,
    BaseValidator,
    SchemaValidator
)

__all__ = [
    'ValidationResult',
    'BaseValidator',
    'SchemaValidator'
]
