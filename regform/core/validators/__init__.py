"""
Validation rule implementations.

Provides validators for required fields, minimum lengths, regex patterns,
cross-field equality, and injected custom predicates.
"""

from .base_validator import BaseValidator
from .custom_validator import CustomValidator
from .length_validator import MinLengthValidator
from .match_field_validator import MatchFieldValidator
from .regex_validator import RegexValidator
from .required_field_validator import RequiredFieldValidator

__all__ = [
    "BaseValidator",
    "RequiredFieldValidator",
    "MinLengthValidator",
    "RegexValidator",
    "MatchFieldValidator",
    "CustomValidator",
]
