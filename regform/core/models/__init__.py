"""
Core data models for the registration form validator.

All models use Pydantic for runtime validation and type safety.
"""

from .field_id import FIELD_ORDER, FieldId
from .field_outcome import FieldOutcome, FormValidationResult
from .form_record import FormRecord
from .validation_rule import ValidationRule

__all__ = [
    "FieldId",
    "FIELD_ORDER",
    "FormRecord",
    "ValidationRule",
    "FieldOutcome",
    "FormValidationResult",
]
