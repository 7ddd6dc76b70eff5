"""
MinLengthValidator - validates a field value has a minimum number of characters.
"""

from typing import Any

from regform.core.models import FormRecord

from .base_validator import BaseValidator


class MinLengthValidator(BaseValidator):
    """
    Validates that a field value is at least `min_length` characters long.

    Parameters:
    - min_length: Minimum length (inclusive, required)
    - trim: Strip surrounding whitespace before measuring (default False)
    """

    def __init__(self, field_name: str, message: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, message, parameters)

        min_length = self.parameters.get("min_length")
        if min_length is None:
            raise ValueError("MinLengthValidator requires 'min_length' parameter")
        if isinstance(min_length, bool) or not isinstance(min_length, int) or min_length < 0:
            raise ValueError(f"min_length must be a non-negative integer, got {min_length!r}")

        self.min_length = min_length
        self.trim = self.parameters.get("trim", False)

    def check(self, value: str, record: FormRecord | None = None) -> bool:
        if self.trim:
            value = value.strip()
        return len(value) >= self.min_length

    @property
    def rule_type(self) -> str:
        return "min_length"
