"""
RequiredFieldValidator - ensures a field is not empty.
"""

from typing import Any, Dict

from regform.core.models import FormRecord

from .base_validator import BaseValidator


class RequiredFieldValidator(BaseValidator):
    """
    Validates that a field value is not empty.

    Parameters:
    - trim: Strip surrounding whitespace before checking (default True).
      Passwords are checked untrimmed, so a whitespace-only password counts
      as present.
    """

    def __init__(self, field_name: str, message: str, parameters: Dict[str, Any] | None = None):
        super().__init__(field_name, message, parameters)
        self.trim = self.parameters.get("trim", True)

    def check(self, value: str, record: FormRecord | None = None) -> bool:
        if self.trim:
            value = value.strip()
        return len(value) > 0

    @property
    def rule_type(self) -> str:
        return "required_field"
