"""
MatchFieldValidator - validates a field equals another field of the same record.
"""

from typing import Any

from regform.core.models import FieldId, FormRecord

from .base_validator import BaseValidator


class MatchFieldValidator(BaseValidator):
    """
    Validates that a field value is identical to another field's value.

    Comparison is exact: case- and whitespace-sensitive, no trimming.
    Without a record there is nothing to compare against, so the check fails.

    Parameters:
    - other_field: Field whose value must be matched (required)
    """

    def __init__(self, field_name: str, message: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, message, parameters)

        other_field = self.parameters.get("other_field")
        if not other_field:
            raise ValueError("MatchFieldValidator requires 'other_field' parameter")

        try:
            self.other_field = FieldId(other_field)
        except ValueError:
            raise ValueError(f"Unknown field for match_field rule: {other_field}")

    def check(self, value: str, record: FormRecord | None = None) -> bool:
        if record is None:
            return False
        return value == record[self.other_field]

    @property
    def rule_type(self) -> str:
        return "match_field"
