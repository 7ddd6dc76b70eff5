"""
CustomValidator - validates using an injected Python predicate.
"""

from typing import Any

from regform.core.models import FormRecord

from .base_validator import BaseValidator


class CustomValidator(BaseValidator):
    """
    Validates using a caller-supplied predicate.

    This is how rules backed by state outside the engine (such as the
    registered-email lookup) are plugged in without the engine owning that
    state.

    Parameters:
    - predicate: A callable taking (value, record) and returning a bool

    The predicate signature should be:
        def my_predicate(value: str, record: FormRecord | None) -> bool:
            return value not in taken
    """

    def __init__(self, field_name: str, message: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, message, parameters)

        self.predicate = self.parameters.get("predicate")
        if not self.predicate:
            raise ValueError("CustomValidator requires 'predicate' parameter")

        if not callable(self.predicate):
            raise ValueError("predicate must be callable")

    def check(self, value: str, record: FormRecord | None = None) -> bool:
        return bool(self.predicate(value, record))

    @property
    def rule_type(self) -> str:
        return "custom"
