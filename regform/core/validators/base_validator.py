"""
Base validator interface for all validation rules.

All validators must inherit from BaseValidator and implement the check() method.
"""

from abc import ABC, abstractmethod
from typing import Any

from regform.core.models import FormRecord


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    A validator is one (predicate, message) pair. The predicate is total:
    it returns a boolean for every string and never raises for bad input.
    """

    def __init__(self, field_name: str, message: str, parameters: dict[str, Any] | None = None):
        """
        Initialize validator.

        Args:
            field_name: Name of the field to validate
            message: Message reported when the predicate returns False
            parameters: Rule-specific parameters (e.g., min_length)
        """
        if not message:
            raise ValueError(f"Rule for field '{field_name}' requires a non-empty message")

        self.field_name = field_name
        self.message = message
        self.parameters = parameters or {}

    @abstractmethod
    def check(self, value: str, record: FormRecord | None = None) -> bool:
        """
        Apply the predicate to a value.

        Args:
            value: The field value to check
            record: The entire form snapshot (for cross-field rules)

        Returns:
            True if the value satisfies this rule
        """
        pass

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the rule type identifier."""
        pass

    def __call__(self, value: str, record: FormRecord | None = None) -> bool:
        return self.check(value, record)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, params={self.parameters})"
