"""
Outcome models: the result of validating one field, and the whole form.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, model_validator

from .field_id import FieldId


class FieldOutcome(BaseModel):
    """
    Result of evaluating one field's rule chain.

    Either valid, or invalid carrying the message of the first failing rule.

    Attributes:
        field: Which field was evaluated
        valid: Whether every rule passed
        message: Message of the first failing rule (None when valid)
        failed_rule: Name of the first failing rule (None when valid)
    """

    model_config = ConfigDict(frozen=True)

    field: FieldId
    valid: bool
    message: str | None = None
    failed_rule: str | None = None

    @model_validator(mode="after")
    def check_message_consistency(self):
        """Validate that valid outcomes carry no message and invalid ones do."""
        if self.valid and self.message is not None:
            raise ValueError("valid=True but message is set")
        if not self.valid and not self.message:
            raise ValueError("valid=False requires a message")
        return self

    @classmethod
    def ok(cls, field: FieldId) -> "FieldOutcome":
        return cls(field=field, valid=True)

    @classmethod
    def failed(cls, field: FieldId, rule_name: str, message: str) -> "FieldOutcome":
        return cls(field=field, valid=False, message=message, failed_rule=rule_name)


class FormValidationResult(BaseModel):
    """
    Aggregate outcome of validating every field of the form.

    Truthiness is the aggregate boolean: true iff every field is valid.

    Attributes:
        passed: Overall validation status
        outcomes: Per-field outcomes in evaluation order
    """

    model_config = ConfigDict(frozen=True)

    passed: bool
    outcomes: Dict[FieldId, FieldOutcome]

    @model_validator(mode="after")
    def check_passed_consistency(self):
        """Validate that passed is True exactly when every outcome is valid."""
        all_valid = all(outcome.valid for outcome in self.outcomes.values())
        if self.passed != all_valid:
            raise ValueError(f"passed={self.passed} disagrees with field outcomes")
        return self

    def __bool__(self) -> bool:
        return self.passed

    @property
    def failed_fields(self) -> List[FieldId]:
        """Invalid fields, in evaluation order."""
        return [field for field, outcome in self.outcomes.items() if not outcome.valid]

    @property
    def errors(self) -> Dict[FieldId, str]:
        """Map of invalid field to its message."""
        return {
            field: outcome.message
            for field, outcome in self.outcomes.items()
            if not outcome.valid
        }
