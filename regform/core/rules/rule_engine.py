"""
Validation engine for evaluating per-field rule chains against a form snapshot.

The engine owns a fixed set of fields and, per field, an ordered tuple of
validators. Evaluation is pure: no logging, metrics, or I/O happen while a
record is being checked.
"""

from typing import Any, Iterable, Mapping

from pydantic import ValidationError as PydanticValidationError

from regform.core.models import (
    FIELD_ORDER,
    FieldId,
    FieldOutcome,
    FormRecord,
    FormValidationResult,
    ValidationRule,
)
from regform.core.validators import (
    BaseValidator,
    CustomValidator,
    MatchFieldValidator,
    MinLengthValidator,
    RegexValidator,
    RequiredFieldValidator,
)
from regform.observability.logger import get_logger

logger = get_logger(__name__)


class ValidationEngine:
    """
    Evaluates ordered rule chains for each form field.

    Within a field, rules run in definition order and evaluation stops at the
    first failure. Across fields there is no short-circuit: evaluate_all
    always produces an outcome for every field.
    """

    VALIDATOR_REGISTRY = {
        "required_field": RequiredFieldValidator,
        "min_length": MinLengthValidator,
        "regex": RegexValidator,
        "match_field": MatchFieldValidator,
        "custom": CustomValidator,
    }

    def __init__(
        self,
        rules: Iterable[dict[str, Any] | ValidationRule],
        fields: Iterable[FieldId | str] = FIELD_ORDER,
    ):
        """
        Initialize the engine with validation rules.

        Args:
            rules: Rule configurations (dicts or ValidationRule models), each containing:
                   - rule_name: str
                   - rule_type: str (required_field, min_length, regex, match_field, custom)
                   - field_name: str
                   - message: str
                   - parameters: Dict[str, Any] (optional)
                   - enabled: bool (default True)
            fields: Fields owned by this engine, in evaluation order

        Raises:
            ValueError: If a rule is malformed, has an unknown type, or targets
                        a field the engine does not own
        """
        self.fields: tuple[FieldId, ...] = tuple(FieldId(field) for field in fields)
        self.rules = [self._parse_rule(rule) for rule in rules]
        self._rule_sets: dict[FieldId, tuple[tuple[str, BaseValidator], ...]] = {}
        self._build_validators()

    @staticmethod
    def _parse_rule(rule: dict[str, Any] | ValidationRule) -> ValidationRule:
        if isinstance(rule, ValidationRule):
            return rule
        try:
            return ValidationRule.model_validate(rule)
        except PydanticValidationError as e:
            raise ValueError(f"Invalid rule definition {rule.get('rule_name', rule)!r}: {e}")

    def _build_validators(self) -> None:
        """Build validator instances from rule configurations."""
        chains: dict[FieldId, list[tuple[str, BaseValidator]]] = {field: [] for field in self.fields}

        for rule in self.rules:
            # Skip disabled rules
            if not rule.enabled:
                continue

            try:
                field = FieldId(rule.field_name)
            except ValueError:
                raise ValueError(f"Rule '{rule.rule_name}' targets unknown field '{rule.field_name}'")
            if field not in chains:
                raise ValueError(f"Rule '{rule.rule_name}' targets field '{field}' not owned by this engine")

            # Get validator class
            validator_class = self.VALIDATOR_REGISTRY.get(rule.rule_type)
            if not validator_class:
                raise ValueError(f"Unknown rule type: {rule.rule_type}")

            # Instantiate validator
            try:
                validator = validator_class(rule.field_name, rule.message, rule.parameters)
            except Exception as e:
                raise ValueError(f"Failed to create validator for rule '{rule.rule_name}': {e}")
            chains[field].append((rule.rule_name, validator))

        for field, chain in chains.items():
            if not chain:
                logger.warning(f"Field '{field}' has no validation rules; it will always pass")
            self._rule_sets[field] = tuple(chain)

    @staticmethod
    def _as_record(record: FormRecord | Mapping[Any, str]) -> FormRecord:
        if isinstance(record, FormRecord):
            return record
        return FormRecord.from_mapping(record)

    def rule_set(self, field: FieldId | str) -> tuple[tuple[str, BaseValidator], ...]:
        """
        Return the ordered (rule_name, validator) chain for a field.

        Raises:
            ValueError: If the field is not owned by this engine
        """
        field = FieldId(field)
        if field not in self._rule_sets:
            raise ValueError(f"Field '{field}' is not owned by this engine")
        return self._rule_sets[field]

    def evaluate_field(
        self,
        field: FieldId | str,
        record: FormRecord | Mapping[Any, str],
    ) -> FieldOutcome:
        """
        Evaluate one field's rule chain against a full form snapshot.

        The whole record is required because cross-field rules (password
        confirmation) read other fields.

        Args:
            field: The field to evaluate
            record: Snapshot of every field value

        Returns:
            FieldOutcome: valid, or invalid with the first failing rule's message
        """
        field = FieldId(field)
        record = self._as_record(record)
        value = record[field]

        for rule_name, validator in self.rule_set(field):
            if not validator.check(value, record):
                return FieldOutcome.failed(field, rule_name, validator.message)

        return FieldOutcome.ok(field)

    def evaluate_all(self, record: FormRecord | Mapping[Any, str]) -> FormValidationResult:
        """
        Evaluate every field, in field order, even after a failure.

        Args:
            record: Snapshot of every field value

        Returns:
            FormValidationResult with per-field outcomes and the aggregate flag
        """
        record = self._as_record(record)
        outcomes = {field: self.evaluate_field(field, record) for field in self.fields}
        passed = all(outcome.valid for outcome in outcomes.values())

        return FormValidationResult(passed=passed, outcomes=outcomes)

    def is_valid(self, record: FormRecord | Mapping[Any, str]) -> bool:
        """Aggregate outcome: True iff every field is valid."""
        return self.evaluate_all(record).passed

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with rule counts by type and by field
        """
        return {
            "total_rules": sum(len(chain) for chain in self._rule_sets.values()),
            "rules_by_type": self._count_by_type(),
            "rules_by_field": {str(field): len(chain) for field, chain in self._rule_sets.items()},
        }

    def _count_by_type(self) -> dict[str, int]:
        """Count validators by rule type."""
        counts: dict[str, int] = {}
        for chain in self._rule_sets.values():
            for _, validator in chain:
                rule_type = validator.rule_type
                counts[rule_type] = counts.get(rule_type, 0) + 1
        return counts
