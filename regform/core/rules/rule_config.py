"""
Rule configuration management.

Loads validation rules from YAML files and provides a builder for
assembling rule chains in code.
"""

from pathlib import Path
from typing import Any, Callable

import yaml

from regform.core.models import FieldId


class RuleConfigLoader:
    """
    Loads validation rules from YAML configuration files.

    Rules are listed per field in priority order; the first failing rule's
    message is the one reported.

    Expected YAML format:
    ```yaml
    rules:
      name:
        - type: required_field
          message: Name is required
          params:
            trim: true
        - type: min_length
          message: Name must be at least 2 characters long
          params:
            min_length: 2
            trim: true

      confirmPassword:
        - type: match_field
          name: confirm_password_matches
          message: Passwords do not match
          params:
            other_field: password
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_rules(self) -> list[dict[str, Any]]:
        """
        Load and parse validation rules from YAML file.

        Returns:
            List of rule dictionaries suitable for ValidationEngine

        Raises:
            ValueError: If YAML is invalid or missing required fields
        """
        with open(self.config_path) as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {self.config_path}: {e}")

        if not isinstance(config, dict) or "rules" not in config:
            raise ValueError("Configuration file must be a mapping with a 'rules' section")

        rules = []
        field_rules = config["rules"]
        if not isinstance(field_rules, dict):
            raise ValueError("'rules' section must map field names to rule lists")

        for field_name, field_rule_list in field_rules.items():
            if not isinstance(field_rule_list, list):
                raise ValueError(f"Rules for field '{field_name}' must be a list")

            for idx, rule_def in enumerate(field_rule_list):
                rule = self._parse_rule(field_name, rule_def, idx)
                rules.append(rule)

        return rules

    def _parse_rule(self, field_name: str, rule_def: dict[str, Any], idx: int) -> dict[str, Any]:
        """
        Parse a single rule definition.

        Args:
            field_name: The field this rule applies to
            rule_def: The rule definition from YAML
            idx: Index of this rule for the field (for naming)

        Returns:
            Parsed rule dictionary

        Raises:
            ValueError: If rule definition is invalid
        """
        if not isinstance(rule_def, dict):
            raise ValueError(f"Rule #{idx} for field '{field_name}' must be a mapping")

        if "type" not in rule_def:
            raise ValueError(f"Rule for field '{field_name}' is missing 'type'")

        if not rule_def.get("message"):
            raise ValueError(f"Rule #{idx} for field '{field_name}' is missing 'message'")

        rule_type = rule_def["type"]

        # Generate rule name if not provided
        rule_name = rule_def.get("name", f"{field_name}_{rule_type}_{idx}")

        # Extract parameters
        parameters = rule_def.get("params", rule_def.get("parameters", {})) or {}

        return {
            "rule_name": rule_name,
            "rule_type": rule_type,
            "field_name": field_name,
            "message": rule_def["message"],
            "parameters": parameters,
            "enabled": rule_def.get("enabled", True),
        }


class RuleConfigBuilder:
    """
    Programmatically build rule configurations (for the built-in catalog,
    tests, or rules that need injected callables).

    Rules are appended in call order, which is also their priority order.
    """

    def __init__(self):
        """Initialize empty rule configuration."""
        self.rules: list[dict[str, Any]] = []

    def _add(
        self,
        field_name: FieldId | str,
        rule_type: str,
        message: str,
        parameters: dict[str, Any],
        rule_name: str | None,
    ) -> "RuleConfigBuilder":
        field_name = str(field_name)
        if rule_name is None:
            rule_name = f"{field_name}_{rule_type}"
            taken = {rule["rule_name"] for rule in self.rules}
            suffix = 2
            while rule_name in taken:
                rule_name = f"{field_name}_{rule_type}_{suffix}"
                suffix += 1

        self.rules.append({
            "rule_name": rule_name,
            "rule_type": rule_type,
            "field_name": field_name,
            "message": message,
            "parameters": parameters,
            "enabled": True,
        })
        return self

    def add_required_field(
        self,
        field_name: FieldId | str,
        message: str,
        trim: bool = True,
        rule_name: str | None = None,
    ) -> "RuleConfigBuilder":
        """Add a non-empty rule."""
        return self._add(field_name, "required_field", message, {"trim": trim}, rule_name)

    def add_min_length(
        self,
        field_name: FieldId | str,
        min_length: int,
        message: str,
        trim: bool = False,
        rule_name: str | None = None,
    ) -> "RuleConfigBuilder":
        """Add a minimum length rule."""
        return self._add(
            field_name, "min_length", message, {"min_length": min_length, "trim": trim}, rule_name
        )

    def add_regex(
        self,
        field_name: FieldId | str,
        pattern: str,
        message: str,
        mode: str = "fullmatch",
        trim: bool = False,
        rule_name: str | None = None,
    ) -> "RuleConfigBuilder":
        """Add a regex validation rule."""
        return self._add(
            field_name, "regex", message, {"pattern": pattern, "mode": mode, "trim": trim}, rule_name
        )

    def add_match_field(
        self,
        field_name: FieldId | str,
        other_field: FieldId | str,
        message: str,
        rule_name: str | None = None,
    ) -> "RuleConfigBuilder":
        """Add a rule requiring the value to equal another field's value."""
        return self._add(
            field_name, "match_field", message, {"other_field": str(other_field)}, rule_name
        )

    def add_custom(
        self,
        field_name: FieldId | str,
        predicate: Callable[..., bool],
        message: str,
        rule_name: str | None = None,
    ) -> "RuleConfigBuilder":
        """Add a rule backed by an injected predicate."""
        return self._add(field_name, "custom", message, {"predicate": predicate}, rule_name)

    def build(self) -> list[dict[str, Any]]:
        """Build and return the rule configuration."""
        return self.rules
