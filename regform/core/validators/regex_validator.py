"""
RegexValidator - validates field values against a regular expression pattern.
"""

import re
from re import Pattern
from typing import Any

from regform.core.models import FormRecord

from .base_validator import BaseValidator


class RegexValidator(BaseValidator):
    """
    Validates that a field value matches a regular expression pattern.

    Parameters:
    - pattern: Regular expression pattern (string or compiled Pattern)
    - flags: Optional regex flags (e.g., re.IGNORECASE)
    - mode: "fullmatch" (whole value must match, default) or "search"
      (pattern must occur somewhere in the value)
    - trim: Strip surrounding whitespace before matching (default False)
    """

    MODES = ("fullmatch", "search")

    def __init__(self, field_name: str, message: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, message, parameters)

        # Get pattern from parameters
        pattern = self.parameters.get("pattern")
        if not pattern:
            raise ValueError("RegexValidator requires 'pattern' parameter")

        # Get optional flags
        flags = self.parameters.get("flags", 0)

        # Compile pattern
        try:
            if isinstance(pattern, str):
                self.pattern: Pattern = re.compile(pattern, flags)
            elif isinstance(pattern, Pattern):
                self.pattern = pattern
            else:
                raise ValueError(f"Pattern must be string or compiled Pattern, got {type(pattern)}")
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {e}")

        self.mode = self.parameters.get("mode", "fullmatch")
        if self.mode not in self.MODES:
            raise ValueError(f"Unsupported regex mode '{self.mode}'. Must be one of {self.MODES}")

        self.trim = self.parameters.get("trim", False)

    def check(self, value: str, record: FormRecord | None = None) -> bool:
        if self.trim:
            value = value.strip()

        if self.mode == "search":
            return self.pattern.search(value) is not None
        return self.pattern.fullmatch(value) is not None

    @property
    def rule_type(self) -> str:
        return "regex"
