"""
ValidationRule model representing one (predicate, message) entry of a field's rule chain.
"""

from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field


class ValidationRule(BaseModel):
    """
    A declarative rule definition applied to one form field.

    Attributes:
        rule_name: Identifier used in results and metrics ("name_min_length")
        rule_type: Type: "required_field", "min_length", "regex", "match_field", "custom"
        field_name: Which field this rule applies to
        message: Human-readable message shown when the rule fails
        parameters: Rule-specific params (e.g., {"min_length": 8})
        enabled: Whether rule is active
    """

    rule_name: str = Field(..., min_length=1)
    rule_type: Literal["required_field", "min_length", "regex", "match_field", "custom"]
    field_name: str
    message: str = Field(..., min_length=1)
    parameters: Dict[str, Any] = Field(default_factory=dict)
    enabled: bool = True

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "rule_name": "password_min_length",
                "rule_type": "min_length",
                "field_name": "password",
                "message": "Password must be at least 8 characters long",
                "parameters": {"min_length": 8},
                "enabled": True,
            }
        }
    )
