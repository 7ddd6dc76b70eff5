"""
FieldId enumeration - the closed set of registration form inputs.
"""

from enum import Enum


class FieldId(str, Enum):
    """Identifier of one registration form input."""

    NAME = "name"
    EMAIL = "email"
    PASSWORD = "password"
    CONFIRM_PASSWORD = "confirmPassword"

    def __str__(self) -> str:
        return self.value


# Evaluation and display order
FIELD_ORDER: tuple[FieldId, ...] = (
    FieldId.NAME,
    FieldId.EMAIL,
    FieldId.PASSWORD,
    FieldId.CONFIRM_PASSWORD,
)
