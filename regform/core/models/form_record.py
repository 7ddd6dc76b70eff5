"""
FormRecord model - an immutable snapshot of every form field value.
"""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .field_id import FieldId

# FieldId -> model attribute
_ATTRIBUTES = {
    FieldId.NAME: "name",
    FieldId.EMAIL: "email",
    FieldId.PASSWORD: "password",
    FieldId.CONFIRM_PASSWORD: "confirm_password",
}


class FormRecord(BaseModel):
    """
    Snapshot of the four registration inputs, taken fresh for each validation.

    Every field is required, so a record handed to the engine is always fully
    populated. Lookups go through FieldId so that rules never depend on the
    Python attribute names.

    Attributes:
        name: Display name as typed
        email: Email address as typed
        password: Raw password (never trimmed)
        confirm_password: Password confirmation (wire name "confirmPassword")
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "password": "Engine#1843",
                "confirmPassword": "Engine#1843",
            }
        },
    )

    name: str
    email: str
    password: str
    confirm_password: str = Field(..., alias="confirmPassword")

    @classmethod
    def from_mapping(cls, values: Mapping[Any, str]) -> "FormRecord":
        """
        Build a record from a mapping keyed by FieldId or field name.

        Args:
            values: Mapping of field identifiers to current values

        Returns:
            FormRecord snapshot

        Raises:
            pydantic.ValidationError: If a field is missing or not a string
        """
        return cls.model_validate({str(FieldId(key)): value for key, value in values.items()})

    def value_of(self, field: FieldId | str) -> str:
        """Return the current value of a field."""
        return getattr(self, _ATTRIBUTES[FieldId(field)])

    def __getitem__(self, field: FieldId | str) -> str:
        return self.value_of(field)

    def with_value(self, field: FieldId | str, value: str) -> "FormRecord":
        """Return a copy of this record with one field replaced."""
        return self.model_copy(update={_ATTRIBUTES[FieldId(field)]: value})

    def to_dict(self) -> dict[str, str]:
        """Return values keyed by field identifier."""
        return {field.value: self.value_of(field) for field in FieldId}
