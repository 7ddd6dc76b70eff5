"""
The registration form rule catalog.

The catalog is plain data: an ordered list of rule definitions per field.
The optional email uniqueness rule needs state the engine must not own, so
callers inject it as a predicate backed by their own registry.
"""

from pathlib import Path
from typing import Any, Callable

from regform.core.models import FieldId

from .rule_config import RuleConfigBuilder, RuleConfigLoader
from .rule_engine import ValidationEngine

# Same catalog, shipped as YAML
DEFAULT_RULES_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "registration_rules.yaml"

NAME_PATTERN = r"[A-Za-z ]+"
EMAIL_PATTERN = r"[^\s@]+@[^\s@]+\.[^\s@]+"
SPECIAL_CHARACTERS_PATTERN = r'[!@#$%^&*(),.?":{}|<>]'

EMAIL_TAKEN_MESSAGE = "This email is already registered"


def registration_rules(email_registry: Any = None) -> list[dict[str, Any]]:
    """
    Build the registration rule catalog.

    Args:
        email_registry: Optional object with a ``contains(email) -> bool``
                        method. When given, the uniqueness rule is appended
                        to the email chain after the format rule.

    Returns:
        List of rule dictionaries suitable for ValidationEngine
    """
    builder = (
        RuleConfigBuilder()
        .add_required_field(FieldId.NAME, "Name is required", rule_name="name_required")
        .add_min_length(
            FieldId.NAME, 2, "Name must be at least 2 characters long",
            trim=True, rule_name="name_min_length",
        )
        .add_regex(
            FieldId.NAME, NAME_PATTERN, "Name can only contain letters and spaces",
            trim=True, rule_name="name_letters_only",
        )
        .add_required_field(FieldId.EMAIL, "Email is required", rule_name="email_required")
        .add_regex(
            FieldId.EMAIL, EMAIL_PATTERN, "Please enter a valid email address",
            trim=True, rule_name="email_format",
        )
    )

    if email_registry is not None:
        builder.add_custom(
            FieldId.EMAIL, email_not_registered(email_registry), EMAIL_TAKEN_MESSAGE,
            rule_name="email_unique",
        )

    (
        builder
        .add_required_field(
            FieldId.PASSWORD, "Password is required", trim=False, rule_name="password_required"
        )
        .add_min_length(
            FieldId.PASSWORD, 8, "Password must be at least 8 characters long",
            rule_name="password_min_length",
        )
        .add_regex(
            FieldId.PASSWORD, r"[A-Z]", "Password must contain at least one uppercase letter",
            mode="search", rule_name="password_uppercase",
        )
        .add_regex(
            FieldId.PASSWORD, r"[a-z]", "Password must contain at least one lowercase letter",
            mode="search", rule_name="password_lowercase",
        )
        .add_regex(
            FieldId.PASSWORD, r"[0-9]", "Password must contain at least one number",
            mode="search", rule_name="password_number",
        )
        .add_regex(
            FieldId.PASSWORD, SPECIAL_CHARACTERS_PATTERN,
            "Password must contain at least one special character",
            mode="search", rule_name="password_special_character",
        )
        .add_required_field(
            FieldId.CONFIRM_PASSWORD, "Please confirm your password",
            trim=False, rule_name="confirm_password_required",
        )
        .add_match_field(
            FieldId.CONFIRM_PASSWORD, FieldId.PASSWORD, "Passwords do not match",
            rule_name="confirm_password_matches",
        )
    )

    return builder.build()


def email_not_registered(email_registry: Any) -> Callable[..., bool]:
    """Predicate that passes when the trimmed email is not in the registry."""
    def check(value: str, record=None) -> bool:
        return not email_registry.contains(value.strip().lower())

    return check


def unique_email_rule(email_registry: Any) -> dict[str, Any]:
    """
    Build the "email not already registered" rule.

    Args:
        email_registry: Object with a ``contains(email) -> bool`` method that
                        compares case-insensitively

    Returns:
        Rule dictionary for the email field
    """
    builder = RuleConfigBuilder().add_custom(
        FieldId.EMAIL, email_not_registered(email_registry), EMAIL_TAKEN_MESSAGE,
        rule_name="email_unique",
    )
    return builder.build()[0]


def build_registration_engine(
    email_registry: Any = None,
    rules_path: str | Path | None = None,
) -> ValidationEngine:
    """
    Build a ValidationEngine over the registration catalog.

    Args:
        email_registry: Optional registry enabling the uniqueness rule
        rules_path: Optional YAML rule file replacing the built-in catalog

    Returns:
        Configured ValidationEngine
    """
    if rules_path is None:
        return ValidationEngine(registration_rules(email_registry))

    rules = RuleConfigLoader(rules_path).load_rules()
    if email_registry is not None:
        # Keep the uniqueness check right after the last email rule
        email_positions = [
            idx for idx, rule in enumerate(rules) if rule["field_name"] == str(FieldId.EMAIL)
        ]
        position = email_positions[-1] + 1 if email_positions else len(rules)
        rules.insert(position, unique_email_rule(email_registry))

    return ValidationEngine(rules)
