"""
Validation rule engine, rule configuration, and the registration rule catalog.
"""

from .catalog import (
    DEFAULT_RULES_PATH,
    EMAIL_TAKEN_MESSAGE,
    build_registration_engine,
    registration_rules,
    unique_email_rule,
)
from .rule_config import RuleConfigBuilder, RuleConfigLoader
from .rule_engine import ValidationEngine

__all__ = [
    "ValidationEngine",
    "RuleConfigLoader",
    "RuleConfigBuilder",
    "registration_rules",
    "unique_email_rule",
    "build_registration_engine",
    "DEFAULT_RULES_PATH",
    "EMAIL_TAKEN_MESSAGE",
]
