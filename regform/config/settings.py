"""
Environment-driven settings for the form adapter and CLI.
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

TRUE_VALUES = ("1", "true", "yes", "on")


class FormSettings(BaseModel):
    """
    Runtime settings.

    Attributes:
        reset_delay_ms: Delay before the form resets after a successful submit
        registry_path: JSON file backing the registered-email set (None = in-memory)
        unique_email: Whether the "already registered" rule is enabled
        rules_path: YAML rule file replacing the built-in catalog
        log_level: Log level name
        log_format: "json" or "text"
    """

    reset_delay_ms: int = Field(3000, ge=0)
    registry_path: Path | None = None
    unique_email: bool = False
    rules_path: Path | None = None
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @classmethod
    def from_env(cls) -> "FormSettings":
        """
        Build settings from environment variables.

        Variables:
            REGFORM_RESET_DELAY_MS, REGFORM_REGISTRY_PATH, REGFORM_UNIQUE_EMAIL,
            REGFORM_RULES_PATH, LOG_LEVEL, LOG_FORMAT

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        registry_path = os.getenv("REGFORM_REGISTRY_PATH")
        rules_path = os.getenv("REGFORM_RULES_PATH")

        return cls(
            reset_delay_ms=os.getenv("REGFORM_RESET_DELAY_MS", "3000"),
            registry_path=registry_path or None,
            unique_email=os.getenv("REGFORM_UNIQUE_EMAIL", "false").lower() in TRUE_VALUES,
            rules_path=rules_path or None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "json"),
        )
