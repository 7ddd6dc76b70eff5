"""
Form adapter: headless form state, event handling, and persistence of
accepted emails around the validation engine.
"""

from .email_registry import EmailRegistry
from .form_adapter import DEFAULT_RESET_DELAY_MS, FieldState, FormAdapter, create_form_adapter
from .password_toggle import PasswordToggle
from .scheduler import ResetScheduler

__all__ = [
    "FormAdapter",
    "FieldState",
    "create_form_adapter",
    "EmailRegistry",
    "ResetScheduler",
    "PasswordToggle",
    "DEFAULT_RESET_DELAY_MS",
]
