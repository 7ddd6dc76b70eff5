"""
FormAdapter - headless registration form driven by named events.

Holds the visible state of each input (value, success/error mark, error
text), turns events into engine calls, and runs the success path: welcome
message, optional email registration, and a cancellable delayed reset.
"""

import threading
from typing import Literal

from pydantic import BaseModel

from regform.config import FormSettings
from regform.core.models import FIELD_ORDER, FieldId, FieldOutcome, FormRecord, FormValidationResult
from regform.core.rules import ValidationEngine, build_registration_engine
from regform.observability.logger import get_logger
from regform.observability.metrics import (
    increment_counter,
    record_field_outcome,
    submissions_total,
    track_duration,
    validation_duration_seconds,
)

from .email_registry import EmailRegistry
from .password_toggle import PasswordToggle
from .scheduler import ResetScheduler

logger = get_logger(__name__)

DEFAULT_RESET_DELAY_MS = 3000


class FieldState(BaseModel):
    """
    Visible state of one input and its error region.

    Attributes:
        value: Current input text
        status: "idle" (unmarked), "success" or "error"
        error_message: Text shown next to the input
    """

    value: str = ""
    status: Literal["idle", "success", "error"] = "idle"
    error_message: str = ""

    @property
    def css_classes(self) -> set[str]:
        return set() if self.status == "idle" else {self.status}


class FormAdapter:
    """
    Connects the ValidationEngine to form state and events.

    Events are dispatched by name through EVENTS:
        input  (field, value) -> store value, clear error markup, no validation
        blur   (field)        -> validate that one field
        submit ()             -> validate every field, success path if all pass
        reset  ()             -> clear the form
        toggle_press / toggle_release / toggle_leave -> password reveal control
    """

    EVENTS = {
        "input": "set_value",
        "blur": "blur",
        "submit": "submit",
        "reset": "reset",
        "toggle_press": "_toggle_press",
        "toggle_release": "_toggle_release",
        "toggle_leave": "_toggle_leave",
    }

    def __init__(
        self,
        engine: ValidationEngine,
        registry: EmailRegistry | None = None,
        reset_delay_ms: int = DEFAULT_RESET_DELAY_MS,
        scheduler: ResetScheduler | None = None,
    ):
        """
        Initialize the adapter.

        Args:
            engine: Engine evaluating the rule catalog
            registry: Where accepted emails are recorded (None = not recorded)
            reset_delay_ms: Delay between a successful submit and the reset
            scheduler: Object with schedule(delay_seconds, callback) and cancel()
        """
        if reset_delay_ms < 0:
            raise ValueError(f"reset_delay_ms must be >= 0, got {reset_delay_ms}")

        self.engine = engine
        self.registry = registry
        self.reset_delay_ms = reset_delay_ms
        self.scheduler = scheduler or ResetScheduler()
        self.password_toggle = PasswordToggle()

        self.fields: dict[FieldId, FieldState] = {field: FieldState() for field in FIELD_ORDER}
        self.success_message = ""

        self._lock = threading.RLock()
        # Bumped on every submit/cancel so a stale timer cannot reset a newer form
        self._reset_generation = 0

    # =======================
    # EVENT DISPATCH
    # =======================

    def dispatch(self, event: str, *args):
        """
        Route a named event to its handler.

        Raises:
            ValueError: If the event is unknown
        """
        handler_name = self.EVENTS.get(event)
        if handler_name is None:
            raise ValueError(f"Unknown form event '{event}'. Expected one of {sorted(self.EVENTS)}")
        return getattr(self, handler_name)(*args)

    def state(self, field: FieldId | str) -> FieldState:
        return self.fields[FieldId(field)]

    def snapshot(self) -> FormRecord:
        """Package the live value of every field as one record."""
        with self._lock:
            return FormRecord.from_mapping({field: state.value for field, state in self.fields.items()})

    def set_value(self, field: FieldId | str, value: str) -> None:
        """Input event: store the value and drop any error mark."""
        with self._lock:
            state = self.state(field)
            state.value = value
            if state.status == "error":
                state.status = "idle"
            state.error_message = ""

    def blur(self, field: FieldId | str) -> FieldOutcome:
        """Blur event: validate one field against the current snapshot."""
        with self._lock, track_duration(validation_duration_seconds, operation="blur"):
            outcome = self.engine.evaluate_field(field, self.snapshot())
            self._apply(outcome)

        record_field_outcome(outcome)
        return outcome

    def submit(self) -> FormValidationResult:
        """
        Submit event: validate every field and run the success path.

        A submit always cancels a reset still pending from an earlier
        success, whatever the new outcome.

        Returns:
            FormValidationResult with every field's outcome
        """
        with self._lock:
            self.success_message = ""
            self._cancel_pending_reset()

            with track_duration(validation_duration_seconds, operation="submit"):
                record = self.snapshot()
                result = self.engine.evaluate_all(record)

            for outcome in result.outcomes.values():
                self._apply(outcome)
                record_field_outcome(outcome)

            if not result.passed:
                increment_counter(submissions_total, status="rejected")
                logger.info(
                    "Form submission rejected",
                    extra={"failed_fields": [str(field) for field in result.failed_fields]},
                )
                return result

            self.success_message = f"Registration successful! Welcome, {record.name}!"
            logger.info(
                "Form submitted",
                extra={
                    "user_name": record.name,
                    "email": record.email,
                    "password_length": len(record.password),
                },
            )

            if self.registry is not None:
                self.registry.add(record.email)

            increment_counter(submissions_total, status="accepted")
            self._schedule_reset()
            return result

    def reset(self) -> None:
        """Clear every value, mark and message."""
        with self._lock:
            for field in self.fields:
                self.fields[field] = FieldState()
            self.success_message = ""

    def close(self) -> None:
        """Cancel a pending reset; call when the form is discarded."""
        with self._lock:
            self._cancel_pending_reset()

    def __enter__(self) -> "FormAdapter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def reset_pending(self) -> bool:
        return self.scheduler.pending

    # =======================
    # INTERNALS
    # =======================

    def _apply(self, outcome: FieldOutcome) -> None:
        state = self.fields[outcome.field]
        if outcome.valid:
            state.status = "success"
            state.error_message = ""
        else:
            state.status = "error"
            state.error_message = outcome.message

    def _schedule_reset(self) -> None:
        self._reset_generation += 1
        generation = self._reset_generation
        self.scheduler.schedule(
            self.reset_delay_ms / 1000.0,
            lambda: self._scheduled_reset(generation),
        )

    def _cancel_pending_reset(self) -> None:
        self._reset_generation += 1
        if self.scheduler.cancel():
            logger.debug("Cancelled pending form reset")

    def _scheduled_reset(self, generation: int) -> None:
        with self._lock:
            if generation != self._reset_generation:
                return
            self.reset()
        logger.debug("Form reset after successful submission")

    def _toggle_press(self) -> None:
        self.password_toggle.press()

    def _toggle_release(self) -> None:
        self.password_toggle.release()

    def _toggle_leave(self) -> None:
        self.password_toggle.leave()


def create_form_adapter(settings: FormSettings | None = None) -> FormAdapter | None:
    """
    Build a ready FormAdapter from settings.

    Initialization faults (missing or malformed rule file, corrupt registry,
    bad settings) are logged and reported as None so the host can carry on
    without the validator.

    Args:
        settings: Settings to use (defaults to FormSettings.from_env())

    Returns:
        FormAdapter, or None if initialization failed
    """
    try:
        settings = settings or FormSettings.from_env()

        registry = None
        if settings.unique_email or settings.registry_path is not None:
            registry = EmailRegistry(settings.registry_path)

        engine = build_registration_engine(
            email_registry=registry if settings.unique_email else None,
            rules_path=settings.rules_path,
        )
        return FormAdapter(engine, registry=registry, reset_delay_ms=settings.reset_delay_ms)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to initialize form validator: {e}", exc_info=True)
        return None
