"""
Unit tests for the headless form adapter, reset scheduling and password toggle.
"""

import threading

import pytest

from regform.adapter import (
    EmailRegistry,
    FieldState,
    FormAdapter,
    PasswordToggle,
    ResetScheduler,
    create_form_adapter,
)
from regform.config import FormSettings
from regform.core.models import FIELD_ORDER, FieldId
from regform.core.rules import EMAIL_TAKEN_MESSAGE, build_registration_engine


class TestFieldEvents:
    """Tests for input and blur events"""

    def test_initial_state(self, adapter):
        for field in FIELD_ORDER:
            assert adapter.state(field) == FieldState()
        assert adapter.success_message == ""

    def test_blur_marks_error(self, adapter):
        adapter.dispatch("input", "name", "A")

        outcome = adapter.dispatch("blur", "name")

        assert outcome.valid is False
        state = adapter.state("name")
        assert state.status == "error"
        assert state.css_classes == {"error"}
        assert state.error_message == "Name must be at least 2 characters long"

    def test_blur_marks_success(self, adapter):
        adapter.dispatch("input", FieldId.NAME, "Al")

        adapter.dispatch("blur", FieldId.NAME)

        state = adapter.state(FieldId.NAME)
        assert state.status == "success"
        assert state.css_classes == {"success"}
        assert state.error_message == ""

    def test_blur_only_touches_one_field(self, adapter):
        adapter.dispatch("blur", "email")

        assert adapter.state("email").status == "error"
        for field in ("name", "password", "confirmPassword"):
            assert adapter.state(field).status == "idle"

    def test_input_clears_error_without_validating(self, adapter):
        adapter.dispatch("blur", "email")
        assert adapter.state("email").status == "error"

        adapter.dispatch("input", "email", "still-not-an-email")

        state = adapter.state("email")
        assert state.status == "idle"
        assert state.error_message == ""
        assert state.value == "still-not-an-email"

    def test_input_keeps_success_mark(self, adapter):
        adapter.dispatch("input", "name", "Al")
        adapter.dispatch("blur", "name")

        adapter.dispatch("input", "name", "A")

        assert adapter.state("name").status == "success"

    def test_confirm_password_blur_uses_live_password(self, adapter):
        adapter.dispatch("input", "password", "Engine#1843")
        adapter.dispatch("input", "confirmPassword", "Engine#1843")
        assert adapter.dispatch("blur", "confirmPassword").valid is True

        adapter.dispatch("input", "password", "Engine#1844")
        outcome = adapter.dispatch("blur", "confirmPassword")
        assert outcome.message == "Passwords do not match"

    def test_unknown_event_raises_error(self, adapter):
        with pytest.raises(ValueError) as exc_info:
            adapter.dispatch("focus", "name")
        assert "focus" in str(exc_info.value)

    def test_snapshot_reflects_inputs(self, adapter, fill, valid_values):
        fill(adapter, valid_values)
        assert adapter.snapshot().to_dict() == valid_values


class TestSubmit:
    """Tests for the submit event and the success path"""

    def test_invalid_submit_marks_every_field(self, adapter):
        adapter.dispatch("input", "name", "Ada")

        result = adapter.dispatch("submit")

        assert result.passed is False
        assert adapter.state("name").status == "success"
        for field in ("email", "password", "confirmPassword"):
            assert adapter.state(field).status == "error"
        assert adapter.state("email").error_message == "Email is required"
        assert adapter.success_message == ""
        assert not adapter.reset_pending

    def test_valid_submit_shows_welcome(self, adapter, fill, valid_values, scheduler):
        fill(adapter, valid_values)

        result = adapter.dispatch("submit")

        assert result.passed is True
        assert adapter.success_message == "Registration successful! Welcome, Ada Lovelace!"
        assert all(adapter.state(field).status == "success" for field in FIELD_ORDER)
        assert scheduler.delay == pytest.approx(3.0)
        assert adapter.reset_pending

    def test_scheduled_reset_clears_form(self, adapter, fill, valid_values, scheduler):
        fill(adapter, valid_values)
        adapter.dispatch("submit")

        scheduler.fire()

        assert adapter.success_message == ""
        for field in FIELD_ORDER:
            assert adapter.state(field) == FieldState()

    def test_resubmit_cancels_pending_reset(self, adapter, fill, valid_values, scheduler):
        fill(adapter, valid_values)
        adapter.dispatch("submit")
        stale_callback = scheduler.callback

        adapter.dispatch("input", "name", "Grace Hopper")
        adapter.dispatch("submit")

        assert scheduler.cancelled == 1
        assert adapter.success_message == "Registration successful! Welcome, Grace Hopper!"

        # A timer that slipped past cancellation must not reset the newer form
        stale_callback()
        assert adapter.state("name").value == "Grace Hopper"

    def test_failed_resubmit_cancels_pending_reset(self, adapter, fill, valid_values, scheduler):
        fill(adapter, valid_values)
        adapter.dispatch("submit")

        adapter.dispatch("input", "email", "")
        adapter.dispatch("submit")

        assert scheduler.cancelled == 1
        assert not adapter.reset_pending
        assert adapter.success_message == ""

    def test_close_cancels_pending_reset(self, engine, fill, valid_values, scheduler):
        with FormAdapter(engine, scheduler=scheduler) as adapter:
            fill(adapter, valid_values)
            adapter.dispatch("submit")
            assert adapter.reset_pending

        assert not adapter.reset_pending
        assert adapter.state("name").value == "Ada Lovelace"

    def test_manual_reset_event(self, adapter, fill, valid_values):
        fill(adapter, valid_values)
        adapter.dispatch("blur", "name")

        adapter.dispatch("reset")

        assert adapter.snapshot().to_dict() == {field.value: "" for field in FieldId}
        assert adapter.state("name").status == "idle"

    def test_successful_submit_registers_email(self, scheduler, fill, valid_values):
        registry = EmailRegistry()
        engine = build_registration_engine(email_registry=registry)
        adapter = FormAdapter(engine, registry=registry, scheduler=scheduler)

        fill(adapter, valid_values)
        assert adapter.dispatch("submit").passed is True
        assert "ADA@example.com" in registry

        scheduler.fire()
        fill(adapter, {**valid_values, "email": "Ada@Example.com"})
        result = adapter.dispatch("submit")

        assert result.passed is False
        assert adapter.state("email").error_message == EMAIL_TAKEN_MESSAGE

    def test_failed_submit_does_not_register_email(self, engine, scheduler, fill, valid_values):
        registry = EmailRegistry()
        adapter = FormAdapter(engine, registry=registry, scheduler=scheduler)

        fill(adapter, {**valid_values, "password": "weak"})
        adapter.dispatch("submit")

        assert len(registry) == 0

    def test_negative_delay_rejected(self, engine):
        with pytest.raises(ValueError):
            FormAdapter(engine, reset_delay_ms=-1)

    def test_default_scheduler_is_reset_scheduler(self, engine):
        adapter = FormAdapter(engine)
        assert isinstance(adapter.scheduler, ResetScheduler)
        assert adapter.reset_pending is False

    def test_real_timer_resets_form(self, engine, fill, valid_values):
        adapter = FormAdapter(engine, reset_delay_ms=10)
        done = threading.Event()
        original_reset = adapter.reset

        def reset_and_signal():
            original_reset()
            done.set()

        adapter.reset = reset_and_signal

        fill(adapter, valid_values)
        adapter.dispatch("submit")

        assert done.wait(timeout=2.0)
        assert adapter.success_message == ""
        assert not adapter.reset_pending


class TestResetScheduler:
    """Tests for ResetScheduler"""

    def test_callback_fires(self):
        scheduler = ResetScheduler()
        fired = threading.Event()

        scheduler.schedule(0.01, fired.set)

        assert fired.wait(timeout=2.0)

    def test_cancel_prevents_callback(self):
        scheduler = ResetScheduler()
        fired = threading.Event()

        scheduler.schedule(0.5, fired.set)
        assert scheduler.pending is True
        assert scheduler.cancel() is True

        assert not fired.wait(timeout=0.7)
        assert scheduler.pending is False
        assert scheduler.cancel() is False

    def test_reschedule_replaces_pending_task(self):
        scheduler = ResetScheduler()
        first = threading.Event()
        second = threading.Event()

        scheduler.schedule(0.3, first.set)
        scheduler.schedule(0.01, second.set)

        assert second.wait(timeout=2.0)
        assert not first.wait(timeout=0.5)


class TestPasswordToggle:
    """Tests for PasswordToggle"""

    def test_press_and_release(self):
        toggle = PasswordToggle()
        assert toggle.input_type == "password"

        toggle.press()
        assert toggle.input_type == "text"
        assert toggle.revealed is True

        toggle.release()
        assert toggle.input_type == "password"
        assert toggle.revealed is False

    def test_leave_remasks(self):
        toggle = PasswordToggle()
        toggle.press()
        toggle.leave()
        assert toggle.revealed is False

    def test_toggle_events_do_not_touch_validation(self, adapter):
        adapter.dispatch("input", "password", "Secret#1")
        adapter.dispatch("toggle_press")
        assert adapter.password_toggle.revealed is True

        adapter.dispatch("toggle_leave")
        assert adapter.password_toggle.revealed is False
        assert adapter.state("password").status == "idle"


class TestCreateFormAdapter:
    """Tests for guarded adapter construction"""

    def test_default_settings(self):
        adapter = create_form_adapter(FormSettings())
        assert isinstance(adapter, FormAdapter)
        assert adapter.registry is None
        assert adapter.reset_delay_ms == 3000

    def test_unique_email_enables_registry_rule(self, tmp_path):
        settings = FormSettings(unique_email=True, registry_path=tmp_path / "emails.json")

        adapter = create_form_adapter(settings)

        names = [name for name, _ in adapter.engine.rule_set(FieldId.EMAIL)]
        assert "email_unique" in names
        assert adapter.registry.path == tmp_path / "emails.json"

    def test_registry_without_uniqueness_rule(self, tmp_path):
        settings = FormSettings(registry_path=tmp_path / "emails.json")

        adapter = create_form_adapter(settings)

        names = [name for name, _ in adapter.engine.rule_set(FieldId.EMAIL)]
        assert "email_unique" not in names
        assert adapter.registry is not None

    def test_missing_rules_file_returns_none(self, tmp_path):
        settings = FormSettings(rules_path=tmp_path / "missing.yaml")
        assert create_form_adapter(settings) is None

    @pytest.mark.parametrize("content", [
        "rules:\n",
        "rules:\n  - type: required_field\n",
        "- rules\n",
    ])
    def test_malformed_rules_file_returns_none(self, tmp_path, content):
        path = tmp_path / "rules.yaml"
        path.write_text(content)
        assert create_form_adapter(FormSettings(rules_path=path)) is None

    def test_corrupt_registry_returns_none(self, tmp_path):
        path = tmp_path / "emails.json"
        path.write_text("{not json")
        assert create_form_adapter(FormSettings(registry_path=path)) is None

    def test_settings_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("REGFORM_RESET_DELAY_MS", "250")
        monkeypatch.setenv("REGFORM_REGISTRY_PATH", str(tmp_path / "emails.json"))
        monkeypatch.setenv("REGFORM_UNIQUE_EMAIL", "true")

        adapter = create_form_adapter()

        assert adapter.reset_delay_ms == 250
        assert adapter.registry is not None

    def test_invalid_env_returns_none(self, monkeypatch):
        monkeypatch.setenv("REGFORM_RESET_DELAY_MS", "soon")
        assert create_form_adapter() is None
