"""
Pytest configuration and fixtures for regform tests

This module provides shared fixtures for engine, adapter and CLI tests.
"""
import pytest

from regform.adapter import EmailRegistry, FormAdapter
from regform.core.models import FormRecord
from regform.core.rules import build_registration_engine


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# RECORD FIXTURES
# =======================

VALID_VALUES = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "password": "Engine#1843",
    "confirmPassword": "Engine#1843",
}


@pytest.fixture
def valid_values() -> dict[str, str]:
    """Field values that satisfy every rule in the catalog"""
    return dict(VALID_VALUES)


@pytest.fixture
def valid_record(valid_values) -> FormRecord:
    return FormRecord.from_mapping(valid_values)


# =======================
# ENGINE / ADAPTER FIXTURES
# =======================

@pytest.fixture
def engine():
    """Engine over the built-in catalog, without the uniqueness rule"""
    return build_registration_engine()


@pytest.fixture
def registry(tmp_path) -> EmailRegistry:
    """File-backed registry in a temporary directory"""
    return EmailRegistry(tmp_path / "emails.json")


class FakeScheduler:
    """Records scheduled resets instead of starting timers"""

    def __init__(self):
        self.delay = None
        self.callback = None
        self.cancelled = 0

    def schedule(self, delay_seconds, callback):
        self.delay = delay_seconds
        self.callback = callback

    def cancel(self) -> bool:
        was_pending = self.callback is not None
        if was_pending:
            self.cancelled += 1
        self.callback = None
        return was_pending

    @property
    def pending(self) -> bool:
        return self.callback is not None

    def fire(self):
        callback, self.callback = self.callback, None
        callback()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def adapter(engine, scheduler) -> FormAdapter:
    """Adapter with a fake scheduler and no registry"""
    return FormAdapter(engine, scheduler=scheduler)


@pytest.fixture
def fill():
    """Type every value into an adapter through input events"""
    def _fill(adapter: FormAdapter, values: dict[str, str]) -> None:
        for field, value in values.items():
            adapter.dispatch("input", field, value)
    return _fill
