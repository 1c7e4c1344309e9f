import pytest

from translatable_fields.core.config.registry import reset_config


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    # The registry is process-wide; every test starts from an empty config.
    monkeypatch.delenv("TRANSLATABLE_LOCALES", raising=False)
    monkeypatch.delenv("TRANSLATABLE_CONFIG", raising=False)
    reset_config()
    yield
    reset_config()
