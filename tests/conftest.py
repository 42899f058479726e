import pytest


@pytest.fixture(autouse=True)
def _fast_env(monkeypatch, tmp_path):
    """No artificial delays, no model key, and a throwaway settings file."""
    monkeypatch.setenv("SIMULATED_API_DELAY_SECONDS", "0")
    monkeypatch.setenv("HISTORY_DELAY_SECONDS", "0")
    monkeypatch.setenv("MINDMATE_SETTINGS_PATH", str(tmp_path / "settings.json"))
    monkeypatch.delenv("CUSTOM_API_TIMEOUT_SECONDS", raising=False)
    monkeypatch.delenv("REDACT_API_PASSWORD", raising=False)


class FakeResponse:
    def __init__(self, status_code=200, text="", reason="OK"):
        self.status_code = status_code
        self.text = text
        self.reason = reason
        self.headers = {}
        self.encoding = None

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        import json
        return json.loads(self.text)


@pytest.fixture
def fake_response():
    return FakeResponse
