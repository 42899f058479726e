from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
import requests

from app.core.history import HistoryLoadError, load_history, mock_history

GET = "app.core.history.requests.get"


def test_mock_history_offsets():
    now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    msgs = mock_history(now)
    assert [now - m.timestamp for m in msgs] == [
        timedelta(hours=2),
        timedelta(minutes=55),
        timedelta(minutes=50),
        timedelta(minutes=45),
    ]
    assert "/api/python-chat-history" in msgs[-1].text


def test_load_history_sorts_oldest_first(fake_response):
    body = (
        '[{"id": "b", "text": "later", "sender": "api", "timestamp": "2024-05-01T12:00:00Z"},'
        ' {"id": "a", "text": "earlier", "sender": "user", "timestamp": "2024-05-01T11:00:00Z"}]'
    )
    with patch(GET, return_value=fake_response(200, body)):
        msgs = load_history("http://localhost:8000/api/python-chat-history")
    assert [m.id for m in msgs] == ["a", "b"]
    assert msgs[0].timestamp.tzinfo is not None


def test_load_history_error_status(fake_response):
    with patch(GET, return_value=fake_response(502, "", "Bad Gateway")):
        with pytest.raises(HistoryLoadError, match="status 502: Bad Gateway"):
            load_history("http://h/history")


def test_load_history_network_error():
    with patch(GET, side_effect=requests.ConnectionError("refused")):
        with pytest.raises(HistoryLoadError, match="refused"):
            load_history("http://h/history")


def test_load_history_requires_url():
    with pytest.raises(HistoryLoadError, match="provide an API URL"):
        load_history("")


@pytest.mark.parametrize("body", ["not json", '{"id": 1}', '[{"id": "x"}]'])
def test_load_history_rejects_bad_payloads(fake_response, body):
    with patch(GET, return_value=fake_response(200, body)):
        with pytest.raises(HistoryLoadError):
            load_history("http://h/history")


@pytest.mark.parametrize(
    "first, second",
    [
        ("2024-05-01T11:00:00", "2024-05-01T12:00:00Z"),
        ("2024-05-01T11:00:00Z", "2024-05-01T12:00:00"),
        ("2024-05-01T11:00:00", "2024-05-01T12:00:00"),
        ("2024-05-01T13:00:00+02:00", "2024-05-01T12:00:00"),
    ],
)
def test_load_history_sorts_mixed_timestamp_formats(fake_response, first, second):
    body = (
        f'[{{"id": "later", "text": "b", "sender": "api", "timestamp": "{second}"}},'
        f' {{"id": "earlier", "text": "a", "sender": "user", "timestamp": "{first}"}}]'
    )
    with patch(GET, return_value=fake_response(200, body)):
        msgs = load_history("http://h/history")
    assert [m.id for m in msgs] == ["earlier", "later"]
    assert all(m.timestamp.tzinfo is not None for m in msgs)
