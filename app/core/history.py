"""Chat history: the fixed mock history served by the API and loading history from a URL."""
import logging
from datetime import datetime, timedelta, timezone

import requests
from pydantic import ValidationError

from app.models.schemas import Message

logger = logging.getLogger(__name__)


class HistoryLoadError(Exception):
    """History URL unreachable, returned an error status, or returned something that isn't a message list."""


def mock_history(now: datetime | None = None) -> list[Message]:
    now = now or datetime.now(timezone.utc)
    return [
        Message(
            id="hist-1",
            text="Hello from the (simulated) Python API! This is a past message.",
            sender="api",
            timestamp=now - timedelta(hours=2),
        ),
        Message(
            id="hist-2",
            text="User asked something interesting here.",
            sender="user",
            timestamp=now - timedelta(minutes=55),
        ),
        Message(
            id="hist-3",
            text="And this was the Python API's wise reply.",
            sender="api",
            timestamp=now - timedelta(minutes=50),
        ),
        Message(
            id="hist-4",
            text="Remember to set the API URL in settings to /api/python-chat-history to see this.",
            sender="api",
            timestamp=now - timedelta(minutes=45),
        ),
    ]


def load_history(url: str, *, timeout: float = 15) -> list[Message]:
    """GET url and return its messages oldest first. Raises HistoryLoadError."""
    if not url:
        raise HistoryLoadError(
            "Please provide an API URL in settings to load history. For the demo, try: /api/python-chat-history"
        )
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("History fetch failed %s: %s", url, e)
        raise HistoryLoadError(f"Could not fetch chat history: {e}") from e

    if not resp.ok:
        raise HistoryLoadError(f"API request failed with status {resp.status_code}: {resp.text or resp.reason}")
    try:
        data = resp.json()
    except ValueError as e:
        raise HistoryLoadError(f"History response is not JSON: {e}") from e
    if not isinstance(data, list):
        raise HistoryLoadError("History response is not a list of messages.")
    try:
        messages = [Message.model_validate(m) for m in data]
    except ValidationError as e:
        raise HistoryLoadError(f"Invalid message in history: {e}") from e

    logger.info("Loaded %d history message(s) from %s", len(messages), url)
    return sorted(messages, key=lambda m: m.timestamp)
