"""POST a query to the user's custom Python API. Every outcome is returned as text, never raised."""
import json
import logging
import time
from datetime import datetime, timezone

import requests

from app.core.config import get_settings

logger = logging.getLogger(__name__)

PASSWORD_HEADER = "X-API-Password"
SENDER_TAG = "ai-tool"


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def simulated_response(query: str) -> str:
    return (
        f'[Python API SIMULATED Response for: "{query}"] The Python service adds this insight. '
        "(Real API not called as URL was not provided to tool)."
    )


def _read_body(resp: requests.Response) -> str:
    # requests falls back to ISO-8859-1 for text/* without a charset
    if "charset" not in (resp.headers.get("Content-Type") or "").lower():
        resp.encoding = "utf-8"
    return resp.text


def _format_success(body: str) -> str:
    try:
        data = json.loads(body)
    except ValueError:
        return f"Python API text response: {body}"
    return f"Python API JSON response: {json.dumps(data, separators=(',', ':'), ensure_ascii=False)}"


def invoke_python_api(query: str, api_url: str | None = None, api_password: str | None = None) -> str:
    """
    Send query to api_url and describe the outcome.
    Without api_url nothing is sent and a simulated response is returned.
    """
    settings = get_settings()
    if not api_url:
        delay = settings.simulated_api_delay_seconds
        if delay:
            time.sleep(delay)
        return simulated_response(query)

    headers = {"Content-Type": "application/json"}
    if api_password:
        headers[PASSWORD_HEADER] = api_password
    else:
        logger.warning("Custom API URL provided to tool, but no password. Proceeding without password header.")

    payload = {"text": query, "sender": SENDER_TAG, "timestamp": _iso_now()}
    try:
        logger.info("Calling custom API at %s with query=%r", api_url, query[:80])
        resp = requests.post(
            api_url,
            data=json.dumps(payload),
            headers=headers,
            timeout=settings.custom_api_timeout_seconds,
        )
        # Body first so error responses keep their detail
        body = _read_body(resp)
        if not resp.ok:
            logger.error("Custom API error %s: %s", resp.status_code, body[:500])
            return f"Error {resp.status_code} from custom API: {body or resp.reason}"
        return _format_success(body)
    except requests.RequestException as e:
        logger.error("Failed to call custom API: %s", e)
        return f"Failed to call custom API: {e}"
    except Exception as e:
        logger.exception("Unexpected error calling custom API: %s", e)
        return f"Failed to call custom API: {e}"
