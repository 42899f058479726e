"""FastAPI routes for Mindmate chat."""
import time

from fastapi import APIRouter

from app.core.agent import chat as run_chat
from app.core.config import get_settings
from app.core.history import mock_history
from app.models.schemas import ChatRequest, ChatResponse, Message

router = APIRouter(prefix="/api", tags=["mindmate"])


@router.post("/chat", response_model=ChatResponse)
def chat(req: ChatRequest) -> ChatResponse:
    """Send a message and get Mindmate's reply. custom_api_url/custom_api_password are optional per call."""
    return run_chat(req)


@router.get("/python-chat-history", response_model=list[Message])
def python_chat_history() -> list[Message]:
    """Simulated Python API endpoint returning a fixed chat history."""
    delay = get_settings().history_delay_seconds
    if delay:
        time.sleep(delay)
    return mock_history()


@router.get("/health")
def health() -> dict:
    """Health check."""
    return {"status": "ok"}
