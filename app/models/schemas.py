"""API request and response models."""
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator


class ChatRequest(BaseModel):
    # Accepts the browser flow's camelCase keys as well as snake_case
    model_config = ConfigDict(populate_by_name=True)

    user_input: str = Field(..., alias="userInput", description="The message input by the user")
    custom_api_url: HttpUrl | None = Field(
        None, alias="customApiUrl", description="Optional URL for a custom Python API endpoint for the AI to use"
    )
    custom_api_password: str | None = Field(
        None, alias="customApiPassword", description="Optional password for the custom Python API"
    )

    # The browser client stores unset settings as empty strings
    @field_validator("custom_api_url", "custom_api_password", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ChatResponse(BaseModel):
    response: str = Field(..., description="The AI's response to the user")


class Message(BaseModel):
    id: str
    text: str
    sender: Literal["user", "api"]
    timestamp: datetime

    # Naive timestamps are taken as UTC so mixed payloads still sort
    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo else v.replace(tzinfo=timezone.utc)


class ChatSettings(BaseModel):
    """Client settings; aliases match the keys the browser keeps in localStorage."""

    model_config = ConfigDict(populate_by_name=True)

    bg_color: str = Field("#F0E6FF", alias="bgColor")
    bg_image: str = Field("", alias="bgImage")
    chat_history_api_url: str = Field("", alias="chatHistoryApiUrl")
    chat_message_api_url: str = Field("", alias="chatMessageApiUrl")
    chat_message_api_password: str = Field("", alias="chatMessageApiPassword")
