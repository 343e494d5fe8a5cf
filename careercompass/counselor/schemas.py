"""Shared data shapes for the counselor chat."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Sender(str, Enum):
    USER = "user"
    BOT = "bot"


class Message(BaseModel):
    id: str = Field(..., description="Unique, creation-ordered identifier")
    sender: Sender
    text: str = Field("", description="Only the streaming bot placeholder is ever mutated")


class Conversation(BaseModel):
    messages: List[Message] = Field(default_factory=list)
    pending: bool = Field(False, description="True exactly while a turn is being sent or streamed")
    session_failed: bool = Field(False, description="Set once initialization failed")

    def find(self, message_id: str) -> Optional[Message]:
        for message in self.messages:
            if message.id == message_id:
                return message
        return None

    def snapshot(self) -> "Conversation":
        """Return an independent copy, safe to keep after further updates."""
        return self.model_copy(deep=True)
