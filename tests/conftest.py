"""
Shared fixtures and test doubles.

``FakeGateway`` replays scripted replies so the controller and the UI can
be driven deterministically without touching the network.
"""

import asyncio
import os
from dataclasses import dataclass, field
from typing import AsyncIterator, List, Optional

import pytest

from careercompass.counselor.schemas import Conversation
from careercompass.counselor.session import ChatSession, PersonaConfig

os.environ.setdefault("CAREERCOMPASS_LOG_LEVEL", "WARNING")


@dataclass
class ScriptedTurn:
    """One scripted reply: the fragments to stream, then an optional error."""

    fragments: List[str] = field(default_factory=list)
    error: Optional[Exception] = None
    gate: Optional[asyncio.Event] = None  # held closed to keep the turn in flight


class FakeGateway:
    def __init__(self, *turns: ScriptedTurn, create_error: Optional[Exception] = None) -> None:
        self.turns = list(turns)
        self.create_error = create_error
        self.sent: List[str] = []
        self.sessions: List[ChatSession] = []
        self.closed = False

    def create_session(self, config: PersonaConfig) -> ChatSession:
        if self.create_error is not None:
            raise self.create_error
        session = ChatSession(client=None, config=config)
        self.sessions.append(session)
        return session

    async def send_turn(self, session: ChatSession, text: str) -> AsyncIterator[str]:
        self.sent.append(text)
        turn = self.turns.pop(0)
        if turn.gate is not None:
            await turn.gate.wait()
        for fragment in turn.fragments:
            await asyncio.sleep(0)
            yield fragment
        if turn.error is not None:
            raise turn.error

    async def aclose(self) -> None:
        self.closed = True


class Recorder:
    """``on_change`` listener that keeps a snapshot of every publication."""

    def __init__(self) -> None:
        self.snapshots: List[Conversation] = []

    def __call__(self, conversation: Conversation) -> None:
        self.snapshots.append(conversation.snapshot())

    def texts_of(self, message_id: str) -> List[str]:
        """Distinct successive texts the given message went through."""
        texts: List[str] = []
        for snapshot in self.snapshots:
            message = snapshot.find(message_id)
            if message is None:
                continue
            if not texts or texts[-1] != message.text:
                texts.append(message.text)
        return texts

    @property
    def pending_flags(self) -> List[bool]:
        return [snapshot.pending for snapshot in self.snapshots]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("API_KEY", "CAREERCOMPASS_BASE_URL", "CAREERCOMPASS_TIMEOUT_S"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
