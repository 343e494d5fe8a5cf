"""Career counselor conversation: persona, streaming session and controller."""

from .agent import ConversationController, TurnState
from .schemas import Conversation, Message, Sender
from .session import ChatSession, PersonaConfig, SessionGateway

__all__ = [
    "ChatSession",
    "Conversation",
    "ConversationController",
    "Message",
    "PersonaConfig",
    "Sender",
    "SessionGateway",
    "TurnState",
]
