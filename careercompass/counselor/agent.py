"""Conversation controller for the career counselor chat.

The core entrypoint is :class:`ConversationController`, which:
- Owns the ordered message list and the ``pending`` flag.
- Opens one persona-bound session and sends the bootstrap turn on startup.
- Streams each reply into a bot placeholder, publishing after every
  fragment so a UI can render the reply as it is typed.
- Turns provider failures into apologetic bot messages.

Anything that renders the conversation only reads it (through the
``on_change`` listener or the ``conversation`` attribute) and calls
:meth:`ConversationController.submit_user_turn`; it never mutates messages.
"""

from __future__ import annotations

import itertools
import logging
from enum import Enum
from typing import Callable, Optional

from ..errors import ConfigurationError
from .prompts import BOOTSTRAP_MESSAGE, INIT_ERROR_TEXT, TRANSPORT_ERROR_TEXT
from .schemas import Conversation, Message, Sender
from .session import ChatGateway, ChatSession, PersonaConfig

logger = logging.getLogger(__name__)

ChangeListener = Callable[[Conversation], None]


class TurnState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"
    FAILED = "failed"


class ConversationController:
    """Drives one conversation from bootstrap greeting to the last turn."""

    def __init__(
        self,
        gateway: ChatGateway,
        config: Optional[PersonaConfig] = None,
        on_change: Optional[ChangeListener] = None,
    ) -> None:
        self.gateway = gateway
        self.config = config or PersonaConfig()
        self.on_change = on_change
        self.conversation = Conversation()
        self.session: Optional[ChatSession] = None
        self.state = TurnState.IDLE
        self._ids = itertools.count(1)
        self._initialized = False

    def can_submit(self, text: str) -> bool:
        """True when :meth:`submit_user_turn` would accept ``text`` right now."""
        return bool(text and text.strip()) and not self.conversation.pending and self.session is not None

    def _new_message(self, sender: Sender, text: str = "") -> Message:
        return Message(id=f"{sender.value}-{next(self._ids)}", sender=sender, text=text)

    def _append(self, message: Message) -> Message:
        self.conversation.messages.append(message)
        self._publish()
        return message

    def _publish(self) -> None:
        if self.on_change is not None:
            self.on_change(self.conversation)

    def _begin_turn(self) -> None:
        self.conversation.pending = True
        self.state = TurnState.SENDING

    def _end_turn(self) -> None:
        self.conversation.pending = False
        self.state = TurnState.IDLE
        self._publish()

    async def _stream_into(self, message_id: str, text: str) -> None:
        """Append every fragment of the reply to ``text`` onto one bot message.

        The target is looked up by id on every fragment, so no other
        message is ever touched.
        """
        async for fragment in self.gateway.send_turn(self.session, text):
            self.state = TurnState.STREAMING
            target = self.conversation.find(message_id)
            if target is None:
                raise RuntimeError(f"Streaming target {message_id!r} vanished from the conversation")
            target.text += fragment
            self._publish()

    async def initialize(self) -> None:
        """Open the session and stream the persona's opening message.

        A missing credential is fatal and propagates. Every other failure
        replaces the message list with a single apologetic bot message and
        leaves the conversation without a session.
        """
        if self._initialized:
            raise RuntimeError("Conversation already initialized")
        self._initialized = True

        self._begin_turn()
        self._publish()
        try:
            self.session = self.gateway.create_session(self.config)
            placeholder = self._append(self._new_message(Sender.BOT))
            await self._stream_into(placeholder.id, BOOTSTRAP_MESSAGE)
            logger.info("Conversation initialized")
        except ConfigurationError:
            self.state = TurnState.FAILED
            self.session = None
            self.conversation.session_failed = True
            self._publish()
            raise
        except Exception:
            logger.exception("Initialization failed")
            self.state = TurnState.FAILED
            self.session = None
            self.conversation.session_failed = True
            self.conversation.messages = [self._new_message(Sender.BOT, INIT_ERROR_TEXT)]
            self._publish()
        finally:
            self._end_turn()

    async def submit_user_turn(self, text: str) -> bool:
        """Send one user utterance and stream the reply.

        Returns False and changes nothing when :meth:`can_submit` rejects
        ``text``.
        """
        if not self.can_submit(text):
            logger.debug("Ignored submission (pending=%s, session=%s)", self.conversation.pending, self.session is not None)
            return False

        self._begin_turn()
        self._append(self._new_message(Sender.USER, text))
        placeholder = self._append(self._new_message(Sender.BOT))
        logger.info("Sending user turn (%d chars)", len(text))
        try:
            await self._stream_into(placeholder.id, text)
            logger.info("Reply complete (%d chars)", len(placeholder.text))
        except Exception:
            logger.exception("Error sending message")
            self.state = TurnState.FAILED
            self._append(self._new_message(Sender.BOT, TRANSPORT_ERROR_TEXT))
        finally:
            self._end_turn()
        return True
