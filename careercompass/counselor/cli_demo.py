"""Plain terminal chat with the counselor.

Uses the same controller as the TUI and prints every reply as it streams,
which makes it a quick way to exercise a provider key end-to-end.
"""

from __future__ import annotations

import asyncio
import os
import sys
from typing import Dict, TextIO

from ..errors import ConfigurationError
from ..logging_setup import configure_logging
from .agent import ConversationController
from .client import ProviderSettings
from .schemas import Conversation, Sender
from .session import SessionGateway


class StreamPrinter:
    """Writes the not-yet-printed tail of each bot message."""

    def __init__(self, out: TextIO = sys.stdout) -> None:
        self.out = out
        self._printed: Dict[str, int] = {}

    def __call__(self, conversation: Conversation) -> None:
        for message in conversation.messages:
            if message.sender is not Sender.BOT:
                continue
            done = self._printed.get(message.id)
            if done is None:
                self.out.write("\nCareerCompass: ")
                done = 0
            tail = message.text[done:]
            if tail:
                self.out.write(tail)
                self.out.flush()
            self._printed[message.id] = len(message.text)


async def run_chat_session() -> None:
    configure_logging(level=os.getenv("CAREERCOMPASS_LOG_LEVEL", "WARNING"))

    try:
        settings = ProviderSettings.from_env()
    except ConfigurationError as e:
        print(f"❌ {e}")
        return

    gateway = SessionGateway(settings)
    try:
        await _converse(ConversationController(gateway, on_change=StreamPrinter()))
    finally:
        await gateway.aclose()


async def _converse(controller: ConversationController) -> None:
    print("--- Starting CareerCompass ---")
    await controller.initialize()
    print("\n")

    if controller.session is None:
        return

    print("Type 'exit' or 'quit' to stop.\n")

    while True:
        try:
            user_input = (await asyncio.to_thread(input, "You: ")).strip()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break

        if user_input.lower() in ["exit", "quit"]:
            print("Goodbye!")
            break

        if not user_input:
            continue

        await controller.submit_user_turn(user_input)
        print("\n")


if __name__ == "__main__":
    asyncio.run(run_chat_session())
