"""Widgets for the CareerCompass terminal UI."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import LoadingIndicator, Static

from ..counselor.formatting import to_rich_text
from ..counselor.schemas import Message


class MessageBubble(Static):
    """One chat message, styled by sender."""

    DEFAULT_CSS = """
    MessageBubble {
        width: auto;
        max-width: 85%;
        height: auto;
        margin: 1 0 0 0;
        padding: 0 2;
    }

    MessageBubble.user {
        background: $primary;
        color: $text;
    }

    MessageBubble.bot {
        background: $panel;
    }
    """

    def __init__(self, message: Message) -> None:
        super().__init__(to_rich_text(message.text), classes=message.sender.value)
        self.message_id = message.id
        self.sender = message.sender
        self.message_text = message.text

    def set_text(self, text: str) -> None:
        if text == self.message_text:
            return
        self.message_text = text
        self.update(to_rich_text(text))


class BubbleRow(Horizontal):
    """Full-width row that pushes user bubbles right and bot bubbles left."""

    DEFAULT_CSS = """
    BubbleRow {
        width: 100%;
        height: auto;
    }

    BubbleRow.user {
        align-horizontal: right;
    }

    BubbleRow.bot {
        align-horizontal: left;
    }
    """

    def __init__(self, message: Message) -> None:
        super().__init__(classes=message.sender.value)
        self.bubble = MessageBubble(message)

    def compose(self) -> ComposeResult:
        yield self.bubble


class TypingIndicator(LoadingIndicator):
    """Pulsing dots shown while the counselor is writing."""

    DEFAULT_CSS = """
    TypingIndicator {
        width: 12;
        height: 1;
        margin: 1 0 0 0;
        background: $panel;
        color: $accent;
    }
    """
