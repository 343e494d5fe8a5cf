"""Textual application for chatting with the CareerCompass counselor."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, Input, Static

from ..errors import ConfigurationError
from ..logging_setup import configure_logging
from ..counselor.agent import ConversationController
from ..counselor.client import ProviderSettings
from ..counselor.schemas import Conversation
from ..counselor.session import ChatGateway, SessionGateway
from .widgets import BubbleRow, TypingIndicator

logger = logging.getLogger(__name__)


class StartupErrorScreen(ModalScreen[None]):
    """Shown instead of the chat when the app cannot start."""

    CSS = """
    StartupErrorScreen {
        align: center middle;
    }

    #startup-error-dialog {
        width: 64;
        height: auto;
        padding: 1 2;
        border: round $error;
        background: $surface;
    }

    #startup-error-title {
        padding-bottom: 1;
        text-style: bold;
        color: $error;
    }
    """

    BINDINGS = [Binding("escape,q", "app.quit", "Quit")]

    def __init__(self, detail: str) -> None:
        super().__init__()
        self.detail = detail

    def compose(self) -> ComposeResult:
        with Container(id="startup-error-dialog"):
            yield Static("CareerCompass could not start", id="startup-error-title")
            yield Static(self.detail, id="startup-error-detail", markup=False)
            yield Static("Set the missing value (or add it to .env) and relaunch. Press q to quit.")


class CareerCompassApp(App[None]):
    """Single-screen chat with the career counselor."""

    TITLE = "Intelligirls AI Career Compass"
    SUB_TITLE = "Guiding the next generation of tech leaders."

    CSS = """
    Screen {
        layout: vertical;
    }

    #conversation {
        height: 1fr;
        padding: 0 1 1 1;
    }

    #input_row {
        height: auto;
        padding: 0 1 1 1;
        border-top: solid $panel;
    }

    #message_input {
        width: 1fr;
    }

    #send_button {
        margin-left: 1;
        min-width: 10;
    }
    """

    BINDINGS = [Binding("ctrl+q", "quit", "Quit")]

    IDLE_PLACEHOLDER = "Type your message..."
    BUSY_PLACEHOLDER = "Thinking..."

    def __init__(self, gateway: ChatGateway, startup_error: Optional[str] = None) -> None:
        super().__init__()
        self.startup_error = startup_error
        self.controller = ConversationController(gateway, on_change=self.render_conversation)
        self._rows: Dict[str, BubbleRow] = {}

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="conversation"):
            yield TypingIndicator(id="typing")
        with Horizontal(id="input_row"):
            yield Input(placeholder=self.BUSY_PLACEHOLDER, id="message_input", disabled=True)
            yield Button("Send", id="send_button", variant="primary", disabled=True)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#typing", TypingIndicator).display = False
        if self.startup_error:
            self.push_screen(StartupErrorScreen(self.startup_error))
            return
        self.run_worker(self._initialize(), group="turn", exit_on_error=False)

    async def _initialize(self) -> None:
        try:
            await self.controller.initialize()
        except ConfigurationError as e:
            logger.error("Startup failed: %s", e)
            self.startup_error = str(e)
            self.push_screen(StartupErrorScreen(str(e)))

    async def on_unmount(self) -> None:
        await self.controller.gateway.aclose()

    def render_conversation(self, conversation: Conversation) -> None:
        """Bring the widgets in line with ``conversation``.

        Only reads the conversation. Bubbles are matched by message id,
        so a streaming update re-renders a single bubble.
        """
        view = self.query_one("#conversation", VerticalScroll)
        typing = self.query_one("#typing", TypingIndicator)

        live_ids = {message.id for message in conversation.messages}
        for message_id in [mid for mid in self._rows if mid not in live_ids]:
            self._rows.pop(message_id).remove()

        for message in conversation.messages:
            row = self._rows.get(message.id)
            if row is None:
                row = BubbleRow(message)
                self._rows[message.id] = row
                view.mount(row, before=typing)
            else:
                row.bubble.set_text(message.text)

        typing.display = conversation.pending and bool(conversation.messages)

        busy = conversation.pending or conversation.session_failed
        message_input = self.query_one("#message_input", Input)
        message_input.disabled = busy
        message_input.placeholder = self.BUSY_PLACEHOLDER if conversation.pending else self.IDLE_PLACEHOLDER
        self._sync_send_button()
        if not busy:
            message_input.focus()

        view.scroll_end(animate=False)

    def _sync_send_button(self) -> None:
        message_input = self.query_one("#message_input", Input)
        self.query_one("#send_button", Button).disabled = message_input.disabled or not message_input.value.strip()

    def on_input_changed(self, event: Input.Changed) -> None:
        self._sync_send_button()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.submit(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send_button":
            self.submit(self.query_one("#message_input", Input).value)

    def submit(self, text: str) -> None:
        """Hand ``text`` to the controller if it would accept it now."""
        message_input = self.query_one("#message_input", Input)
        if message_input.disabled or not self.controller.can_submit(text):
            return
        message_input.value = ""
        # locked until the controller publishes the finished turn
        message_input.disabled = True
        self._sync_send_button()
        self.run_worker(self.controller.submit_user_turn(text), group="turn", exit_on_error=False)


def main() -> None:
    configure_logging(to_file=True)

    startup_error = None
    settings = None
    try:
        settings = ProviderSettings.from_env()
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        startup_error = str(e)

    CareerCompassApp(SessionGateway(settings), startup_error=startup_error).run()


if __name__ == "__main__":
    main()
