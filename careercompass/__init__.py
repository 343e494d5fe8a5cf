"""Core package for the CareerCompass counselor chat.

This package exposes the conversation controller and the session gateway
that streams replies from the hosted model; the Textual front end lives
in :mod:`careercompass.ui`.
"""

from .counselor.agent import ConversationController  # re-export for convenience
from .counselor.session import SessionGateway

__all__ = ["ConversationController", "SessionGateway"]
