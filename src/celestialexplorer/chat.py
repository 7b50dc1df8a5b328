"""Space-expert chat panel backed by the Claude API."""

from __future__ import annotations

import os
import re
import unicodedata
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Literal

import anthropic
from loguru import logger

Role = Literal["user", "assistant"]

SYSTEM_PREAMBLE = (
    "You are a helpful and enthusiastic NASA expert. "
    "Keep answers concise, factual, and exciting."
)
GREETING = (
    "👋 Hi! I'm your NASA AI Expert. "
    "Ask me anything about planets, stars, or space exploration!"
)
EMPTY_REPLY = "Sorry, I couldn't get a response right now."

_MAX_MESSAGE_CHARS = 2000


@dataclass(frozen=True)
class ChatTurn:
    role: Role
    text: str


Completion = Callable[[str, Sequence[ChatTurn]], str]


def _sanitize_message(text: str) -> str | None:
    """Normalise user input before it is sent.

    Returns the cleaned text, or None if nothing is left.
    """
    if not text or not text.strip():
        return None
    text = unicodedata.normalize("NFKC", text)[:_MAX_MESSAGE_CHARS]
    text = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", text)
    return text.strip() or None


def claude_completion(system: str, transcript: Sequence[ChatTurn]) -> str:
    """Send the transcript to the Messages API and return the reply text.

    The leading assistant greeting is dropped because the API expects the
    conversation to open with a user turn.
    """
    messages = [{"role": turn.role, "content": turn.text} for turn in transcript]
    while messages and messages[0]["role"] == "assistant":
        messages.pop(0)

    client = anthropic.Anthropic(api_key=os.environ["ANTHROPIC_API_KEY"])
    message = client.messages.create(
        model=os.environ.get("CELESTIAL_CHAT_MODEL", "claude-sonnet-4-6"),
        max_tokens=600,
        system=system,
        messages=messages,  # type: ignore[arg-type]
    )
    if not message.content:
        return ""
    return message.content[0].text  # type: ignore[union-attr]


@dataclass
class ChatSession:
    """Transcript plus in-flight flag for one chat panel."""

    complete: Completion = claude_completion
    turns: list[ChatTurn] = field(
        default_factory=lambda: [ChatTurn("assistant", GREETING)]
    )
    sending: bool = False

    def send(self, text: str) -> ChatTurn | None:
        """Append a user turn and the assistant's reply.

        Blank input and input arriving while a request is in flight are
        ignored. Failures become an assistant error turn.

        Returns:
            The reply turn, or None when the input was ignored.
        """
        message = _sanitize_message(text)
        if message is None or self.sending:
            return None
        self.turns.append(ChatTurn("user", message))
        self.sending = True
        try:
            reply = self.complete(SYSTEM_PREAMBLE, tuple(self.turns)) or EMPTY_REPLY
        except (anthropic.APIError, KeyError, OSError) as e:
            logger.error(f"Chat request failed: {e!r}")
            reply = f"Error: {e}. Check your internet or API key."
        finally:
            self.sending = False
        turn = ChatTurn("assistant", reply)
        self.turns.append(turn)
        return turn
