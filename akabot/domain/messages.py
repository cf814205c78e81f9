"""Outgoing chat payloads and delivery targets.

ChatResponse is a closed set of variants, each with its own serializer:
TextMessage and BlockMessage go to a reply URL or a channel, FileUpload
goes to the upload API.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Union

EPHEMERAL = "ephemeral"
IN_CHANNEL = "in_channel"


@dataclass(frozen=True)
class ReplyTarget:
    """One-shot reply URL scoped to a single command invocation."""

    url: str


@dataclass(frozen=True)
class ChannelTarget:
    """Persistent channel endpoint, posted to with the bot token."""

    channel_id: str


Target = Union[ReplyTarget, ChannelTarget]


@dataclass(frozen=True)
class TextMessage:
    text: str
    response_type: str = EPHEMERAL

    def to_payload(self) -> Dict[str, Any]:
        return {"response_type": self.response_type, "text": self.text}


@dataclass(frozen=True)
class BlockMessage:
    blocks: List[Dict[str, Any]]
    response_type: str = IN_CHANNEL
    text: str = ""  # notification fallback

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "response_type": self.response_type,
            "blocks": list(self.blocks),
        }
        if self.text:
            payload["text"] = self.text
        return payload


@dataclass(frozen=True)
class FileUpload:
    channel_id: str
    content: str
    filename: str
    filetype: str = "text"
    title: str = ""

    def to_form_fields(self) -> Dict[str, str]:
        return {
            "channels": self.channel_id,
            "content": self.content,
            "filename": self.filename,
            "filetype": self.filetype,
            "title": self.title,
        }


ChatResponse = Union[TextMessage, BlockMessage, FileUpload]


# ── Block Kit helpers ──────────────────────────────────────


def section(text: str) -> Dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def divider() -> Dict[str, Any]:
    return {"type": "divider"}


def context(text: str) -> Dict[str, Any]:
    return {"type": "context", "elements": [{"type": "mrkdwn", "text": text}]}


def button(text: str, action_id: str, value: str) -> Dict[str, Any]:
    return {
        "type": "button",
        "text": {"type": "plain_text", "text": text, "emoji": False},
        "action_id": action_id,
        "value": value,
    }


def actions(*elements: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "actions", "elements": list(elements)}


SECTION_TEXT_LIMIT = 3000


def chunk_text(text: str, limit: int = SECTION_TEXT_LIMIT) -> List[str]:
    """Split text into section-sized chunks on line boundaries.

    A single line longer than the limit is hard-split.
    """
    chunks: List[str] = []
    current = ""
    for line in text.splitlines(keepends=True):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        if len(current) + len(line) > limit:
            chunks.append(current)
            current = ""
        current += line
    if current:
        chunks.append(current)
    return chunks
