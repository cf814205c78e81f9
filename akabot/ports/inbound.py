"""Inbound port — platform-agnostic command representation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class InboundCommand:
    """A slash command as received from the chat platform."""

    channel_id: str
    channel_name: str
    reply_url: str
    user_id: str
    user_name: str
    text: str
    credential: str = ""


@dataclass(frozen=True)
class CommandMeta:
    """Request-scoped context passed to every downstream call."""

    channel_id: str
    channel_name: str
    reply_url: str
    credential: str
    user_name: str
    timezone: str

    @classmethod
    def from_inbound(cls, inbound: InboundCommand, timezone: str) -> "CommandMeta":
        return cls(
            channel_id=inbound.channel_id,
            channel_name=inbound.channel_name,
            reply_url=inbound.reply_url,
            credential=inbound.credential,
            user_name=inbound.user_name,
            timezone=timezone,
        )
