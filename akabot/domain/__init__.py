"""Domain layer — pure Python, no framework dependencies."""

from akabot.domain.models import (
    AppRecord,
    DisplayDyno,
    DynoRecord,
    FormationRecord,
    MembershipRecord,
)
from akabot.domain.dyno_state import normalize
from akabot.domain.grammar import COMMANDS, parse_command
from akabot.domain.messages import BlockMessage, ChannelTarget, FileUpload, ReplyTarget, TextMessage
from akabot.domain.suggestions import rank_matches

__all__ = [
    "AppRecord",
    "DisplayDyno",
    "DynoRecord",
    "FormationRecord",
    "MembershipRecord",
    "normalize",
    "COMMANDS",
    "parse_command",
    "BlockMessage",
    "ChannelTarget",
    "FileUpload",
    "ReplyTarget",
    "TextMessage",
    "rank_matches",
]
