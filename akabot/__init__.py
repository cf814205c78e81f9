"""aka — Akkeris chat-ops Slack bot package."""

from akabot.config import CONFIG, AppConfig, __version__
from akabot.adapters.akkeris import AkkerisAPIError, AkkerisClient, AkkerisNotFound
from akabot.adapters.slack import ChannelSync, SlackDelivery, SlackDeliveryError
from akabot.adapters.storage import JsonMembershipStore
from akabot.services import (
    AppsQueryService,
    CommandRouter,
    LogsService,
    MembershipGate,
    SuggestionEngine,
)

__all__ = [
    "CONFIG",
    "AppConfig",
    "__version__",
    "AkkerisAPIError",
    "AkkerisClient",
    "AkkerisNotFound",
    "ChannelSync",
    "SlackDelivery",
    "SlackDeliveryError",
    "JsonMembershipStore",
    "AppsQueryService",
    "CommandRouter",
    "LogsService",
    "MembershipGate",
    "SuggestionEngine",
]
