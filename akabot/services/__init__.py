"""Application services — the command pipeline."""

from akabot.services.apps import AppsQueryService
from akabot.services.logs import LogsService
from akabot.services.membership import MembershipGate
from akabot.services.router import CommandRouter
from akabot.services.suggestions import SuggestionEngine

__all__ = [
    "AppsQueryService",
    "LogsService",
    "MembershipGate",
    "CommandRouter",
    "SuggestionEngine",
]
