"""Command router — gate, parse and dispatch one slash command.

The web layer acknowledges the request first and then runs ``handle`` as a
detached task. Nothing reaches the caller after that point, so every
outcome, including failure, goes out through the reply URL.
"""

import logging
from typing import Awaitable, Callable, Dict, Optional

from akabot.config import CONFIG
from akabot.domain.grammar import APP_INFO, LIST_APPS, LOGS, parse_command
from akabot.ports.inbound import CommandMeta, InboundCommand
from akabot.ports.outbound import DeliveryPort, UserDirectory
from akabot.services.apps import AppsQueryService
from akabot.services.logs import LogsService
from akabot.services.membership import MembershipGate

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Oops! Something went wrong. Please try again later."

Handler = Callable[[CommandMeta, str], Awaitable[None]]

ACKNOWLEDGMENT = {"response_type": "in_channel"}


def not_a_member_notice(channel_name: str) -> str:
    return f"Please add the aka bot to #{channel_name} before running commands there."


def unrecognized_notice(text: str) -> str:
    return f"Unrecognized command: {text}"


class CommandRouter:
    def __init__(
        self,
        gate: MembershipGate,
        delivery: DeliveryPort,
        apps: AppsQueryService,
        logs: LogsService,
        users: Optional[UserDirectory] = None,
    ):
        self._gate = gate
        self._delivery = delivery
        self._users = users
        self._handlers: Dict[str, Handler] = {
            LIST_APPS: lambda meta, _arg: apps.list_apps(meta),
            APP_INFO: apps.get_app_info,
            LOGS: logs.get_logs,
        }

    @staticmethod
    def acknowledge() -> dict:
        """Immediate response body for the platform's HTTP transaction."""
        return dict(ACKNOWLEDGMENT)

    async def _resolve_timezone(self, user_id: str) -> str:
        if self._users is not None and user_id:
            try:
                tz = await self._users.get_user_timezone(user_id)
                if tz:
                    return tz
            except Exception:
                logger.warning("Could not resolve timezone for %s", user_id, exc_info=True)
        return CONFIG["default_timezone"]

    async def handle(self, inbound: InboundCommand) -> None:
        """Run a command to completion. Never raises."""
        logger.info("/aka %r from %s in #%s", inbound.text, inbound.user_name, inbound.channel_name)
        try:
            if not self._gate.check(inbound.channel_id):
                logger.info("Not a member of #%s (%s)", inbound.channel_name, inbound.channel_id)
                await self._delivery.send_error(inbound.reply_url, not_a_member_notice(inbound.channel_name))
                return

            parsed = parse_command(inbound.text)
            if parsed is None:
                logger.warning("Unrecognized command %r", inbound.text)
                await self._delivery.send_error(inbound.reply_url, unrecognized_notice(inbound.text))
                return

            command, arg = parsed
            meta = CommandMeta.from_inbound(inbound, await self._resolve_timezone(inbound.user_id))
            await self._handlers[command](meta, arg)
        except Exception:
            logger.exception("Command %r failed", inbound.text)
            await self._delivery.send_error(inbound.reply_url, GENERIC_ERROR)
