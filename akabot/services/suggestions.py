"""Suggestion engine — proposes a close app name after a failed lookup."""

import logging

from akabot.domain.messages import IN_CHANNEL, BlockMessage, ReplyTarget, actions, button, section
from akabot.domain.suggestions import rank_matches
from akabot.ports.inbound import CommandMeta
from akabot.ports.outbound import AppsPort, DeliveryPort

logger = logging.getLogger(__name__)

APP_INFO_ERROR = "Error retrieving app info. Please try again later."
DELIVERY_ERROR = "Oops! Something went wrong. Please try again later."
APP_INFO_ACTION = "app_info"


def build_suggestion(app_name: str) -> BlockMessage:
    return BlockMessage(
        blocks=[
            section(f"Did you mean _{app_name}_?"),
            actions(button(f"Get info for {app_name}", APP_INFO_ACTION, app_name)),
        ],
        response_type=IN_CHANNEL,
        text=f"Did you mean {app_name}?",
    )


class SuggestionEngine:
    def __init__(self, apps: AppsPort, delivery: DeliveryPort):
        self._apps = apps
        self._delivery = delivery

    async def suggest(self, meta: CommandMeta, queried_name: str) -> None:
        """Offer the closest app name, or the generic error if nothing is close."""
        try:
            apps = await self._apps.list_apps(meta.credential)
        except Exception:
            logger.exception("Could not fetch apps to suggest for %r", queried_name)
            await self._delivery.send_error(meta.reply_url, APP_INFO_ERROR)
            return

        matches = rank_matches(queried_name, [a.name for a in apps], limit=1)
        if not matches:
            logger.info("No suggestion for %r", queried_name)
            await self._delivery.send_error(meta.reply_url, APP_INFO_ERROR)
            return

        try:
            await self._delivery.post_message(ReplyTarget(meta.reply_url), build_suggestion(matches[0]))
        except Exception:
            logger.exception("Failed to deliver suggestion %r", matches[0])
            await self._delivery.send_error(meta.reply_url, DELIVERY_ERROR)
