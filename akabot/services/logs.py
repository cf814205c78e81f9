"""Logs command — placeholder until log streaming exists."""

import logging

from akabot.ports.inbound import CommandMeta
from akabot.ports.outbound import DeliveryPort

logger = logging.getLogger(__name__)


class LogsService:
    def __init__(self, delivery: DeliveryPort):
        self._delivery = delivery

    async def get_logs(self, meta: CommandMeta, options: str) -> None:
        logger.info("logs command requested by %s", meta.user_name)
        await self._delivery.send_error(meta.reply_url, f"Not implemented. Options: {options}")
