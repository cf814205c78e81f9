"""Channel membership refresh — keeps the membership store current.

Runs on a fixed interval alongside the web server. It only writes to the
store; the membership gate only reads from it.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import List

import aiohttp

from akabot.config import CONFIG
from akabot.domain.models import MembershipRecord
from akabot.ports.outbound import MembershipWriter

logger = logging.getLogger(__name__)

PAGE_LIMIT = 200


class ChannelSync:
    """Fetch the bot's channel list from Slack and store membership flags."""

    def __init__(self, store: MembershipWriter):
        self._store = store

    async def fetch_channels(self) -> List[MembershipRecord]:
        url = f"{CONFIG['slack_api_base']}/conversations.list"
        headers = {"Authorization": f"Bearer {CONFIG['bot_user_token']}"}
        timeout = aiohttp.ClientTimeout(total=CONFIG["http_timeout_seconds"])
        now = datetime.now(timezone.utc).isoformat()
        records: List[MembershipRecord] = []
        cursor = ""
        async with aiohttp.ClientSession(timeout=timeout) as session:
            while True:
                params = {
                    "types": "public_channel,private_channel",
                    "exclude_archived": "true",
                    "limit": str(PAGE_LIMIT),
                }
                if cursor:
                    params["cursor"] = cursor
                async with session.get(url, headers=headers, params=params) as resp:
                    data = await resp.json(content_type=None)
                if not data.get("ok"):
                    raise RuntimeError(f"conversations.list -> {data.get('error', 'unknown_error')}")
                for channel in data.get("channels", []):
                    records.append(
                        MembershipRecord(
                            channel_id=channel["id"],
                            is_member=bool(channel.get("is_member")),
                            updated_at=now,
                        )
                    )
                cursor = (data.get("response_metadata") or {}).get("next_cursor", "")
                if not cursor:
                    return records

    async def refresh(self) -> int:
        """Replace the stored membership list. Returns the channel count."""
        records = await self.fetch_channels()
        self._store.replace_all(records)
        logger.info("Updated channel list (%d channels)", len(records))
        return len(records)

    async def run_forever(self, interval_seconds: float) -> None:
        while True:
            try:
                await self.refresh()
            except Exception:
                logger.exception("Channel list refresh failed")
            await asyncio.sleep(interval_seconds)
