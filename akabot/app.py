"""FastAPI application and startup."""

import asyncio
import logging
from typing import Optional

from fastapi import FastAPI

from akabot.adapters.slack.channels import ChannelSync
from akabot.adapters.web.command_routes import command_router_api, membership_store
from akabot.config import AppConfig
from akabot.infrastructure.logging import configure_logging

logger = logging.getLogger(__name__)

app = FastAPI(title="aka Slack bot")
app.include_router(command_router_api)

app_config = AppConfig.from_env()
channel_sync = ChannelSync(membership_store)
_refresh_task: Optional[asyncio.Task] = None


@app.on_event("startup")
async def startup_event():
    """Configure logging and start the channel membership refresh loop."""
    global _refresh_task
    configure_logging(app_config.log_level)
    logger.info("aka bot starting on port %d", app_config.port)

    if not app_config.slack.bot_user_token:
        logger.warning("BOT_USER_TOKEN not set; channel membership will not refresh")
    else:
        _refresh_task = asyncio.create_task(
            channel_sync.run_forever(app_config.membership.refresh_seconds)
        )
    if not app_config.akkeris.api_url:
        logger.warning("AKKERIS_API not set; app queries will fail")


@app.on_event("shutdown")
async def shutdown_event():
    if _refresh_task is not None:
        _refresh_task.cancel()
