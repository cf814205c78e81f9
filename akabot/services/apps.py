"""Apps query service — `aka apps` and `aka <app-name>`."""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from akabot.adapters.akkeris.client import AkkerisNotFound
from akabot.config import CONFIG
from akabot.domain.dyno_state import format_local, normalize, padding, zone_for
from akabot.domain.messages import (
    IN_CHANNEL,
    SECTION_TEXT_LIMIT,
    BlockMessage,
    ChannelTarget,
    FileUpload,
    ReplyTarget,
    chunk_text,
    context,
    divider,
    section,
)
from akabot.domain.models import AppRecord, DynoRecord, FormationRecord
from akabot.ports.inbound import CommandMeta
from akabot.ports.outbound import AppsPort, DeliveryPort
from akabot.services.suggestions import APP_INFO_ERROR, SuggestionEngine

logger = logging.getLogger(__name__)

APPS_ERROR = "Error retrieving list of apps. Please try again later."

# Room for the ``` fence around each chunk
CODE_CHUNK_LIMIT = SECTION_TEXT_LIMIT - 6


def render_app_list(apps: List[AppRecord]) -> str:
    """One block per app: name line, then indented URL and Git lines."""
    lines: List[str] = []
    for app in apps:
        lines.append(f"⬢ {app.name}" + (" - preview" if app.preview else ""))
        lines.append(f"\tUrl: {app.web_url}")
        if app.git_url:
            lines.append(f"\tGitHub: {app.git_url}")
        lines.append("")
    return "\n".join(lines)


def render_formations(
    formations: List[FormationRecord],
    dynos: List[DynoRecord],
    tz,
    now: Optional[datetime] = None,
) -> Tuple[str, bool]:
    """Return the dyno block text and whether any formation is warning."""
    if now is None:
        now = datetime.now(timezone.utc)
    text = ""
    any_warning = False
    for formation in formations:
        shown = [normalize(d, now, tz) for d in dynos if d.type == formation.type]
        warning = False
        for dyno in shown:
            warning = warning or dyno.warning
        any_warning = any_warning or warning
        text += f"{formation.type} [{formation.quantity}] ({formation.size}): {':warning:' if warning else ''}\n"
        for dyno in shown:
            flag = ":warning: " if dyno.warning else ""
            text += f"\t- {flag}{dyno.dyno_name}:{padding(dyno.dyno_name)}{dyno.state} ({dyno.updated_at})\n"
    return text, any_warning


class AppsQueryService:
    def __init__(self, apps: AppsPort, delivery: DeliveryPort, suggestions: SuggestionEngine):
        self._apps = apps
        self._delivery = delivery
        self._suggestions = suggestions

    async def list_apps(self, meta: CommandMeta) -> None:
        """List every app, inline when it fits, otherwise as a file upload."""
        try:
            apps = await self._apps.list_apps(meta.credential)
            output = render_app_list(apps)
            title = f"*Result of* `aka apps` ({len(apps)})"
            if len(output) > CONFIG["inline_text_limit"]:
                await self._delivery.upload_file(
                    FileUpload(
                        channel_id=meta.channel_id,
                        content=output,
                        filename=f"aka-apps_{int(time.time())}.txt",
                        filetype="text",
                        title=title,
                    )
                )
            else:
                blocks = [section(title)]
                blocks += [section(f"```{chunk}```") for chunk in chunk_text(output, CODE_CHUNK_LIMIT) if chunk.strip()]
                await self._delivery.post_message(
                    ChannelTarget(meta.channel_id),
                    BlockMessage(blocks=blocks, response_type=IN_CHANNEL, text=f"aka apps ({len(apps)})"),
                )
        except Exception:
            logger.exception("aka apps failed for %s in #%s", meta.user_name, meta.channel_name)
            await self._delivery.send_error(meta.reply_url, APPS_ERROR)

    async def get_app_info(self, meta: CommandMeta, app_name: str) -> None:
        """Show formation and dyno health for one app."""
        try:
            app, formations, dynos = await asyncio.gather(
                self._apps.get_app(meta.credential, app_name),
                self._apps.get_formation(meta.credential, app_name),
                self._apps.get_dynos(meta.credential, app_name),
                return_exceptions=True,
            )
            if isinstance(app, AkkerisNotFound):
                logger.info("App %r not found, looking for a suggestion", app_name)
                await self._suggestions.suggest(meta, app_name)
                return
            for result in (app, formations, dynos):
                if isinstance(result, BaseException):
                    raise result

            tz = zone_for(meta.timezone, CONFIG["default_timezone"])
            formation_info, warning = render_formations(formations, dynos, tz)
            await self._delivery.post_message(
                ReplyTarget(meta.reply_url),
                build_app_info(app_name, app, formation_info, warning, tz),
            )
        except Exception:
            logger.exception("aka %s failed for %s", app_name, meta.user_name)
            await self._delivery.send_error(meta.reply_url, APP_INFO_ERROR)


def build_app_info(app_name: str, app: AppRecord, formation_info: str, warning: bool, tz) -> BlockMessage:
    ui_url = f"{CONFIG['akkeris_ui']}/apps/{app_name}/info"
    git = f"{app.git_url}#{app.git_branch}" if app.git_url else "_not linked_"
    return BlockMessage(
        blocks=[
            section(f"Info for *{app_name}*"),
            section(f":cpu: *Dynos* {':warning:' if warning else ''}\n{formation_info}"),
            section(f":github: *Git Repo*\t{git}"),
            divider(),
            context(f"Last Release: {format_local(app.released_at, tz)}\nMore Info: {ui_url}"),
        ],
        response_type=IN_CHANNEL,
        text=f"Info for {app_name}",
    )
