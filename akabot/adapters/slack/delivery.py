"""Slack delivery — reply URLs, chat.postMessage and files.upload via aiohttp."""

import logging
from typing import Any, Dict, Optional, Union

import aiohttp

from akabot.config import CONFIG
from akabot.domain.messages import BlockMessage, ChannelTarget, FileUpload, ReplyTarget, Target, TextMessage

logger = logging.getLogger(__name__)


class SlackDeliveryError(Exception):
    """Error delivering a message to Slack."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


class SlackDelivery:
    """Implements DeliveryPort and UserDirectory. Never retries."""

    def _timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=CONFIG["http_timeout_seconds"])

    def _bot_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {CONFIG['bot_user_token']}"}

    @staticmethod
    def _check_ok(method: str, data: Any) -> Dict[str, Any]:
        """Slack reports failures in the body, even on HTTP 200."""
        if not isinstance(data, dict):
            raise SlackDeliveryError(f"{method} -> malformed response")
        if not data.get("ok"):
            error = data.get("error", "unknown_error")
            raise SlackDeliveryError(f"{method} -> Slack error: {error}", error_code=error)
        return data

    async def _call(self, method: str, **kwargs) -> Dict[str, Any]:
        url = f"{CONFIG['slack_api_base']}/{method}"
        try:
            async with aiohttp.ClientSession(timeout=self._timeout()) as session:
                async with session.post(url, headers=self._bot_headers(), **kwargs) as resp:
                    if resp.status >= 400:
                        body = await resp.text()
                        raise SlackDeliveryError(f"{method} -> HTTP {resp.status}: {body}")
                    data = await resp.json(content_type=None)
        except SlackDeliveryError:
            raise
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            raise SlackDeliveryError(f"{method} -> {type(e).__name__}: {e}") from e
        return self._check_ok(method, data)

    async def _post_reply(self, url: str, payload: Dict[str, Any]) -> None:
        try:
            async with aiohttp.ClientSession(timeout=self._timeout()) as session:
                async with session.post(url, json=payload) as resp:
                    if resp.status >= 400:
                        body = await resp.text()
                        raise SlackDeliveryError(f"reply -> HTTP {resp.status}: {body}")
        except SlackDeliveryError:
            raise
        except (aiohttp.ClientError, TimeoutError) as e:
            raise SlackDeliveryError(f"reply -> {type(e).__name__}: {e}") from e

    async def post_message(self, target: Target, message: Union[TextMessage, BlockMessage]) -> None:
        """Post to a one-shot reply URL or, with the bot token, to a channel."""
        payload = message.to_payload()
        if isinstance(target, ReplyTarget):
            await self._post_reply(target.url, payload)
        elif isinstance(target, ChannelTarget):
            payload.pop("response_type", None)
            payload["channel"] = target.channel_id
            await self._call("chat.postMessage", json=payload)
        else:
            raise TypeError(f"Unknown delivery target: {target!r}")

    async def upload_file(self, upload: FileUpload) -> None:
        # A typed part forces multipart/form-data encoding
        form = aiohttp.FormData()
        for name, value in upload.to_form_fields().items():
            if name == "content":
                form.add_field(name, value, content_type="text/plain")
            else:
                form.add_field(name, value)
        await self._call("files.upload", data=form)

    async def send_error(self, reply_url: str, text: str) -> None:
        """Send an ephemeral notice. Failures are logged, never raised."""
        try:
            await self._post_reply(reply_url, TextMessage(text=text).to_payload())
        except Exception:
            logger.exception("Failed to send error notice: %s", text)

    async def get_user_timezone(self, user_id: str) -> Optional[str]:
        data = await self._call("users.info", data={"user": user_id})
        user = data.get("user") or {}
        return user.get("tz") or None
