"""Unit tests for SlackDelivery."""

import aiohttp
import pytest
from unittest.mock import patch

from akabot.adapters.slack.delivery import SlackDelivery, SlackDeliveryError
from akabot.domain.messages import BlockMessage, ChannelTarget, FileUpload, ReplyTarget, TextMessage, section


@pytest.fixture(autouse=True)
def slack_configured(monkeypatch):
    monkeypatch.setattr("akabot.adapters.slack.delivery.CONFIG", {
        "slack_api_base": "https://slack.test/api",
        "bot_user_token": "xoxb-bot",
        "http_timeout_seconds": 5,
    })


def _mock_aiohttp_session(responses, calls):
    """Return a class that replaces aiohttp.ClientSession.

    responses: list of (status, body) tuples consumed by successive post()
    calls; a body that is an exception is raised from post() instead.
    """
    call_idx = 0

    class FakeResponse:
        def __init__(self, status, body):
            self.status = status
            self._body = body

        async def json(self, content_type="application/json"):
            return self._body

        async def text(self):
            return str(self._body)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    class FakeSession:
        def __init__(self, **kwargs):
            pass

        def post(self, url, **kwargs):
            nonlocal call_idx
            calls.append((url, kwargs))
            status, body = responses[call_idx]
            call_idx += 1
            if isinstance(body, Exception):
                raise body
            return FakeResponse(status, body)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    return FakeSession


class TestPostMessage:
    @pytest.mark.asyncio
    async def test_reply_url(self):
        calls = []
        session = _mock_aiohttp_session([(200, "ok")], calls)
        with patch("akabot.adapters.slack.delivery.aiohttp.ClientSession", session):
            await SlackDelivery().post_message(ReplyTarget("https://hooks.slack.test/r/1"), TextMessage(text="hi"))
        url, kwargs = calls[0]
        assert url == "https://hooks.slack.test/r/1"
        assert kwargs["json"] == {"response_type": "ephemeral", "text": "hi"}
        assert "headers" not in kwargs

    @pytest.mark.asyncio
    async def test_reply_url_rejected(self):
        session = _mock_aiohttp_session([(404, "expired_url")], [])
        with patch("akabot.adapters.slack.delivery.aiohttp.ClientSession", session):
            with pytest.raises(SlackDeliveryError, match="404"):
                await SlackDelivery().post_message(ReplyTarget("https://hooks.slack.test/r/1"), TextMessage(text="hi"))

    @pytest.mark.asyncio
    async def test_channel_post_uses_bot_token(self):
        calls = []
        session = _mock_aiohttp_session([(200, {"ok": True})], calls)
        message = BlockMessage(blocks=[section("hello")], text="fallback")
        with patch("akabot.adapters.slack.delivery.aiohttp.ClientSession", session):
            await SlackDelivery().post_message(ChannelTarget("C123"), message)
        url, kwargs = calls[0]
        assert url == "https://slack.test/api/chat.postMessage"
        assert kwargs["headers"] == {"Authorization": "Bearer xoxb-bot"}
        assert kwargs["json"]["channel"] == "C123"
        assert kwargs["json"]["blocks"] == message.blocks
        assert "response_type" not in kwargs["json"]

    @pytest.mark.asyncio
    async def test_ok_false_on_http_200_raises(self):
        session = _mock_aiohttp_session([(200, {"ok": False, "error": "not_in_channel"})], [])
        with patch("akabot.adapters.slack.delivery.aiohttp.ClientSession", session):
            with pytest.raises(SlackDeliveryError) as exc:
                await SlackDelivery().post_message(ChannelTarget("C123"), BlockMessage(blocks=[]))
        assert exc.value.error_code == "not_in_channel"

    @pytest.mark.asyncio
    async def test_unknown_target(self):
        with pytest.raises(TypeError):
            await SlackDelivery().post_message("C123", TextMessage(text="hi"))


class TestUploadFile:
    @pytest.mark.asyncio
    async def test_upload(self):
        calls = []
        session = _mock_aiohttp_session([(200, {"ok": True, "file": {"id": "F1"}})], calls)
        upload = FileUpload(channel_id="C123", content="⬢ api-default\n", filename="aka-apps_1.txt", title="T")
        with patch("akabot.adapters.slack.delivery.aiohttp.ClientSession", session):
            await SlackDelivery().upload_file(upload)
        url, kwargs = calls[0]
        assert url == "https://slack.test/api/files.upload"
        assert isinstance(kwargs["data"], aiohttp.FormData)
        assert kwargs["headers"] == {"Authorization": "Bearer xoxb-bot"}
        payload = kwargs["data"]()
        assert payload.content_type.startswith("multipart/form-data")

    @pytest.mark.asyncio
    async def test_upload_error_in_body(self):
        session = _mock_aiohttp_session([(200, {"ok": False, "error": "invalid_auth"})], [])
        upload = FileUpload(channel_id="C123", content="x", filename="a.txt")
        with patch("akabot.adapters.slack.delivery.aiohttp.ClientSession", session):
            with pytest.raises(SlackDeliveryError, match="invalid_auth"):
                await SlackDelivery().upload_file(upload)

    @pytest.mark.asyncio
    async def test_upload_malformed_body(self):
        session = _mock_aiohttp_session([(200, "not json")], [])
        upload = FileUpload(channel_id="C123", content="x", filename="a.txt")
        with patch("akabot.adapters.slack.delivery.aiohttp.ClientSession", session):
            with pytest.raises(SlackDeliveryError, match="malformed"):
                await SlackDelivery().upload_file(upload)


class TestSendError:
    @pytest.mark.asyncio
    async def test_ephemeral_notice(self):
        calls = []
        session = _mock_aiohttp_session([(200, "ok")], calls)
        with patch("akabot.adapters.slack.delivery.aiohttp.ClientSession", session):
            await SlackDelivery().send_error("https://hooks.slack.test/r/1", "nope")
        assert calls[0][1]["json"] == {"response_type": "ephemeral", "text": "nope"}

    @pytest.mark.asyncio
    async def test_failure_is_swallowed(self):
        session = _mock_aiohttp_session([(200, aiohttp.ClientConnectionError("reset"))], [])
        with patch("akabot.adapters.slack.delivery.aiohttp.ClientSession", session):
            await SlackDelivery().send_error("https://hooks.slack.test/r/1", "nope")


class TestUserTimezone:
    @pytest.mark.asyncio
    async def test_returns_tz(self):
        calls = []
        session = _mock_aiohttp_session([(200, {"ok": True, "user": {"id": "U1", "tz": "Europe/Berlin"}})], calls)
        with patch("akabot.adapters.slack.delivery.aiohttp.ClientSession", session):
            tz = await SlackDelivery().get_user_timezone("U1")
        assert tz == "Europe/Berlin"
        assert calls[0][0] == "https://slack.test/api/users.info"
        assert calls[0][1]["data"] == {"user": "U1"}

    @pytest.mark.asyncio
    async def test_missing_tz(self):
        session = _mock_aiohttp_session([(200, {"ok": True, "user": {"id": "U1"}})], [])
        with patch("akabot.adapters.slack.delivery.aiohttp.ClientSession", session):
            assert await SlackDelivery().get_user_timezone("U1") is None
