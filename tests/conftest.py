"""Shared fakes for the command pipeline."""

import pytest

from akabot.adapters.akkeris.client import AkkerisNotFound
from akabot.domain.models import AppRecord, DynoRecord, FormationRecord, MembershipRecord
from akabot.ports.inbound import CommandMeta, InboundCommand


class FakeDelivery:
    """Records everything sent to chat."""

    def __init__(self):
        self.posts = []
        self.uploads = []
        self.errors = []
        self.fail_post = None
        self.fail_upload = None
        self.timezone = None

    async def post_message(self, target, message):
        if self.fail_post is not None:
            raise self.fail_post
        self.posts.append((target, message))

    async def upload_file(self, upload):
        if self.fail_upload is not None:
            raise self.fail_upload
        self.uploads.append(upload)

    async def send_error(self, reply_url, text):
        self.errors.append((reply_url, text))

    async def get_user_timezone(self, user_id):
        return self.timezone


class FakeApps:
    """In-memory AppsPort. Set ``errors[method]`` to make a call fail."""

    def __init__(self, apps=None, formations=None, dynos=None):
        self.apps = list(apps or [])
        self.formations = list(formations or [])
        self.dynos = list(dynos or [])
        self.errors = {}
        self.calls = []

    def _maybe_fail(self, method):
        self.calls.append(method)
        if method in self.errors:
            raise self.errors[method]

    async def list_apps(self, credential):
        self._maybe_fail("list_apps")
        return self.apps

    async def get_app(self, credential, app_name):
        self._maybe_fail("get_app")
        for app in self.apps:
            if app.name == app_name:
                return app
        raise AkkerisNotFound(f"GET /apps/{app_name} -> 404", status=404)

    async def get_formation(self, credential, app_name):
        self._maybe_fail("get_formation")
        return self.formations

    async def get_dynos(self, credential, app_name):
        self._maybe_fail("get_dynos")
        return self.dynos


class FakeMembership:
    def __init__(self, members=()):
        self.records = {c: MembershipRecord(channel_id=c, is_member=True) for c in members}

    def get(self, channel_id):
        return self.records.get(channel_id)


@pytest.fixture
def delivery():
    return FakeDelivery()


@pytest.fixture
def sample_apps():
    return [
        AppRecord(
            name="api-default",
            web_url="https://api-default.example.io/",
            git_url="https://github.com/example/api",
            git_branch="main",
            released_at="2026-10-19T22:04:05Z",
        ),
        AppRecord(name="billing-prod", preview=True, web_url="https://billing-prod.example.io/"),
        AppRecord(name="web-space", web_url="https://web-space.example.io/"),
    ]


@pytest.fixture
def fake_apps(sample_apps):
    return FakeApps(
        apps=sample_apps,
        formations=[
            FormationRecord(type="web", quantity=2, size="gp2"),
            FormationRecord(type="worker", quantity=1, size="gp1"),
        ],
        dynos=[
            DynoRecord(type="web", name="abc12", state="running",
                       created_at="2026-10-19T21:00:00Z", updated_at="2026-10-19T21:00:10Z"),
            DynoRecord(type="web", name="def34", state="app-crashed",
                       created_at="2026-10-19T21:00:00Z", updated_at="0001-01-01T00:00:00Z"),
            DynoRecord(type="worker", name="ghi56", state="waiting",
                       created_at="2026-10-19T21:00:00Z", updated_at="2026-10-19T21:00:10Z"),
        ],
    )


@pytest.fixture
def meta():
    return CommandMeta(
        channel_id="C123",
        channel_name="ops",
        reply_url="https://hooks.slack.test/reply/1",
        credential="tok",
        user_name="jdoe",
        timezone="UTC",
    )


@pytest.fixture
def inbound():
    def _make(text, channel_id="C123"):
        return InboundCommand(
            channel_id=channel_id,
            channel_name="ops",
            reply_url="https://hooks.slack.test/reply/1",
            user_id="U1",
            user_name="jdoe",
            text=text,
            credential="tok",
        )
    return _make


@pytest.fixture
def membership():
    return FakeMembership(["C123"])
