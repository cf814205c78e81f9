"""Slash-command webhook routes."""

from fastapi import APIRouter, BackgroundTasks, Request
from pydantic import BaseModel

from akabot.adapters.akkeris.client import AkkerisClient
from akabot.adapters.slack.delivery import SlackDelivery
from akabot.adapters.storage.membership_store import JsonMembershipStore
from akabot.config import CONFIG
from akabot.ports.inbound import InboundCommand
from akabot.services import AppsQueryService, CommandRouter, LogsService, MembershipGate, SuggestionEngine

command_router_api = APIRouter(tags=["Commands"])

membership_store = JsonMembershipStore(CONFIG["membership_file"])
akkeris_client = AkkerisClient()
slack_delivery = SlackDelivery()
command_router = CommandRouter(
    gate=MembershipGate(membership_store),
    delivery=slack_delivery,
    apps=AppsQueryService(
        akkeris_client,
        slack_delivery,
        SuggestionEngine(akkeris_client, slack_delivery),
    ),
    logs=LogsService(slack_delivery),
    users=slack_delivery,
)


class AckResponse(BaseModel):
    response_type: str


def credential_from(request: Request) -> str:
    """Bearer credential attached by the upstream auth layer, if any."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


@command_router_api.post("/aka", response_model=AckResponse)
async def aka_command(request: Request, background_tasks: BackgroundTasks):
    """Acknowledge at once; the command runs after the response is sent."""
    form = await request.form()
    inbound = InboundCommand(
        channel_id=str(form.get("channel_id", "")),
        channel_name=str(form.get("channel_name", "")),
        reply_url=str(form.get("response_url", "")),
        user_id=str(form.get("user_id", "")),
        user_name=str(form.get("user_name", "")),
        text=str(form.get("text", "")),
        credential=credential_from(request),
    )
    background_tasks.add_task(command_router.handle, inbound)
    return AckResponse(**command_router.acknowledge())


@command_router_api.get("/health")
async def health():
    return {"status": "ok"}
