"""Outbound ports — interfaces for external system adapters."""

from typing import List, Optional, Protocol, Union, runtime_checkable

from akabot.domain.messages import BlockMessage, FileUpload, Target, TextMessage
from akabot.domain.models import AppRecord, DynoRecord, FormationRecord, MembershipRecord


@runtime_checkable
class AppsPort(Protocol):
    """Read-only view of the management platform."""

    async def list_apps(self, credential: str) -> List[AppRecord]: ...
    async def get_app(self, credential: str, app_name: str) -> AppRecord: ...
    async def get_formation(self, credential: str, app_name: str) -> List[FormationRecord]: ...
    async def get_dynos(self, credential: str, app_name: str) -> List[DynoRecord]: ...


@runtime_checkable
class DeliveryPort(Protocol):
    """Interface for sending responses back to chat."""

    async def post_message(self, target: Target, message: Union[TextMessage, BlockMessage]) -> None: ...
    async def upload_file(self, upload: FileUpload) -> None: ...
    async def send_error(self, reply_url: str, text: str) -> None: ...


@runtime_checkable
class MembershipLookup(Protocol):
    """Read-only channel membership lookup."""

    def get(self, channel_id: str) -> Optional[MembershipRecord]: ...


@runtime_checkable
class MembershipWriter(Protocol):
    """Write side of the membership store, used by the refresh job only."""

    def replace_all(self, records: List[MembershipRecord]) -> None: ...


@runtime_checkable
class UserDirectory(Protocol):
    """Resolves chat user attributes."""

    async def get_user_timezone(self, user_id: str) -> Optional[str]: ...
