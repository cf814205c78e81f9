"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AppRecord:
    """An application as reported by the Akkeris apps API."""

    name: str
    preview: bool = False
    web_url: str = ""
    git_url: Optional[str] = None
    git_branch: Optional[str] = None
    released_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "AppRecord":
        return cls(
            name=data["name"],
            preview=bool(data.get("preview")),
            web_url=data.get("web_url") or "",
            git_url=data.get("git_url"),
            git_branch=data.get("git_branch"),
            released_at=data.get("released_at"),
        )


@dataclass(frozen=True)
class FormationRecord:
    """Desired shape of one process group."""

    type: str
    quantity: int
    size: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "FormationRecord":
        return cls(
            type=data["type"],
            quantity=int(data.get("quantity", 0)),
            size=str(data.get("size", "")),
        )


@dataclass(frozen=True)
class DynoRecord:
    """One running (or attempting-to-run) process instance."""

    type: str
    name: str
    state: str
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "DynoRecord":
        return cls(
            type=data["type"],
            name=str(data["name"]),
            state=str(data.get("state") or ""),
            created_at=data.get("created_at") or "",
            updated_at=data.get("updated_at") or "",
        )


@dataclass(frozen=True)
class DisplayDyno:
    """A dyno ready for display."""

    dyno_name: str
    state: str
    warning: bool
    updated_at: str


@dataclass(frozen=True)
class MembershipRecord:
    """Cached fact about whether the bot is a member of a channel."""

    channel_id: str
    is_member: bool
    updated_at: str = ""
