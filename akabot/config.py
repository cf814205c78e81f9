"""Configuration and shared state."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default


CONFIG = {
    "port": _int_env("PORT", 9000),
    # Akkeris (management platform)
    "akkeris_api": os.getenv("AKKERIS_API", "").rstrip("/"),
    "akkeris_ui": os.getenv("AKKERIS_UI", "").rstrip("/"),
    # Slack (chat platform)
    "bot_user_token": os.getenv("BOT_USER_TOKEN", ""),
    "slack_api_base": os.getenv("SLACK_API_BASE", "https://slack.com/api").rstrip("/"),
    # Rendering
    "default_timezone": os.getenv("AKA_DEFAULT_TIMEZONE", "America/Los_Angeles"),
    "inline_text_limit": _int_env("AKA_INLINE_TEXT_LIMIT", 12000),
    # Transport
    "http_timeout_seconds": _int_env("AKA_HTTP_TIMEOUT", 30),
    # Channel membership cache
    "membership_file": os.getenv("AKA_MEMBERSHIP_FILE", "memory/channels.json"),
    "channel_refresh_seconds": _int_env("AKA_CHANNEL_REFRESH_SECONDS", 60),
    "log_level": os.getenv("AKA_LOG_LEVEL", "INFO").strip().upper(),
}


# ── Typed config ────────────────────────────────────────────


@dataclass
class AkkerisConfig:
    api_url: str = ""
    ui_url: str = ""


@dataclass
class SlackConfig:
    bot_user_token: str = ""
    api_base: str = "https://slack.com/api"


@dataclass
class MembershipConfig:
    store_file: str = "memory/channels.json"
    refresh_seconds: int = 60


@dataclass
class AppConfig:
    """Typed view over CONFIG."""

    port: int = 9000
    default_timezone: str = "America/Los_Angeles"
    inline_text_limit: int = 12000
    http_timeout_seconds: int = 30
    log_level: str = "INFO"
    akkeris: AkkerisConfig = field(default_factory=AkkerisConfig)
    slack: SlackConfig = field(default_factory=SlackConfig)
    membership: MembershipConfig = field(default_factory=MembershipConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            port=CONFIG["port"],
            default_timezone=CONFIG["default_timezone"],
            inline_text_limit=CONFIG["inline_text_limit"],
            http_timeout_seconds=CONFIG["http_timeout_seconds"],
            log_level=CONFIG["log_level"],
            akkeris=AkkerisConfig(
                api_url=CONFIG["akkeris_api"],
                ui_url=CONFIG["akkeris_ui"],
            ),
            slack=SlackConfig(
                bot_user_token=CONFIG["bot_user_token"],
                api_base=CONFIG["slack_api_base"],
            ),
            membership=MembershipConfig(
                store_file=CONFIG["membership_file"],
                refresh_seconds=CONFIG["channel_refresh_seconds"],
            ),
        )
