"""Slash-command grammar.

Each command is a named matcher; the router walks COMMANDS in order and the
first match wins. The patterns are mutually exclusive over the input.
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

# (apps | all apps | list)        - list every app
ALL_APPS_RE = re.compile(r"^((apps)|(all apps)|(list))$", re.IGNORECASE)
# (apps | apps:info)? app-space   - info about one app
APP_NAME_RE = re.compile(r"^((apps)|(apps:info))?\s?((\w+)-(\w+(?:-\w+)*-?))$", re.IGNORECASE)
# logs ...                        - placeholder
LOGS_RE = re.compile(r"^logs(.*)$", re.IGNORECASE)

LIST_APPS = "list_apps"
APP_INFO = "app_info"
LOGS = "logs"


@dataclass(frozen=True)
class CommandMatcher:
    name: str
    pattern: re.Pattern
    arg_group: Optional[int] = None

    def match(self, text: str) -> Optional[Tuple[str, str]]:
        """Return (command name, argument) if text matches, else None."""
        m = self.pattern.match(text)
        if m is None:
            return None
        arg = m.group(self.arg_group) if self.arg_group is not None else ""
        return self.name, (arg or "").strip()


COMMANDS: Tuple[CommandMatcher, ...] = (
    CommandMatcher(LIST_APPS, ALL_APPS_RE),
    CommandMatcher(APP_INFO, APP_NAME_RE, arg_group=4),
    CommandMatcher(LOGS, LOGS_RE, arg_group=1),
)


def parse_command(
    text: str, matchers: Sequence[CommandMatcher] = COMMANDS
) -> Optional[Tuple[str, str]]:
    """Match trimmed command text against the grammar, first match wins."""
    text = (text or "").strip()
    for matcher in matchers:
        result = matcher.match(text)
        if result is not None:
            return result
    return None
