"""JSON file-based channel membership store — implements MembershipLookup."""

import json
import logging
import os
import tempfile
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from akabot.domain.models import MembershipRecord

logger = logging.getLogger(__name__)


class JsonMembershipStore:
    """Channel membership records kept in one JSON file, keyed by channel id.

    Parsed contents are cached and reused until the file on disk changes.
    """

    def __init__(self, path: str = "memory/channels.json"):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._cache: Dict[str, dict] = {}
        self._cache_key: Optional[Tuple[int, int, int]] = None

    def _file_key(self) -> Optional[Tuple[int, int, int]]:
        try:
            st = self._path.stat()
        except OSError:
            return None
        # os.replace gives every write a new inode
        return (st.st_ino, st.st_mtime_ns, st.st_size)

    def _load(self) -> Dict[str, dict]:
        key = self._file_key()
        if key is None:
            self._cache, self._cache_key = {}, None
            return {}
        if key == self._cache_key:
            return self._cache
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Unreadable membership file %s", self._path, exc_info=True)
            return {}
        self._cache = raw if isinstance(raw, dict) else {}
        self._cache_key = key
        return self._cache

    def get(self, channel_id: str) -> Optional[MembershipRecord]:
        entry = self._load().get(channel_id)
        if not isinstance(entry, dict):
            return None
        return MembershipRecord(
            channel_id=channel_id,
            is_member=bool(entry.get("is_member")),
            updated_at=entry.get("updated_at", ""),
        )

    def replace_all(self, records: List[MembershipRecord]) -> None:
        data = {r.channel_id: asdict(r) for r in records}
        content = json.dumps(data, ensure_ascii=False, indent=2)
        # Atomic write
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self._path.parent), suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, str(self._path))
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        self._cache, self._cache_key = data, self._file_key()
