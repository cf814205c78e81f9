"""Akkeris apps API client using aiohttp."""

from typing import Any, Callable, List, Optional, TypeVar

import aiohttp

from akabot.config import CONFIG
from akabot.domain.models import AppRecord, DynoRecord, FormationRecord

T = TypeVar("T")


class AkkerisAPIError(Exception):
    """Error talking to the Akkeris API."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class AkkerisNotFound(AkkerisAPIError):
    """The requested resource does not exist (404)."""


class AkkerisClient:
    """Async read-only client for the Akkeris apps API.

    Every call is authenticated with the invoking user's bearer credential.
    """

    async def _get(self, path: str, credential: str) -> Any:
        url = f"{CONFIG['akkeris_api']}{path}"
        headers = {"Authorization": f"Bearer {credential}"}
        timeout = aiohttp.ClientTimeout(total=CONFIG["http_timeout_seconds"])
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, headers=headers) as resp:
                    if resp.status == 404:
                        raise AkkerisNotFound(f"GET {path} -> 404", status=404)
                    if resp.status >= 400:
                        body = await resp.text()
                        raise AkkerisAPIError(f"GET {path} -> HTTP {resp.status}: {body}", status=resp.status)
                    return await resp.json(content_type=None)
        except AkkerisAPIError:
            raise
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            raise AkkerisAPIError(f"GET {path} -> {type(e).__name__}: {e}") from e

    @staticmethod
    def _parse(path: str, data: Any, parse: Callable[[Any], T]) -> T:
        try:
            return parse(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise AkkerisAPIError(f"GET {path} -> malformed response: {e!r}") from e

    async def list_apps(self, credential: str) -> List[AppRecord]:
        data = await self._get("/apps", credential)
        return self._parse("/apps", data, lambda d: [AppRecord.from_api(a) for a in d])

    async def get_app(self, credential: str, app_name: str) -> AppRecord:
        path = f"/apps/{app_name}"
        data = await self._get(path, credential)
        return self._parse(path, data, AppRecord.from_api)

    async def get_formation(self, credential: str, app_name: str) -> List[FormationRecord]:
        path = f"/apps/{app_name}/formation"
        data = await self._get(path, credential)
        return self._parse(path, data, lambda d: [FormationRecord.from_api(f) for f in d])

    async def get_dynos(self, credential: str, app_name: str) -> List[DynoRecord]:
        path = f"/apps/{app_name}/dynos"
        data = await self._get(path, credential)
        return self._parse(path, data, lambda d: [DynoRecord.from_api(p) for p in d])
