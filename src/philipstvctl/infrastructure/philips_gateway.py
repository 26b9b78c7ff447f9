import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from philipstvctl.application.ports import JsonTransport
from philipstvctl.domain.errors import ParseError, TransportError

LOG = logging.getLogger(__name__)


def parse_body(text: str | None) -> dict[str, Any]:
    """Decode a JointSpace response body.

    Bodies without a ``{`` (empty, ``OK``...) are treated as an empty object.
    """
    if not text or "{" not in text:
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Unable to parse JSON: {text!r}") from exc
    return data if isinstance(data, dict) else {}


@dataclass
class PhilipsHttpGateway(JsonTransport):
    address: str
    port: int = 1925
    api_version: int = 6
    timeout_s: float = 3.0
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.base_url = f"http://{self.address}:{self.port}/{self.api_version}/"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport)

    async def _aget(self, path: str) -> httpx.Response:
        async with self._client() as client:
            return await client.get(self.base_url + path)

    async def _apost(self, path: str, payload: Any) -> httpx.Response:
        async with self._client() as client:
            return await client.post(self.base_url + path, json=payload)

    async def request_async(self, path: str, body: Any = None) -> dict[str, Any]:
        url = self.base_url + path
        try:
            if body is None:
                r = await self._aget(path)
            else:
                r = await self._apost(path, body)
            r.raise_for_status()
        except httpx.HTTPError as exc:
            LOG.debug("request failed url=%s err=%s", url, exc)
            raise TransportError(f"{path}: {exc}") from exc
        LOG.debug("response url=%s status=%d body=%s", url, r.status_code, r.text)
        return parse_body(r.text)
