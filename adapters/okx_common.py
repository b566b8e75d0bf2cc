#Description: Base adapter for the OKX Web3 API: signed requests, timeouts and envelope decoding.

import json
import time
from typing import Any

import httpx
from loguru import logger

from adapters import okx_signing
from adapters.okx_errors import (
    ApiError,
    ConfigurationError,
    DecodeError,
    HttpError,
    OKXNetworkError,
    OKXTimeoutError,
)
from models.schemas import Credentials, Method, RawPayload, RequestSpec, decode_payload

class OKXBaseAdapter:
    """
    Holds base URL, timeout and credentials; nothing else survives a call, so one
    instance can serve many concurrent requests on the same event loop.
    """
    BASE_URL = "https://web3.okx.com"
    TIMEOUT_MS = 10_000

    def __init__(
        self,
        credentials: Credentials,
        base_url: str | None = None,
        timeout_ms: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not isinstance(credentials, Credentials):
            raise ConfigurationError("credentials must be a Credentials instance")
        self.base_url = (base_url if base_url is not None else self.BASE_URL).rstrip("/")
        if not self.base_url:
            raise ConfigurationError("base_url must not be empty")
        self.timeout_ms = self.TIMEOUT_MS if timeout_ms is None else timeout_ms
        if self.timeout_ms <= 0:
            raise ConfigurationError(f"timeout_ms must be positive, got {self.timeout_ms}")
        self._creds = credentials
        # one budget for connect, pool acquisition, write and body read
        self.client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_ms / 1000), transport=transport)

    def _headers(self, ts: str, signature: str) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "OK-ACCESS-KEY": self._creds.api_key,
            "OK-ACCESS-SIGN": signature,
            "OK-ACCESS-TIMESTAMP": ts,
            "OK-ACCESS-PASSPHRASE": self._creds.passphrase.get_secret_value(),
            "OK-ACCESS-PROJECT": self._creds.project_id,
        }

    async def send(self, method: Method, path: str, query: dict | None = None, body: Any = None) -> Any:
        req = RequestSpec(method=method, path=path, query=query, body=body)
        qs = okx_signing.build_query(req.query)
        url = self.base_url + req.path + qs
        body_str = okx_signing.serialize_body(req.body)
        ts = okx_signing.iso_timestamp()
        signature = okx_signing.sign(
            ts, req.method, req.path, qs, body_str, self._creds.secret_key.get_secret_value()
        )

        started = time.perf_counter()
        try:
            r = await self.client.request(
                req.method,
                url,
                headers=self._headers(ts, signature),
                content=body_str.encode("utf-8") if body_str is not None else None,
            )
        except httpx.TimeoutException as e:
            logger.debug(f"OKX {req.method} {req.path} timed out after {self.timeout_ms} ms")
            raise OKXTimeoutError(req.method, req.path, self.timeout_ms) from e
        except httpx.TransportError as e:
            logger.debug(f"OKX {req.method} {req.path} transport failure: {type(e).__name__}")
            raise OKXNetworkError(f"{req.method} {req.path} failed: {e}") from e

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"OKX {req.method} {req.path} -> {r.status_code} in {elapsed_ms:.0f} ms")

        text = r.text
        if not 200 <= r.status_code < 300:
            raise HttpError(r.status_code, text)
        try:
            parsed = json.loads(text)
        except ValueError:
            raise DecodeError(text) from None

        decoded = decode_payload(parsed)
        if isinstance(decoded, RawPayload):
            return decoded.value
        if not decoded.ok:
            logger.debug(f"OKX {req.method} {req.path} rejected with code {decoded.code}")
            raise ApiError(str(decoded.code), decoded.msg)
        return decoded.data

    async def get_json(self, path: str, query: dict | None = None) -> Any:
        return await self.send("GET", path, query=query)

    async def post_json(self, path: str, body: Any = None, query: dict | None = None) -> Any:
        return await self.send("POST", path, query=query, body=body)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "OKXBaseAdapter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
