import importlib
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from config import settings

logger = logging.getLogger(__name__)

# Shared httpx.AsyncClient, created on first use
_client = None

_load_module = importlib.import_module


class TransportUnavailableError(RuntimeError):
    pass


@dataclass
class UpstreamResponse:
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


PostFn = Callable[[str, dict, Any], Awaitable[UpstreamResponse]]


def get_client():
    global _client
    if _client is None:
        import httpx

        _client = httpx.AsyncClient(timeout=settings.upstream_timeout_seconds)
    return _client


async def close_client():
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


async def _httpx_post(url: str, headers: dict, payload: Any) -> UpstreamResponse:
    response = await get_client().post(url, headers=headers, json=payload)
    return UpstreamResponse(status_code=response.status_code, text=response.text)


def _aiohttp_post(aiohttp) -> PostFn:
    async def post(url: str, headers: dict, payload: Any) -> UpstreamResponse:
        timeout = aiohttp.ClientTimeout(total=settings.upstream_timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(url, headers=headers, json=payload) as response:
                return UpstreamResponse(status_code=response.status, text=await response.text())

    return post


def resolve_transport() -> PostFn:
    """Pick an HTTP client for the upstream call: httpx, else aiohttp."""
    try:
        _load_module("httpx")
        return _httpx_post
    except ImportError:
        logger.warning("httpx is not importable, trying aiohttp")

    try:
        aiohttp = _load_module("aiohttp")
    except ImportError as e:
        raise TransportUnavailableError(
            f"No HTTP client available and aiohttp failed to import: {e}"
        ) from e
    return _aiohttp_post(aiohttp)
