"""Shared HTTP helpers for the gaodun API gateway and CDN resources."""

from __future__ import annotations

import asyncio
import json
import logging
import secrets
import threading
import time
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import aiohttp
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

API_BASE = "https://apigateway.gaodun.com/"
API_VERSION = "264"
REAL_USER_AGENT = "GdClient/10.0.81 Android/14 H2OS/110_14.0.0.630(cn01) GdNetwork/1.0.5"

# Returned with a 200 status once the session token has expired.
SESSION_EXPIRED_MARKER = "登录超时"

API_HEADERS_TEMPLATE: Dict[str, str] = {
    "User-Agent": REAL_USER_AGENT,
    "ApiVersion": API_VERSION,
    "Host": "apigateway.gaodun.com",
    "Connection": "Keep-Alive",
    "Accept-Encoding": "gzip",
}


class AuthenticationError(Exception):
    """Raised when the gaodun gateway rejects the session token."""


class RemoteAPIError(Exception):
    """Raised when the gateway answers with an unexpected API status."""

    def __init__(self, status: Any, message: str) -> None:
        super().__init__(f"API error (status {status}): {message}")
        self.status = status
        self.message = message


def generate_device_id() -> str:
    """Returns a device id in the shape the Android client reports."""

    return "2" + secrets.token_hex(16)


def build_requested_extend(device_id: str) -> str:
    return json.dumps(
        {
            "apiConfigVersion": API_VERSION,
            "appStore": "oppo",
            "appVersion": API_VERSION,
            "phoneBrand": "oneplus",
            "appScheme": "gaodunapp",
            "deviceId": device_id,
            "appChannel": "oppo",
            "appChannelName": "android",
        },
        separators=(",", ":"),
    )


class HttpClient:
    """Handles gateway and CDN requests with proper headers and throttling."""

    def __init__(
        self,
        auth_token: str,
        timeout: int = 10,
        retries: int = 3,
        max_qps: float = 8.0,
        device_id: Optional[str] = None,
    ) -> None:
        self.auth_token = auth_token
        self.timeout = timeout
        self._api_session = requests.Session()

        retry = Retry(total=retries, backoff_factor=0.5, status_forcelist=(429, 500, 502, 503, 504))
        self._api_session.mount("https://", HTTPAdapter(max_retries=retry))

        self._api_headers = API_HEADERS_TEMPLATE.copy()
        self._api_headers["Authentication"] = auth_token
        self._api_headers["X-Requested-Extend"] = build_requested_extend(device_id or generate_device_id())
        self._api_session.headers.update(self._api_headers)

        self._rate_lock = threading.Lock()
        self._last_api_call = 0.0
        self._min_api_interval = 1.0 / max_qps if max_qps > 0 else 0.0

        self._cdn_async_session: Optional[aiohttp.ClientSession] = None
        self._cdn_async_lock: Optional[asyncio.Lock] = None
        self._cdn_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def headers(self) -> Dict[str, str]:
        """A copy of the headers sent with every gateway request."""

        return self._api_headers.copy()

    def request_api(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """GET a gateway path while enforcing QPS and headers."""

        self._enforce_api_rate_limit()
        url = urljoin(API_BASE, path.lstrip("/"))
        try:
            response = self._api_session.get(url, params=params, headers=extra_headers, timeout=self.timeout)
        except requests.RequestException as exc:  # pragma: no cover - network errors
            logging.error("HTTP GET to %s failed: %s", url, exc)
            raise

        if response.status_code in {401, 403}:
            logging.error("Authentication failed (status %s).", response.status_code)
            raise AuthenticationError("Authentication token rejected, capture a fresh one and retry.")

        if SESSION_EXPIRED_MARKER in response.text:
            logging.error("Gateway reported an expired session for %s", url)
            raise AuthenticationError("Login timeout, please check your authentication token.")

        try:
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:  # pragma: no cover - network errors
            logging.error("API request to %s failed: %s", url, exc)
            raise
        except ValueError as exc:
            logging.error("API response from %s is not JSON: %s", url, exc)
            raise

    async def fetch_cdn_text_async(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """Asynchronously fetch a CDN resource as text (e.g., m3u8)."""

        session = await self._get_cdn_async_session()
        request_headers = self._cdn_request_headers(headers)
        async with session.get(url, headers=request_headers) as resp:
            resp.raise_for_status()
            return await resp.text()

    def _cdn_request_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        merged = dict(headers or {})
        # Gateway-only routing headers break CDN virtual hosting.
        merged.pop("Host", None)
        merged.pop("Connection", None)
        return merged

    def _enforce_api_rate_limit(self) -> None:
        if not self._min_api_interval:
            return
        with self._rate_lock:
            now = time.monotonic()
            elapsed = now - self._last_api_call
            if elapsed < self._min_api_interval:
                time.sleep(self._min_api_interval - elapsed)
            self._last_api_call = time.monotonic()

    async def _get_cdn_async_session(self) -> aiohttp.ClientSession:
        current_loop = asyncio.get_running_loop()
        if self._cdn_async_session:
            if (
                self._cdn_async_session.closed
                or not self._cdn_loop
                or self._cdn_loop.is_closed()
                or self._cdn_loop is not current_loop
            ):
                await self._shutdown_cdn_session()

        if self._cdn_async_lock is None:
            self._cdn_async_lock = asyncio.Lock()

        async with self._cdn_async_lock:
            if self._cdn_async_session and not self._cdn_async_session.closed:
                return self._cdn_async_session
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            connector = aiohttp.TCPConnector(limit=0)
            self._cdn_async_session = aiohttp.ClientSession(timeout=timeout, connector=connector)
            self._cdn_loop = current_loop
        return self._cdn_async_session

    async def _shutdown_cdn_session(self) -> None:
        if self._cdn_async_session:
            try:
                await self._cdn_async_session.close()
            except aiohttp.ClientError as exc:  # pragma: no cover - best effort
                logging.debug("Closing CDN session failed: %s", exc)
        self._cdn_async_session = None
        self._cdn_loop = None
        self._cdn_async_lock = None

    async def aclose(self) -> None:
        """Closes the CDN session from inside the loop that opened it."""

        await self._shutdown_cdn_session()

    def close(self) -> None:
        self._api_session.close()

        if self._cdn_async_session and not self._cdn_async_session.closed:
            try:
                asyncio.run(self._cdn_async_session.close())
            except RuntimeError:
                loop = asyncio.get_running_loop()
                loop.create_task(self._cdn_async_session.close())
        self._cdn_async_session = None
        self._cdn_loop = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
