import asyncio
import logging
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

from app.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Exceptions to retry on
RETRYABLE_EXCEPTIONS = (
    httpx.ConnectTimeout,
    httpx.ReadTimeout,
    httpx.ConnectError,
    httpx.RemoteProtocolError,
)


class UpstreamFetchError(RuntimeError):
    """A provider request failed (non-2xx response or network error)."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class UpstreamClient:
    """
    Base JSON client for third-party sports providers.

    Requests are serialized by the caller; every request (successful or not)
    is followed by ``request_delay`` seconds of sleep to respect provider
    rate limits.
    """

    name = "upstream"

    def __init__(
        self,
        base_url: str,
        request_delay: float = 0.0,
        retry_attempts: int | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.request_delay = request_delay
        self.retry_attempts = max(
            1, retry_attempts if retry_attempts is not None else settings.upstream_retry_attempts
        )
        self.timeout = timeout if timeout is not None else settings.upstream_timeout_seconds

    async def _make_request(
        self,
        method: str,
        url: str,
        params: dict | None = None,
    ) -> httpx.Response:
        """
        Make an HTTP request, retrying transient connection failures.

        Retries up to ``retry_attempts`` times in total with exponential
        backoff on connection/read timeouts and connection errors.
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=1, min=2, max=30),
            retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                async with httpx.AsyncClient(follow_redirects=True) as client:
                    response = await client.request(
                        method.upper(),
                        url,
                        params=params,
                        timeout=self.timeout,
                    )
                    response.raise_for_status()
                    return response

    async def get_json(self, path: str, params: dict | None = None) -> Any:
        """GET ``base_url + path`` and decode JSON, then wait ``request_delay``."""
        url = f"{self.base_url}{path}"
        try:
            response = await self._make_request("get", url, params=params)
            return response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise UpstreamFetchError(
                url, f"{self.name} request failed ({status}): {path}", status_code=status
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamFetchError(url, f"{self.name} request failed ({e!r}): {path}") from e
        except ValueError as e:
            raise UpstreamFetchError(url, f"{self.name} returned invalid JSON: {path}") from e
        finally:
            if self.request_delay > 0:
                await asyncio.sleep(self.request_delay)
