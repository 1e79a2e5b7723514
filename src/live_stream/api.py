"""REST client for the streaming admin endpoints.

Reads the streaming status and triggers test-signal broadcasts over
httpx. Transport and HTTP failures are raised as StatusFetchFailed /
SignalTriggerFailed so callers handle one exception type per call.
"""

import logging
from typing import Optional

import httpx

from src.live_stream.config import LiveStreamConfig, SignalDirection
from src.live_stream.errors import SignalTriggerFailed, StatusFetchFailed
from src.live_stream.models import StreamingStatusSnapshot
from src.logging_config import log_performance

logger = logging.getLogger(__name__)


class StreamingApiClient:
    """Async client for ``/api/admin/live-streaming``.

    Example:
        api = StreamingApiClient(config)
        status = await api.get_status()
        await api.send_test_signal("BTCUSDT", SignalDirection.BUY)
        await api.aclose()
    """

    def __init__(
        self,
        config: Optional[LiveStreamConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._config = config or LiveStreamConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self._config.page_url,
            timeout=self._config.request_timeout,
            headers={"Accept": "application/json"},
        )

    @log_performance(threshold_ms=2000)
    async def get_status(self) -> StreamingStatusSnapshot:
        """GET the aggregate streaming status."""
        try:
            resp = await self._client.get(self._config.status_path)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as exc:
            raise StatusFetchFailed(
                f"Status endpoint returned {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise StatusFetchFailed(f"Status request failed: {exc}") from exc
        except ValueError as exc:
            raise StatusFetchFailed(f"Status response is not JSON: {exc}") from exc

        try:
            return StreamingStatusSnapshot.from_api(payload)
        except ValueError as exc:
            raise StatusFetchFailed(str(exc)) from exc

    @log_performance(threshold_ms=2000)
    async def send_test_signal(self, symbol: str, direction: SignalDirection) -> None:
        """POST a test signal; the backend broadcasts it to all stream clients."""
        body = {"symbol": symbol, "signalType": SignalDirection(direction).value}
        try:
            resp = await self._client.post(self._config.test_signal_path, json=body)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SignalTriggerFailed(
                f"Test signal rejected with {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise SignalTriggerFailed(f"Test signal request failed: {exc}") from exc
        logger.info("Test signal requested: %s %s", symbol, body["signalType"], extra={"symbol": symbol})

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
