from typing import Any, Dict, List, Optional, cast

import httpx

from ferreteria.core.errors import MalformedResponseError, TransportError
from ferreteria.core.logger import logger
from ferreteria.core.settings import settings
from ferreteria.v1_0.schemas import HistoryQuery


class HistoryClient:
    """Read-only client for the inventory history endpoint (`GET /historial`)."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base = (base_url or settings.HISTORY_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.HISTORY_TIMEOUT_SEC
        self.transport = transport

    @staticmethod
    def _server_message(r: httpx.Response) -> Optional[str]:
        try:
            data = r.json()
        except ValueError:
            return None
        if isinstance(data, dict):
            msg = data.get("message")
            if isinstance(msg, str) and msg.strip():
                return msg
        return None

    async def fetch_page(self, query: HistoryQuery) -> List[Dict[str, Any]]:
        """
        Fetch one page of raw movement records.

        Args:
            query: Page, limit, search term, date range and movement kind.

        Returns:
            The raw items of the `historial` list, unmodified.

        Raises:
            TransportError: Network failure or non-2xx status; carries the
                server `message` when the body has one.
            MalformedResponseError: 2xx body without a `historial` list.
        """
        url = f"{self.base}/historial"
        params = query.to_params()
        logger.info("[HistoryClient] GET %s params=%s", url, params)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("[HistoryClient] transport failure: %s", e)
            raise TransportError() from e

        if r.status_code >= 300:
            msg = self._server_message(r)
            logger.error("[HistoryClient] status=%s message=%s", r.status_code, msg)
            raise TransportError(msg, status_code=r.status_code)

        try:
            data: Any = r.json()
        except ValueError as e:
            logger.error("[HistoryClient] body is not JSON")
            raise MalformedResponseError() from e

        items = data.get("historial") if isinstance(data, dict) else None
        if not isinstance(items, list):
            logger.error("[HistoryClient] unexpected shape: %s", type(data).__name__)
            raise MalformedResponseError()

        logger.debug("[HistoryClient] received %d records", len(items))
        return cast(List[Dict[str, Any]], items)
