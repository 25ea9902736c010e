"""PostgREST (Supabase) knowledge source."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from knowledge_grounding.knowledge.base import KnowledgeSource, KnowledgeSourceError, SourceRegistry

logger = logging.getLogger(__name__)


@SourceRegistry.register("postgrest")
class PostgrestKnowledgeSource(KnowledgeSource):
    """Bulk reader for a knowledge table exposed through PostgREST.

    Issues ``GET {url}/rest/v1/{table}?select=*&order={order_by}.asc``, the
    request a Supabase client makes for ``from(table).select("*").order(...)``.

    Parameters
    ----------
    url : str
        Project base URL (e.g. ``"https://xyz.supabase.co"``).
    api_key : str
        Key sent as ``apikey`` header and bearer token.
    table : str
        Table holding knowledge rows.
    order_by : str
        Column giving the stable load order.
    timeout : float
        Request timeout in seconds.
    transport : httpx.BaseTransport | None
        Custom transport, mainly for tests.
    """

    name = "postgrest"

    def __init__(
        self,
        url: str,
        api_key: str,
        table: str = "portfolio-knowledge",
        order_by: str = "id",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not url or not api_key:
            msg = "PostgrestKnowledgeSource needs both url and api_key"
            raise ValueError(msg)
        self._endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self._api_key = api_key
        self._order_by = order_by
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    def fetch_all(self) -> list[dict[str, Any]]:
        """Fetch every row of the table ordered by ``order_by``.

        Returns
        -------
        list[dict[str, Any]]

        Raises
        ------
        KnowledgeSourceError
            On transport errors, non-2xx responses, or a body that is not a
            JSON array.
        """
        params = {"select": "*", "order": f"{self._order_by}.asc"}
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        logger.debug("PostgREST request endpoint=%s order=%s", self._endpoint, self._order_by)
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.get(self._endpoint, params=params, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            msg = f"Knowledge fetch from {self._endpoint} failed: {exc}"
            raise KnowledgeSourceError(msg) from exc
        except ValueError as exc:
            msg = f"Knowledge response from {self._endpoint} is not valid JSON"
            raise KnowledgeSourceError(msg) from exc

        if not isinstance(data, list):
            msg = f"Knowledge response from {self._endpoint} is not a list"
            raise KnowledgeSourceError(msg)
        return data
