"""Evidence provider backed by a JSON search endpoint."""

import logging

import httpx

from civic_evidence.data import EvidenceItem

logger = logging.getLogger(__name__)


class HttpEvidenceProvider:
    """Fetch evidence from an HTTP endpoint that returns JSON.

    Sends ``GET endpoint?{query_param}=<query>`` and reads the evidence text
    from ``data_field`` (dotted paths such as ``"result.summary"`` are
    followed). Transport errors, non-2xx responses, malformed JSON and empty
    fields are logged and reported as ``None``.

    Args:
        name: Registry key for this provider.
        source: Human-readable source name attached to evidence items.
        endpoint: Search endpoint URL.
        query_param: Query-string parameter carrying the query text.
        data_field: Response field holding the evidence text.
        url_field: Response field holding a link to the evidence, if any.
        default_url: Link used when the response carries none.
        timeout: Request timeout in seconds.
        params: Extra query-string parameters (e.g. API keys).
    """

    def __init__(
        self,
        *,
        name: str,
        source: str,
        endpoint: str,
        query_param: str = "q",
        data_field: str = "summary",
        url_field: str | None = "url",
        default_url: str = "",
        timeout: float = 10.0,
        params: dict[str, str] | None = None,
    ) -> None:
        self.name = name
        self._source = source
        self._endpoint = endpoint
        self._query_param = query_param
        self._data_field = data_field
        self._url_field = url_field
        self._default_url = default_url
        self._timeout = timeout
        self._params = dict(params or {})

    async def fetch(self, query: str) -> EvidenceItem | None:
        params = {**self._params, self._query_param: query}
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._endpoint, params=params)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("%s fetch error: %s", self._source, e)
            return None
        except Exception:
            logger.warning("%s fetch error", self._source, exc_info=True)
            return None

        data = _lookup(payload, self._data_field)
        if not isinstance(data, str) or not data.strip():
            logger.warning("%s returned no '%s' field", self._source, self._data_field)
            return None

        url = _lookup(payload, self._url_field) if self._url_field else None
        return EvidenceItem(
            source=self._source,
            data=data.strip(),
            url=url if isinstance(url, str) and url else self._default_url,
        )


def _lookup(payload: object, path: str) -> object:
    """Follow a dotted path through nested dicts; None if any step is missing."""
    current = payload
    for part in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current
