"""
HTTP transport for the Ethermine SDK.

One attempt per call: transport failures surface as :class:`NetworkError`
and undecodable bodies as :class:`ParseError`.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from .encoding import encode_params
from .errors import NetworkError, ParseError
from .models import DEFAULT_USER_AGENT
from .response import has_error_list

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Transport:
    """
    Thin wrapper around :class:`httpx.AsyncClient`.

    An injected ``client`` is left open by :meth:`close`; one created here is
    owned and closed by the transport.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        user_agent: str = DEFAULT_USER_AGENT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def request(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        verb: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        encoded: Optional[str] = None,
    ) -> Any:
        """
        Send ``params`` to ``url`` and return the decoded JSON body.

        GET requests carry the encoded params as the query string; POST
        requests send them as a form-encoded body. A pre-encoded string passed
        as ``encoded`` is sent as is, in place of ``params``.
        """
        verb = verb.upper()
        if verb not in ("GET", "POST"):
            raise ValueError(f"Unsupported HTTP method: {verb}")

        if encoded is None:
            encoded = encode_params(params)
        request_headers = dict(headers or {})
        request_headers["User-Agent"] = self.user_agent

        content: Optional[str] = None
        if verb == "POST":
            request_headers["Content-Type"] = FORM_CONTENT_TYPE
            content = encoded
        elif encoded:
            url = f"{url}?{encoded}"

        logger.debug("%s %s", verb, url)
        try:
            response = await self._client.request(
                verb,
                url,
                headers=request_headers,
                content=content,
                timeout=self.timeout if timeout is None else timeout,
            )
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out", verb, url)
            raise NetworkError(f"Request to {url} timed out", timeout=True) from exc
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", verb, url, exc)
            raise NetworkError(f"Request to {url} failed: {exc}") from exc

        return self._decode(response)

    def _decode(self, response: httpx.Response) -> Any:
        """Decode the body; error statuses pass only if they carry an error list."""
        status = response.status_code
        try:
            payload = response.json()
        except ValueError as exc:
            if status >= 400:
                raise NetworkError(
                    f"Server error: {status}", status_code=status
                ) from exc
            raise ParseError("Response body is not valid JSON", response.text) from exc

        if status >= 400 and not has_error_list(payload):
            raise NetworkError(
                f"Server error: {status}",
                status_code=status,
                details={"body": payload},
            )
        return payload
