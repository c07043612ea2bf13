"""
HTTP transport for the CDAP REST API.

:func:`url_join` builds resource addresses and :class:`HttpClient` sends
requests through a pooled :class:`httpx.Client`. Authentication, timeouts
and transport-level retries belong here, never in resource controllers.
"""

from __future__ import annotations

import httpx

from cdap.base.config import CdapConfig
from cdap.base.exceptions import RemoteCallError, RequestConstructionError
from cdap.base.retry import retry


def url_join(base: str, *segments: str) -> str:
    """Join a base URL and path segments with exactly one ``/`` between each.

    Leading and trailing slashes on every segment are ignored and empty
    segments are dropped. Segments are not percent-encoded, so a value
    containing ``/`` adds path levels.

    Example::

        url_join("http://host:11015/", "/v3/namespaces", "default/")
        # -> "http://host:11015/v3/namespaces/default"
    """
    parts = [base.rstrip("/")]
    parts.extend(s.strip("/") for s in segments if s and s.strip("/"))
    return "/".join(parts)


class HttpClient:
    """Thin synchronous wrapper around :class:`httpx.Client`.

    Attributes:
        config: The validated CDAP config this client was built from.
    """

    def __init__(
        self,
        config: CdapConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create the pooled client.

        Args:
            config: Validated CDAP configuration.
            transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`.
        """
        self.config = config
        headers = {"Accept": "application/json"}
        if config.auth_token:
            headers["Authorization"] = f"Bearer {config.auth_token}"
        self._client = httpx.Client(
            headers=headers,
            timeout=config.timeout,
            verify=config.verify_ssl,
            transport=transport,
        )
        self._send = retry(
            max_attempts=config.max_attempts,
            base_delay=config.retry_delay,
            retryable_exceptions=(httpx.TransportError,),
        )(self._client.send)

    def call(
        self,
        method: str,
        address: str,
        body: bytes | None = None,
    ) -> bytes:
        """Send one request and return the raw response body.

        Args:
            method: HTTP method (e.g. 'PUT').
            address: Absolute URL built with :func:`url_join`.
            body: Optional JSON request body.

        Returns:
            The response body bytes of a 2xx response.

        Raises:
            RequestConstructionError: If the request cannot be built.
            RemoteCallError: On transport failure or a non-2xx status.
        """
        headers = {"Content-Type": "application/json"} if body is not None else None
        try:
            request = self._client.build_request(method, address, content=body, headers=headers)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise RequestConstructionError(
                f"Cannot build {method} request for {address!r}: {e}"
            ) from e
        if request.url.scheme not in ("http", "https") or not request.url.host:
            raise RequestConstructionError(f"Not an absolute http(s) address: {address!r}")

        try:
            response = self._send(request)
        except httpx.TransportError as e:
            raise RemoteCallError(f"{method} {address} failed: {e}") from e

        if not response.is_success:
            text = response.text
            raise RemoteCallError(
                f"{method} {address} returned {response.status_code}: {text}",
                status_code=response.status_code,
                body=text,
            )
        return response.content

    def close(self) -> None:
        """Release pooled connections."""
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
