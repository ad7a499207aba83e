"""Network collaborator over httpx."""

import httpx

from ..core import Settings, get_logger, get_settings
from .collaborators import ApiResponse

logger = get_logger(__name__)

_QUERY_METHODS = frozenset({"GET", "HEAD", "DELETE", "OPTIONS"})


class HttpApiClient:
    """
    Default ``call_api`` collaborator.

    Any HTTP status is returned as an :class:`ApiResponse`; the dispatcher
    decides what counts as failure. Transport errors propagate.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.base_url = (base_url if base_url is not None else settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.api_timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)

        logger.info("client_init", url=self.base_url or "<absolute>")

    async def __call__(
        self,
        url: str,
        method: str,
        headers: dict[str, str] | None = None,
        body: dict[str, str] | None = None,
    ) -> ApiResponse:
        """
        Perform one request.

        Args:
            url: Absolute URL, or a path relative to ``base_url``
            method: HTTP method
            headers: Extra request headers
            body: Query parameters for GET-like methods, JSON body otherwise

        Returns:
            Status, text body and headers
        """
        method = method.upper()
        if body is None:
            extra = {}
        elif method in _QUERY_METHODS:
            extra = {"params": body}
        else:
            extra = {"json": body}

        logger.debug("api_request", method=method, url=url)
        response = await self._client.request(method, url, headers=headers, **extra)
        logger.debug("api_response", method=method, url=url, status_code=response.status_code)

        return ApiResponse(
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpApiClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
