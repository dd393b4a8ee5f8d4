"""Base scoped client.

Provides the request plumbing shared by every client in the hierarchy:
normalized GETs, body-less writes and the not-found translation used by
navigate operations.
"""

import logging
from typing import Annotated, Any, Awaitable, Callable, Dict, List, Optional

import httpx
from pydantic import Field

from ..errors import NotFoundError
from ..normalize import camelcase_keys_deep
from ..validation import Entity, HttpClient, OptionsSchema, Uri, validate_options

logger = logging.getLogger(__name__)

DEFAULT_BUILD_COUNT = 50

BuildCount = Optional[Annotated[int, Field(ge=1)]]


class ListBuildsOptions(OptionsSchema):
    count: BuildCount = DEFAULT_BUILD_COUNT


class ScopedClient:
    """Base client bound to one level of the Concourse resource hierarchy.

    Holds the API URL and the transport. Both are read-only; subclasses add
    the ancestor entities their URLs are built from.
    """

    def __init__(self, api_url: str, http_client: httpx.AsyncClient):
        self._api_url = api_url
        self._http_client = http_client

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http_client

    async def _get_json(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """GET a URL and return the camelCased JSON body.

        Raises:
            httpx.HTTPStatusError: If the server returns a non-2xx status
            httpx.HTTPError: If the request fails in transport
        """
        logger.debug(f"GET {url}")
        response = await self._http_client.request("GET", url, params=params)
        response.raise_for_status()
        return camelcase_keys_deep(response.json())

    async def _send(self, method: str, url: str, expected_status: int) -> None:
        """Issue a body-less write.

        Raises:
            httpx.HTTPStatusError: If the server returns a non-2xx status
            httpx.HTTPError: If the request fails in transport
        """
        logger.debug(f"{method} {url}")
        response = await self._http_client.request(method, url)
        response.raise_for_status()
        if response.status_code != expected_status:
            logger.warning(
                f"{method} {url} returned {response.status_code}, "
                f"expected {expected_status}"
            )

    async def _list_builds(self, url: str, count: Optional[int]) -> List[Entity]:
        options = validate_options(ListBuildsOptions, {"count": count})
        params = {"limit": options.count} if options.count is not None else None
        builds: List[Entity] = await self._get_json(url, params=params)
        return builds

    @staticmethod
    async def _navigate(
        kind: str,
        name: Optional[str],
        fetch: Callable[[Optional[str]], Awaitable[Entity]],
    ) -> Entity:
        """Fetch a named child, translating 404 into NotFoundError.

        Raises:
            NotFoundError: If the server reports the child does not exist
        """
        try:
            return await fetch(name)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise NotFoundError(kind, str(name)) from e
            raise


class ClientOptions(OptionsSchema):
    api_url: Uri
    http_client: HttpClient
