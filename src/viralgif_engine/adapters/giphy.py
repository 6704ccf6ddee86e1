"""HTTP client for the Giphy GIF API."""

import logging
from typing import Any

import httpx

from viralgif_engine.common.config import ViralGifSettings
from viralgif_engine.common.exceptions import MediaLookupError

logger = logging.getLogger(__name__)


def _original_url(gif: Any) -> str:
    try:
        url = gif["images"]["original"]["url"]
    except (KeyError, TypeError) as exc:
        raise MediaLookupError("Invalid Giphy response format") from exc
    if not url:
        raise MediaLookupError("Invalid Giphy response format")
    return url


class GiphyClient:
    """Looks up GIFs by id or by search term."""

    def __init__(self, settings: ViralGifSettings, http_client: httpx.AsyncClient | None = None):
        self.settings = settings
        self.base_url = settings.giphy_base_url.rstrip("/")
        self._http_client = http_client

    def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy-init httpx.AsyncClient."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.settings.giphy_timeout)
        return self._http_client

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        params = {"api_key": self.settings.giphy_api_key, **params}
        try:
            resp = await self._get_http_client().get(f"{self.base_url}/{path}", params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as exc:
            raise MediaLookupError(
                f"Giphy returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise MediaLookupError(f"Giphy request failed: {exc!r}") from exc
        except ValueError as exc:
            raise MediaLookupError("Giphy returned a non-JSON response") from exc

    async def by_id(self, media_id: str) -> str:
        logger.debug("Fetching GIF by id %s", media_id)
        body = await self._get(media_id, {})
        return _original_url(body.get("data"))

    async def by_search_term(self, term: str) -> str:
        logger.debug("Searching Giphy for %r", term)
        body = await self._get(
            "search",
            {"q": term, "limit": 10, "rating": self.settings.giphy_rating, "lang": "en"},
        )
        results = body.get("data") or []
        if not results:
            raise MediaLookupError(f"No GIFs found for search term {term!r}")
        return _original_url(results[0])

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
