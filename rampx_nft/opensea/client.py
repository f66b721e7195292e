import asyncio
import logging
from typing import Dict, List, Optional

import aiohttp

from ..core.errors import ListingFetchError, OpenSeaAPIError
from .models import Listing


class OpenSeaClient:
    def __init__(self, api_key: str, api_url: str, api_limiter, timeout: float = 15,
                 session: Optional[aiohttp.ClientSession] = None):
        self.api_key = api_key
        self.api_url = api_url.rstrip('/')
        self.api_limiter = api_limiter
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.session = session
        self.headers = {
            "accept": "application/json",
            "x-api-key": self.api_key
        }

    async def _get_json(self, path: str, params: Optional[Dict] = None) -> Dict:
        """GET an API path and return the decoded body; non-200 raises OpenSeaAPIError."""
        await self.api_limiter.acquire()
        url = f"{self.api_url}{path}"

        if self.session is not None:
            return await self._request(self.session, url, params)
        async with aiohttp.ClientSession() as session:
            return await self._request(session, url, params)

    async def _request(self, session: aiohttp.ClientSession, url: str, params: Optional[Dict]) -> Dict:
        async with session.get(url, headers=self.headers, params=params, timeout=self.timeout) as response:
            if response.status != 200:
                raise OpenSeaAPIError(response.status, url)
            return await response.json()

    async def get_best_listings(self, collection_slug: str, limit: int = 50) -> List[Listing]:
        """Get the cheapest active listings of a collection.

        Any failure raises ListingFetchError: without listings there is
        nothing to show.
        """
        path = f"/api/v2/listings/collection/{collection_slug}/best"
        try:
            data = await self._get_json(path, params={"limit": limit})
        except asyncio.TimeoutError as e:
            raise ListingFetchError(f"Timeout fetching listings for {collection_slug}") from e
        except (aiohttp.ClientError, OpenSeaAPIError, ValueError) as e:
            raise ListingFetchError(f"Error fetching listings for {collection_slug}: {e}") from e

        if not isinstance(data, dict):
            raise ListingFetchError(f"Unexpected listings response for {collection_slug}: {type(data).__name__}")

        listings = []
        for item in data.get('listings') or []:
            if not isinstance(item, dict):
                continue
            try:
                listings.append(Listing.from_response(item))
            except (ValueError, TypeError, AttributeError) as e:
                logging.warning(f"Skipping malformed listing {item.get('order_hash')}: {e}")
        return listings

    async def get_nft_metadata(self, chain: str, contract: str, token_id: str) -> Optional[dict]:
        """Get metadata for a single NFT using the OpenSea API v2."""
        path = f"/api/v2/chain/{chain}/contract/{contract}/nfts/{token_id}"
        try:
            data = await self._get_json(path)
            if not isinstance(data, dict):
                logging.error(f"Unexpected metadata response for token {token_id}")
                return None
            return data.get('nft') or None
        except asyncio.TimeoutError:
            logging.error(f"Timeout fetching metadata for token {token_id}")
            return None
        except OpenSeaAPIError as e:
            logging.error(f"Failed to fetch metadata for token {token_id}: {e.status}")
            return None
        except (aiohttp.ClientError, ValueError) as e:
            logging.error(f"Error fetching metadata for token {token_id}: {e}")
            return None
