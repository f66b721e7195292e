"""
Listing acquisition for the gallery.

Fetches the best listings of a collection, then the full metadata of every
listed NFT concurrently. Results are merged by identifier in the order the
metadata responses complete, so when two listings point at the same NFT the
first response to complete wins. That order is not deterministic.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from ..core.cache import CacheStore
from .client import OpenSeaClient
from .models import NFT, Listing


class ListingFetcher:
    def __init__(self, client: OpenSeaClient, cache: Optional[CacheStore], chain: str,
                 default_contract: Optional[str] = None, limit: int = 50):
        self.client = client
        self.cache = cache
        self.chain = chain
        self.default_contract = default_contract
        self.limit = limit

    async def fetch(self, collection_slug: str) -> List[NFT]:
        """Return the listed NFTs of a collection, deduplicated by identifier.

        Raises ListingFetchError when the listings request itself fails; in
        that case nothing is cached.
        """
        if self.cache is not None:
            cached = self.cache.get()
            if cached is not None:
                logging.debug(f"Serving {len(cached)} NFTs from cache")
                return cached

        listings = await self.client.get_best_listings(collection_slug, limit=self.limit)
        logging.info(f"Fetched {len(listings)} listings for {collection_slug}")

        nfts: Dict[str, NFT] = {}
        results = await asyncio.gather(
            *(self._fetch_listed_nft(listing, nfts) for listing in listings),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logging.error(f"Error fetching listed NFT: {result}", exc_info=result)

        found = list(nfts.values())
        if self.cache is not None:
            try:
                self.cache.put(found)
            except OSError as e:
                logging.warning(f"Could not cache {len(found)} NFTs: {e}")
        return found

    async def _fetch_listed_nft(self, listing: Listing, nfts: Dict[str, NFT]) -> None:
        token_id = listing.token_id
        contract = listing.token_contract or self.default_contract
        if not token_id or not contract:
            logging.warning(f"Listing {listing.order_hash} has no offer item to identify its NFT")
            return

        metadata = await self.client.get_nft_metadata(self.chain, contract, token_id)
        if not metadata:
            return

        nft = NFT.from_response(metadata, listing=listing)
        if nft.identifier in nfts:
            logging.debug(f"Dropping duplicate listing {listing.order_hash} for NFT #{nft.identifier}")
            return
        nfts[nft.identifier] = nft
