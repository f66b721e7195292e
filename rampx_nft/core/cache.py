"""
Time-boxed cache for the fetched NFT list.

Holds exactly one snapshot under a fixed key. Expiry is lazy: a stale record
is only noticed, and deleted, when it is read.
"""

import json
import logging
import time
from typing import Callable, List, Optional

from ..opensea.models import NFT
from .storage import Storage

CACHE_KEY = "rampx-nft-cache"
CACHE_EXPIRY_MS = 5 * 60 * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


class CacheStore:
    def __init__(
        self,
        storage: Storage,
        clock: Callable[[], int] = _now_ms,
        key: str = CACHE_KEY,
        expiry_ms: int = CACHE_EXPIRY_MS,
    ):
        self.storage = storage
        self.clock = clock
        self.key = key
        self.expiry_ms = expiry_ms

    def get(self) -> Optional[List[NFT]]:
        """Return the cached NFTs, or None when absent, expired or unreadable."""
        raw = self.storage.get_item(self.key)
        if raw is None:
            return None

        try:
            record = json.loads(raw)
            timestamp = int(record["timestamp"])
            entries = record["nfts"]
            if not isinstance(entries, list):
                raise TypeError(f"expected a list of NFTs, got {type(entries).__name__}")
        except (ValueError, TypeError, KeyError) as e:
            logging.warning(f"Discarding unreadable NFT cache record: {e}")
            self.storage.remove_item(self.key)
            return None

        if self.clock() - timestamp >= self.expiry_ms:
            logging.debug("NFT cache expired")
            self.storage.remove_item(self.key)
            return None

        try:
            return [NFT.from_response(entry) for entry in entries]
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logging.warning(f"Discarding NFT cache record with malformed entries: {e}")
            self.storage.remove_item(self.key)
            return None

    def put(self, nfts: List[NFT]) -> None:
        record = {
            "timestamp": self.clock(),
            "nfts": [nft.to_dict() for nft in nfts],
        }
        self.storage.set_item(self.key, json.dumps(record))
        logging.debug(f"Cached {len(nfts)} NFTs")

    def clear(self) -> None:
        self.storage.remove_item(self.key)
