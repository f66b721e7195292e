"""Shared test fixtures."""

import asyncio
from typing import Dict, List, Optional

import pytest

from rampx_nft.opensea.models import NFT, Listing

OFFERER = "0x" + "11" * 20
ZONE = "0x" + "00" * 20
NFT_CONTRACT = "0x4db9e0d1631491a3edba3e2cc9e581cac1d29699"
FEE_RECIPIENT = "0x0000a26b00c1f0df003000390027140000faa719"
CONDUIT_KEY = "0x0000007b02230091a7ed01230072f7006a004d60a8d4e71d599b8104250f0000"
WALLET = "0x" + "22" * 20


def make_listing_data(token_id: str = "42", order_hash: str = "0xorder",
                      value: str = "1000000000000000000", decimals: int = 18) -> Dict:
    return {
        "order_hash": order_hash,
        "chain": "ethereum",
        "price": {"current": {"currency": "ETH", "decimals": decimals, "value": value}},
        "protocol_data": {
            "parameters": {
                "offerer": OFFERER,
                "zone": ZONE,
                "offer": [{
                    "itemType": 2,
                    "token": NFT_CONTRACT,
                    "identifierOrCriteria": token_id,
                    "startAmount": "1",
                    "endAmount": "1",
                }],
                "consideration": [
                    {
                        "itemType": 0,
                        "token": ZONE,
                        "identifierOrCriteria": "0",
                        "startAmount": "975000000000000000",
                        "endAmount": "975000000000000000",
                        "recipient": OFFERER,
                    },
                    {
                        "itemType": 0,
                        "token": ZONE,
                        "identifierOrCriteria": "0",
                        "startAmount": "25000000000000000",
                        "endAmount": "25000000000000000",
                        "recipient": FEE_RECIPIENT,
                    },
                ],
                "orderType": 0,
                "startTime": "1700000000",
                "endTime": "1800000000",
                "zoneHash": "0x" + "00" * 32,
                "salt": "0x360c6ebe0000000000000000000000000000000000000000fb3e5d2f6c0d9f7a",
                "conduitKey": CONDUIT_KEY,
                "counter": 0,
            },
            "signature": "0x" + "ab" * 65,
        },
        "protocol_address": "0x0000000000000068f116a894984e2db1123eb395",
    }


def make_nft_data(identifier: str = "42", name: Optional[str] = None) -> Dict:
    return {
        "identifier": identifier,
        "collection": "the-rbtz",
        "contract": NFT_CONTRACT,
        "token_standard": "erc721",
        "name": name or f"RBTZ #{identifier}",
        "description": "A robot",
        "image_url": f"https://img.example/{identifier}.png",
        "display_image_url": f"https://img.example/{identifier}-display.png",
        "metadata_url": f"https://meta.example/{identifier}",
        "opensea_url": f"https://opensea.io/assets/ethereum/{NFT_CONTRACT}/{identifier}",
        "updated_at": "2024-11-01T10:00:00",
        "is_disabled": False,
        "is_nsfw": False,
        "is_suspicious": False,
        "creator": OFFERER,
        "traits": [{"trait_type": "Head", "value": "Visor", "display_type": None, "max_value": None}],
    }


def make_nft(identifier: str = "42", listed: bool = True) -> NFT:
    listing = Listing.from_response(make_listing_data(token_id=identifier)) if listed else None
    return NFT.from_response(make_nft_data(identifier), listing=listing)


class FakeOpenSeaClient:
    """Serves canned listings and metadata; ``delays`` holds one sleep per metadata call."""

    def __init__(self, listings=None, metadata: Optional[Dict[str, Dict]] = None,
                 delays: Optional[List[float]] = None, listings_error: Optional[Exception] = None):
        self.listings = listings or []
        self.metadata = metadata or {}
        self.delays = list(delays or [])
        self.listings_error = listings_error
        self.listing_calls = 0
        self.metadata_calls: List[str] = []

    async def get_best_listings(self, collection_slug, limit=50):
        self.listing_calls += 1
        if self.listings_error is not None:
            raise self.listings_error
        return list(self.listings)

    async def get_nft_metadata(self, chain, contract, token_id):
        self.metadata_calls.append(token_id)
        delay = self.delays.pop(0) if self.delays else 0
        await asyncio.sleep(delay)
        data = self.metadata.get(token_id)
        if isinstance(data, Exception):
            raise data
        return data


class RecordingWidget:
    def __init__(self, fail_on: Optional[str] = None):
        self.calls: List[tuple] = []
        self.fail_on = fail_on

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name == self.fail_on:
            raise RuntimeError(f"{name} failed")

    def update_requested_amount(self, amount):
        self._record("update_requested_amount", amount)

    def update_destination_contract(self, destination):
        self._record("update_destination_contract", destination)

    def open_modal(self):
        self._record("open_modal")

    def close(self):
        self._record("close")

    @property
    def names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def listed_nft() -> NFT:
    return make_nft("42", listed=True)


@pytest.fixture
def unlisted_nft() -> NFT:
    return make_nft("7", listed=False)
