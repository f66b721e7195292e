import logging
from typing import List, Optional

from ..core.cache import CacheStore
from ..core.errors import ListingFetchError
from ..core.rate_limiter import RateLimiter
from ..core.storage import FileStorage
from ..opensea.client import OpenSeaClient
from ..opensea.fetcher import ListingFetcher
from ..opensea.models import NFT
from ..purchase.orchestrator import PurchaseOrchestrator
from ..purchase.payload import MintTarget, PayloadBuilder, PurchaseMode
from ..purchase.widget import FundingWidget, WalletProvider


class NFTGallery:
    """State behind the NFT grid: loaded NFTs, selection and the buy action.

    One component serves both purchase modes. Loads are tagged with a
    generation number; a load that finishes after the wallet changed or a
    newer load started is dropped.
    """

    def __init__(self, config, wallet: WalletProvider, widget: FundingWidget,
                 mode: PurchaseMode = PurchaseMode.MARKETPLACE_FULFILLMENT,
                 fetcher: Optional[ListingFetcher] = None,
                 builder: Optional[PayloadBuilder] = None):
        self.config = config
        self.wallet = wallet
        self.widget = widget
        self.mode = mode

        if fetcher is None:
            self.api_limiter = RateLimiter(max_requests=config.OPENSEA_RATE_LIMIT, time_window=60)
            client = OpenSeaClient(
                api_key=config.OPENSEA_API_KEY,
                api_url=config.OPENSEA_API_URL,
                api_limiter=self.api_limiter,
                timeout=config.REQUEST_TIMEOUT_SECONDS,
            )
            fetcher = ListingFetcher(
                client=client,
                cache=CacheStore(FileStorage(config.CACHE_DIR)),
                chain=config.CHAIN,
                default_contract=next(iter(config.THE_RBTZ_NFT_CONTRACT_ADDRESS.values()), None),
                limit=config.LISTINGS_LIMIT,
            )
        self.fetcher = fetcher

        if builder is None:
            mint_target = MintTarget(
                payment_token=config.MINT_PAYMENT_TOKEN or None,
                payment_amount=config.MINT_PAYMENT_AMOUNT,
            )
            builder = PayloadBuilder(mint_target=mint_target)
        self.orchestrator = PurchaseOrchestrator(builder, wallet)

        self.nfts: List[NFT] = []
        self.selected: Optional[NFT] = None
        self.is_loading = False
        self._generation = 0

    @property
    def is_processing(self) -> bool:
        return self.orchestrator.is_processing

    @property
    def can_purchase(self) -> bool:
        """Whether the buy button is enabled."""
        if self.is_processing or not self.wallet.address or self.selected is None:
            return False
        if self.mode is PurchaseMode.MARKETPLACE_FULFILLMENT:
            return self.selected.listing is not None
        return True

    async def load_nfts(self) -> List[NFT]:
        """Populate the grid for the connected wallet."""
        address = self.wallet.address
        if not address:
            self.nfts = []
            return self.nfts

        self._generation += 1
        generation = self._generation
        self.is_loading = True
        try:
            nfts = await self.fetcher.fetch(self.config.COLLECTION_SLUG)
        except ListingFetchError as e:
            logging.error(f"Error fetching NFTs: {e}")
            nfts = []
        finally:
            if generation == self._generation:
                self.is_loading = False

        if generation != self._generation or self.wallet.address != address:
            logging.debug("Discarding NFTs from a stale load")
            return self.nfts

        self.nfts = nfts
        if self.selected is not None and self.selected.identifier not in {nft.identifier for nft in nfts}:
            self.selected = None
        return self.nfts

    async def on_wallet_changed(self) -> List[NFT]:
        self.selected = None
        if not self.wallet.address:
            # Invalidates any load still in flight
            self._generation += 1
            self.is_loading = False
            self.nfts = []
            return self.nfts
        return await self.load_nfts()

    def select(self, identifier: Optional[str]) -> Optional[NFT]:
        if identifier is None:
            self.selected = None
            return None
        self.selected = next((nft for nft in self.nfts if nft.identifier == identifier), None)
        if self.selected is None:
            logging.warning(f"NFT #{identifier} is not in the gallery")
        return self.selected

    async def purchase(self) -> bool:
        """Run the buy action for the selected NFT."""
        if not self.can_purchase:
            return False
        opened = await self.orchestrator.execute(self.selected, self.mode, self.widget)
        if opened:
            self.selected = None
        return opened
