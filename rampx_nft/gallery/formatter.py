from decimal import Decimal

from ..opensea.models import NFT
from ..purchase.payload import PurchaseMode, format_brett, listing_price_eth


def display_price_eth(nft: NFT, mode: PurchaseMode, hardcoded_price_eth: str) -> Decimal:
    if mode is PurchaseMode.MARKETPLACE_FULFILLMENT and nft.listing is not None:
        return listing_price_eth(nft.listing)
    return Decimal(hardcoded_price_eth)


def format_nft_line(nft: NFT, price_eth: Decimal, selected: bool = False) -> str:
    marker = "*" if selected else " "
    name = nft.name or f"#{nft.identifier}"
    flags = " [suspicious]" if nft.is_suspicious else ""
    return f"{marker} {nft.identifier:>6}  {name}{flags}  {price_eth.normalize():f} ETH ({format_brett(price_eth)} BRETT)"
