import asyncio
import argparse
import logging

from rampx_nft import config
from rampx_nft.core.logging import setup_logging
from rampx_nft.gallery.formatter import display_price_eth, format_nft_line
from rampx_nft.gallery.gallery import NFTGallery
from rampx_nft.purchase.payload import PurchaseMode
from rampx_nft.purchase.widget import ConsoleFundingWidget, StaticWallet


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='RampX NFT checkout')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    parser.add_argument('--mode', choices=[m.value for m in PurchaseMode],
                        default=PurchaseMode.MARKETPLACE_FULFILLMENT.value,
                        help='Buy listed NFTs through the marketplace or mint directly')
    parser.add_argument('--wallet', help='Connected wallet address')
    parser.add_argument('--chain-id', type=int, default=int(config.SupportedChainId.ETHEREUM),
                        help='Chain id reported by the wallet')
    parser.add_argument('--buy', metavar='IDENTIFIER', help='Open the checkout for this NFT')
    parser.add_argument('--no-cache', action='store_true', help='Ignore the cached NFT list')
    return parser.parse_args(argv)


async def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.debug)

    mode = PurchaseMode(args.mode)
    wallet = StaticWallet(args.wallet, args.chain_id if args.wallet else None)
    widget = ConsoleFundingWidget(config.AARC_APP_NAME)
    gallery = NFTGallery(config, wallet, widget, mode=mode)

    if not wallet.address:
        print("Connect a wallet with --wallet to browse NFTs.")
        return

    if args.no_cache and gallery.fetcher.cache is not None:
        gallery.fetcher.cache.clear()

    nfts = await gallery.on_wallet_changed()
    if not nfts:
        print("No NFTs available")
        return

    for nft in nfts:
        price = display_price_eth(nft, mode, config.HARDCODED_PRICE_ETH)
        print(format_nft_line(nft, price, selected=nft.identifier == args.buy))

    if args.buy:
        if gallery.select(args.buy) is None:
            print(f"NFT #{args.buy} is not available")
            return
        if not gallery.can_purchase:
            print(f"NFT #{args.buy} cannot be bought in {mode.value} mode")
            return
        if await gallery.purchase():
            print(widget.destination['contractPayload'])
        else:
            print("Checkout could not be prepared, see the log for details")


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.info("\nStopped by user.")
    except Exception as e:
        logging.error(f"Fatal error in main: {e}", exc_info=True)


if __name__ == "__main__":
    run()
