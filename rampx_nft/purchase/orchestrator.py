import logging
from enum import Enum
from typing import Optional

from ..opensea.models import NFT
from .payload import PayloadBuilder, PurchaseMode
from .widget import FundingWidget, WalletProvider


class PurchaseState(Enum):
    IDLE = "idle"
    PROCESSING = "processing"


class PurchaseOrchestrator:
    """Hands a selected NFT's purchase to the funding widget, one attempt at a time."""

    def __init__(self, builder: PayloadBuilder, wallet: WalletProvider):
        self.builder = builder
        self.wallet = wallet
        self.state = PurchaseState.IDLE

    @property
    def is_processing(self) -> bool:
        return self.state is PurchaseState.PROCESSING

    async def execute(self, nft: Optional[NFT], mode: PurchaseMode, widget: FundingWidget) -> bool:
        """Configure and open the widget for ``nft``.

        Returns True when the widget was opened. Preconditions that do not hold
        make this a no-op. Failures close the widget, get logged and return
        False; the state is back to IDLE either way.
        """
        if not self.wallet.address or nft is None:
            return False
        if mode is PurchaseMode.MARKETPLACE_FULFILLMENT and nft.listing is None:
            return False
        if self.is_processing:
            logging.debug("Purchase already in progress")
            return False

        self.state = PurchaseState.PROCESSING
        try:
            request = self.builder.build_purchase(nft, mode, recipient=self.wallet.address)

            widget.update_requested_amount(request.requested_amount)
            widget.update_destination_contract(request.destination.to_widget_config())
            widget.open_modal()
            logging.info(
                f"Opened checkout for NFT #{nft.identifier}: "
                f"{request.requested_amount} ETH via {request.destination.contract_name}"
            )
            return True
        except Exception as e:
            logging.error(f"Error preparing purchase of NFT #{nft.identifier}: {e}", exc_info=True)
            try:
                widget.close()
            except Exception as close_error:
                logging.error(f"Error closing funding widget: {close_error}")
            return False
        finally:
            self.state = PurchaseState.IDLE
