"""
Collaborators the purchase flow talks to but does not implement.

The funding widget (Aarc FundKit in the browser) drives the actual
transaction. The wallet provider only reports who is connected.
"""

import logging
from decimal import Decimal
from typing import Dict, Optional, Protocol


class FundingWidget(Protocol):
    def update_requested_amount(self, amount: Decimal) -> None: ...

    def update_destination_contract(self, destination: Dict[str, str]) -> None: ...

    def open_modal(self) -> None: ...

    def close(self) -> None: ...


class WalletProvider(Protocol):
    @property
    def address(self) -> Optional[str]: ...

    @property
    def chain_id(self) -> Optional[int]: ...


class StaticWallet:
    def __init__(self, address: Optional[str] = None, chain_id: Optional[int] = None):
        self.address = address
        self.chain_id = chain_id


class ConsoleFundingWidget:
    """Logs what the checkout widget would be configured with."""

    def __init__(self, app_name: str):
        self.app_name = app_name
        self.requested_amount: Optional[Decimal] = None
        self.destination: Optional[Dict[str, str]] = None
        self.is_open = False

    def update_requested_amount(self, amount: Decimal) -> None:
        self.requested_amount = amount
        logging.info(f"[{self.app_name}] Requested amount: {amount} ETH")

    def update_destination_contract(self, destination: Dict[str, str]) -> None:
        self.destination = destination
        logging.info(
            f"[{self.app_name}] Destination: {destination['contractName']} "
            f"at {destination['contractAddress']} (gas limit {destination['contractGasLimit']})"
        )
        logging.debug(f"[{self.app_name}] Calldata: {destination['contractPayload']}")

    def open_modal(self) -> None:
        self.is_open = True
        logging.info(f"[{self.app_name}] Widget opened")

    def close(self) -> None:
        self.is_open = False
        logging.info(f"[{self.app_name}] Widget closed")
