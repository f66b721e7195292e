"""
Purchase payload construction.

Turns a selected NFT into the amount and destination-contract configuration
the funding widget needs: either a Seaport basic-order fulfillment of the
NFT's listing, or a plain mint on the RampX minting contract. Nothing here
does I/O.
"""

import json
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from eth_abi import encode
from eth_abi.exceptions import EncodingError
from eth_utils import to_bytes
from web3 import Web3

from .. import config
from ..core.errors import PayloadConstructionError
from ..opensea.models import NFT, Listing
from .contracts import (
    BASIC_ORDER_ROUTE,
    FULFILL_BASIC_ORDER_ABI,
    MINT_TO_ABI,
    MINT_WITH_TOKEN_ABI,
    ZERO_BYTES32,
)


class PurchaseMode(Enum):
    MARKETPLACE_FULFILLMENT = "marketplace"
    SIMPLE_MINT = "mint"


@dataclass(frozen=True)
class DestinationContract:
    contract_address: str
    contract_name: str
    gas_limit: int
    payload: str
    abi: Optional[List[Dict]] = None
    logo_uri: str = config.CONTRACT_LOGO_URI

    def to_widget_config(self) -> Dict[str, str]:
        """Build the widget's destination-contract object. A new dict on every call."""
        return {
            "contractAddress": self.contract_address,
            "contractName": self.contract_name,
            "contractGasLimit": str(self.gas_limit),
            "contractPayload": self.payload,
            "calldataABI": json.dumps(self.abi) if self.abi else "",
            "calldataParams": self.payload,
            "contractLogoURI": self.logo_uri,
        }


@dataclass(frozen=True)
class PurchaseRequest:
    nft: NFT
    requested_amount: Decimal
    destination: DestinationContract


@dataclass(frozen=True)
class MintTarget:
    """Where and how a simple mint is sent.

    With ``payment_token`` set the mint is paid with a fixed ERC20 amount
    instead of the native price.
    """

    contract_address: str = config.MINTING_CONTRACT_ADDRESS
    contract_name: str = "RampX Mint"
    price_eth: Decimal = Decimal(config.MINT_PRICE_ETH)
    gas_limit: int = config.MINT_GAS_LIMIT
    quantity: int = 1
    payment_token: Optional[str] = None
    payment_amount: int = 0


def listing_price_eth(listing: Listing) -> Decimal:
    """Listing price in the chain's native unit: value / 10**decimals."""
    try:
        return Decimal(listing.price.value) / (Decimal(10) ** listing.price.decimals)
    except (InvalidOperation, TypeError) as e:
        raise PayloadConstructionError(f"Invalid listing price {listing.price.value!r}") from e


def convert_eth_to_brett(eth_amount: Union[Decimal, str, int]) -> Decimal:
    return Decimal(eth_amount) * config.ETH_TO_BRETT_RATE


def format_brett(eth_amount: Union[Decimal, str, int]) -> str:
    return f"{convert_eth_to_brett(eth_amount):.2f}"


def _canonical_type(param: Dict) -> str:
    param_type = param["type"]
    if param_type.startswith("tuple"):
        inner = ",".join(_canonical_type(component) for component in param["components"])
        return f"({inner}){param_type[len('tuple'):]}"
    return param_type


def function_signature(fragment: Dict) -> str:
    """e.g. ``mintTo(address,uint256)``"""
    types = ",".join(_canonical_type(param) for param in fragment["inputs"])
    return f"{fragment['name']}({types})"


def encode_function_call(fragment: Dict, args: Sequence[Any]) -> str:
    """ABI-encode a call: 4-byte selector followed by the encoded arguments."""
    selector = Web3.keccak(text=function_signature(fragment))[:4]
    types = [_canonical_type(param) for param in fragment["inputs"]]
    try:
        encoded = encode(types, list(args))
    except EncodingError as e:
        raise PayloadConstructionError(f"Cannot encode {fragment['name']} arguments: {e}") from e
    return "0x" + (bytes(selector) + encoded).hex()


UINT256_LIMIT = 2 ** 256


def _to_int(value: str, field: str) -> int:
    try:
        text = str(value).strip()
        number = int(text, 16) if text.lower().startswith("0x") else int(text)
    except (ValueError, TypeError) as e:
        raise PayloadConstructionError(f"Listing field {field} is not an integer: {value!r}") from e
    if not 0 <= number < UINT256_LIMIT:
        raise PayloadConstructionError(f"Listing field {field} is out of uint256 range: {value!r}")
    return number


def _to_address(value: str, field: str) -> str:
    try:
        return Web3.to_checksum_address(value)
    except (ValueError, TypeError) as e:
        raise PayloadConstructionError(f"Listing field {field} is not an address: {value!r}") from e


def _to_bytes(value: str, field: str, length: Optional[int] = None) -> bytes:
    try:
        data = to_bytes(hexstr=value)
    except (ValueError, TypeError) as e:
        raise PayloadConstructionError(f"Listing field {field} is not hex: {value!r}") from e
    if length is not None and len(data) != length:
        raise PayloadConstructionError(f"Listing field {field} must be {length} bytes, got {len(data)}")
    return data


class PayloadBuilder:
    def __init__(self, mint_target: Optional[MintTarget] = None,
                 seaport_address: str = config.SEAPORT_ADDRESS,
                 marketplace_gas_limit: int = config.MARKETPLACE_GAS_LIMIT):
        self.mint_target = mint_target or MintTarget()
        self.seaport_address = seaport_address
        self.marketplace_gas_limit = marketplace_gas_limit

    def build_purchase(self, nft: NFT, mode: PurchaseMode, recipient: Optional[str] = None) -> PurchaseRequest:
        """Derive the requested amount and destination contract for ``nft``.

        ``recipient`` is the connected wallet; it is only used by SIMPLE_MINT.
        Raises PayloadConstructionError when the inputs cannot be encoded.
        """
        if mode is PurchaseMode.MARKETPLACE_FULFILLMENT:
            if nft.listing is None:
                raise PayloadConstructionError(f"NFT #{nft.identifier} has no listing to fulfill")
            amount = listing_price_eth(nft.listing)
            destination = self.build_fulfillment(nft.listing)
        elif mode is PurchaseMode.SIMPLE_MINT:
            if not recipient:
                raise PayloadConstructionError("Minting needs a recipient wallet address")
            amount = self.mint_target.price_eth
            destination = self.build_mint(recipient)
        else:
            raise PayloadConstructionError(f"Unsupported purchase mode: {mode!r}")

        return PurchaseRequest(nft=nft, requested_amount=amount, destination=destination)

    def build_fulfillment(self, listing: Listing) -> DestinationContract:
        """Encode ``fulfillBasicOrder`` for a Seaport listing, copying its parameters verbatim."""
        if not listing.offer:
            raise PayloadConstructionError(f"Listing {listing.order_hash} has no offer items")
        if not listing.consideration:
            raise PayloadConstructionError(f"Listing {listing.order_hash} has no consideration items")

        offer = listing.offer[0]
        consideration = listing.consideration[0]

        route = BASIC_ORDER_ROUTE.get((consideration.item_type, offer.item_type))
        if route is None:
            raise PayloadConstructionError(
                f"Listing {listing.order_hash} cannot be filled as a basic order "
                f"(consideration type {consideration.item_type}, offer type {offer.item_type})"
            )

        parameters = (
            _to_address(consideration.token, "consideration.token"),
            _to_int(consideration.identifier_or_criteria, "consideration.identifierOrCriteria"),
            _to_int(consideration.end_amount, "consideration.endAmount"),
            _to_address(listing.offerer, "offerer"),
            _to_address(listing.zone, "zone"),
            _to_address(offer.token, "offer.token"),
            _to_int(offer.identifier_or_criteria, "offer.identifierOrCriteria"),
            _to_int(offer.end_amount, "offer.endAmount"),
            listing.order_type + 4 * route,
            _to_int(listing.start_time, "startTime"),
            _to_int(listing.end_time, "endTime"),
            _to_bytes(listing.zone_hash, "zoneHash", 32),
            _to_int(listing.salt, "salt"),
            _to_bytes(listing.conduit_key, "conduitKey", 32),
            ZERO_BYTES32,
            0,
            [],
            _to_bytes(listing.signature, "signature"),
        )

        return DestinationContract(
            contract_address=listing.protocol_address or self.seaport_address,
            contract_name="OpenSea Seaport",
            gas_limit=self.marketplace_gas_limit,
            payload=encode_function_call(FULFILL_BASIC_ORDER_ABI, [parameters]),
            abi=[FULFILL_BASIC_ORDER_ABI],
        )

    def build_mint(self, recipient: str) -> DestinationContract:
        target = self.mint_target
        wallet = _to_address(recipient, "recipient")

        if target.payment_token:
            fragment = MINT_WITH_TOKEN_ABI
            args = [wallet, _to_address(target.payment_token, "payment_token"), target.payment_amount]
        else:
            fragment = MINT_TO_ABI
            args = [wallet, target.quantity]

        return DestinationContract(
            contract_address=target.contract_address,
            contract_name=target.contract_name,
            gas_limit=target.gas_limit,
            payload=encode_function_call(fragment, args),
            abi=[fragment],
        )
