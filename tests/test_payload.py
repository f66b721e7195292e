import json
from dataclasses import replace
from decimal import Decimal

import pytest
from eth_abi import decode
from web3 import Web3

from rampx_nft import config
from rampx_nft.core.errors import PayloadConstructionError
from rampx_nft.opensea.models import Listing
from rampx_nft.purchase.contracts import FULFILL_BASIC_ORDER_ABI
from rampx_nft.purchase.payload import (
    MintTarget,
    PayloadBuilder,
    PurchaseMode,
    convert_eth_to_brett,
    format_brett,
    function_signature,
    listing_price_eth,
)

from conftest import CONDUIT_KEY, NFT_CONTRACT, OFFERER, WALLET, make_listing_data, make_nft

BASIC_ORDER_TYPE = (
    "(address,uint256,uint256,address,address,address,uint256,uint256,uint8,"
    "uint256,uint256,bytes32,uint256,bytes32,bytes32,uint256,(uint256,address)[],bytes)"
)


def _selector(payload: str) -> bytes:
    return bytes.fromhex(payload[2:10])


def _args(payload: str) -> bytes:
    return bytes.fromhex(payload[10:])


class TestPrices:
    def test_one_eth_listing(self) -> None:
        listing = Listing.from_response(make_listing_data(value="1000000000000000000", decimals=18))
        assert listing_price_eth(listing) == Decimal("1")

    def test_fractional_listing(self) -> None:
        listing = Listing.from_response(make_listing_data(value="1700000000000000", decimals=18))
        assert listing_price_eth(listing) == Decimal("0.0017")

    def test_brett_conversion(self) -> None:
        assert convert_eth_to_brett(Decimal("1")) == Decimal("71000")
        assert format_brett(Decimal("1.0")) == "71000.00"
        assert format_brett(config.HARDCODED_PRICE_ETH) == "120.70"

    def test_invalid_price(self) -> None:
        listing = Listing.from_response(make_listing_data(value="lots"))
        with pytest.raises(PayloadConstructionError):
            listing_price_eth(listing)


class TestFunctionSignature:
    def test_tuple_signature(self) -> None:
        assert function_signature(FULFILL_BASIC_ORDER_ABI) == f"fulfillBasicOrder({BASIC_ORDER_TYPE})"


class TestMarketplaceFulfillment:
    def test_builds_fulfill_basic_order(self, listed_nft) -> None:
        request = PayloadBuilder().build_purchase(listed_nft, PurchaseMode.MARKETPLACE_FULFILLMENT)

        assert request.nft is listed_nft
        assert request.requested_amount == Decimal("1")

        destination = request.destination
        assert destination.contract_address == "0x0000000000000068f116a894984e2db1123eb395"
        assert destination.contract_name == "OpenSea Seaport"
        assert destination.gas_limit == config.MARKETPLACE_GAS_LIMIT
        assert destination.abi == [FULFILL_BASIC_ORDER_ABI]
        assert _selector(destination.payload) == bytes.fromhex("fb0f3ee1")

        (params,) = decode([BASIC_ORDER_TYPE], _args(destination.payload))
        assert params[0].lower() == "0x" + "00" * 20
        assert params[1] == 0
        assert params[2] == 975000000000000000
        assert params[3].lower() == OFFERER
        assert params[5].lower() == NFT_CONTRACT
        assert params[6] == 42
        assert params[7] == 1
        assert params[8] == 0
        assert params[9] == 1700000000
        assert params[10] == 1800000000
        assert params[11] == b"\x00" * 32
        assert params[12] == int("360c6ebe0000000000000000000000000000000000000000fb3e5d2f6c0d9f7a", 16)
        assert params[13] == bytes.fromhex(CONDUIT_KEY[2:])
        assert params[14] == b"\x00" * 32
        assert params[15] == 0
        assert list(params[16]) == []
        assert params[17] == bytes.fromhex("ab" * 65)

    def test_widget_config(self, listed_nft) -> None:
        destination = PayloadBuilder().build_purchase(listed_nft, PurchaseMode.MARKETPLACE_FULFILLMENT).destination
        widget_config = destination.to_widget_config()

        assert widget_config["contractGasLimit"] == "300000"
        assert widget_config["contractPayload"] == destination.payload
        assert widget_config["calldataParams"] == destination.payload
        assert json.loads(widget_config["calldataABI"]) == [FULFILL_BASIC_ORDER_ABI]
        assert widget_config is not destination.to_widget_config()

    def test_restricted_erc1155_order_type(self, listed_nft) -> None:
        listing = listed_nft.listing
        offer = replace(listing.offer[0], item_type=3)
        nft = replace(listed_nft, listing=replace(listing, offer=(offer,), order_type=2))

        payload = PayloadBuilder().build_purchase(nft, PurchaseMode.MARKETPLACE_FULFILLMENT).destination.payload

        (params,) = decode([BASIC_ORDER_TYPE], _args(payload))
        assert params[8] == 2 + 4 * 1

    def test_falls_back_to_seaport_address(self, listed_nft) -> None:
        nft = replace(listed_nft, listing=replace(listed_nft.listing, protocol_address=""))
        destination = PayloadBuilder(seaport_address="0xseaport").build_fulfillment(nft.listing)
        assert destination.contract_address == "0xseaport"

    def test_requires_listing(self, unlisted_nft) -> None:
        with pytest.raises(PayloadConstructionError):
            PayloadBuilder().build_purchase(unlisted_nft, PurchaseMode.MARKETPLACE_FULFILLMENT)

    @pytest.mark.parametrize("field, value", [
        ("offer", ()),
        ("consideration", ()),
        ("offerer", "not-an-address"),
        ("salt", "pepper"),
        ("zone_hash", "0x1234"),
        ("conduit_key", ""),
        ("signature", "0xzz"),
    ])
    def test_malformed_listing_is_a_construction_error(self, listed_nft, field, value) -> None:
        listing = replace(listed_nft.listing, **{field: value})
        with pytest.raises(PayloadConstructionError):
            PayloadBuilder().build_fulfillment(listing)

    @pytest.mark.parametrize("amount", ["-1", str(2 ** 256)])
    def test_out_of_range_amount_is_a_construction_error(self, listed_nft, amount) -> None:
        consideration = replace(listed_nft.listing.consideration[0], end_amount=amount)
        listing = replace(listed_nft.listing, consideration=(consideration,))
        with pytest.raises(PayloadConstructionError):
            PayloadBuilder().build_fulfillment(listing)

    def test_order_type_outside_uint8_is_a_construction_error(self, listed_nft) -> None:
        listing = replace(listed_nft.listing, order_type=300)
        with pytest.raises(PayloadConstructionError):
            PayloadBuilder().build_fulfillment(listing)

    def test_unsupported_item_types(self, listed_nft) -> None:
        consideration = replace(listed_nft.listing.consideration[0], item_type=2)
        listing = replace(listed_nft.listing, consideration=(consideration,))
        with pytest.raises(PayloadConstructionError):
            PayloadBuilder().build_fulfillment(listing)


class TestSimpleMint:
    def test_mint_to_wallet(self, unlisted_nft) -> None:
        request = PayloadBuilder().build_purchase(unlisted_nft, PurchaseMode.SIMPLE_MINT, recipient=WALLET)

        assert request.requested_amount == Decimal("0.0001")
        destination = request.destination
        assert destination.contract_address == config.MINTING_CONTRACT_ADDRESS
        assert destination.contract_name == "RampX Mint"
        assert destination.gas_limit == 200000
        assert _selector(destination.payload) == Web3.keccak(text="mintTo(address,uint256)")[:4]

        recipient, quantity = decode(["address", "uint256"], _args(destination.payload))
        assert recipient.lower() == WALLET
        assert quantity == 1

    def test_price_ignores_listing(self, listed_nft) -> None:
        request = PayloadBuilder().build_purchase(listed_nft, PurchaseMode.SIMPLE_MINT, recipient=WALLET)
        assert request.requested_amount == Decimal("0.0001")

    def test_mint_with_token(self, unlisted_nft) -> None:
        token = "0x532f27101965dd16442e59d40670faf5ebb142e4"
        builder = PayloadBuilder(mint_target=MintTarget(payment_token=token, payment_amount=500))

        payload = builder.build_purchase(unlisted_nft, PurchaseMode.SIMPLE_MINT, recipient=WALLET).destination.payload

        assert _selector(payload) == Web3.keccak(text="mintWithToken(address,address,uint256)")[:4]
        recipient, paid_with, amount = decode(["address", "address", "uint256"], _args(payload))
        assert recipient.lower() == WALLET
        assert paid_with.lower() == token
        assert amount == 500

    @pytest.mark.parametrize("recipient", [None, "", "0x123"])
    def test_bad_recipient(self, unlisted_nft, recipient) -> None:
        with pytest.raises(PayloadConstructionError):
            PayloadBuilder().build_purchase(unlisted_nft, PurchaseMode.SIMPLE_MINT, recipient=recipient)
