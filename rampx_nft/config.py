import os
from enum import IntEnum

from dotenv import load_dotenv

load_dotenv()


class SupportedChainId(IntEnum):
    ETHEREUM = 1
    BASE = 8453


# OpenSea
OPENSEA_API_KEY = os.getenv("OPENSEA_API_KEY", "")
OPENSEA_API_URL = os.getenv("OPENSEA_API_URL", "https://api.opensea.io")
COLLECTION_SLUG = os.getenv("COLLECTION_SLUG", "the-rbtz")
CHAIN = os.getenv("CHAIN", "ethereum")
LISTINGS_LIMIT = 50
OPENSEA_RATE_LIMIT = int(os.getenv("OPENSEA_RATE_LIMIT", "240"))  # requests per minute
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "15"))

# Local cache
CACHE_DIR = os.getenv("CACHE_DIR", ".cache")

# Aarc funding widget
AARC_API_KEY = os.getenv("AARC_API_KEY", "")
AARC_APP_NAME = "RampX x Aarc"
CONTRACT_LOGO_URI = "https://rampx.app/logo.png"

# Contracts
THE_RBTZ_NFT_CONTRACT_ADDRESS = {
    SupportedChainId.ETHEREUM: "0x4db9e0d1631491a3edba3e2cc9e581cac1d29699",
}
MINTING_CONTRACT_ADDRESS = "0x45c0470ef627a30efe30c06b13d883669b8fd3a8"
SEAPORT_ADDRESS = "0x0000000000000068F116a894984e2DB1123eB395"  # Seaport 1.6
BASE_RPC_URL = "https://mainnet.base.org"

# Pricing
MINT_PRICE_ETH = "0.0001"
HARDCODED_PRICE_ETH = "0.0017"
ETH_TO_BRETT_RATE = 71000

# Optional ERC20 payment for the mint-token variant
MINT_PAYMENT_TOKEN = os.getenv("MINT_PAYMENT_TOKEN", "")
MINT_PAYMENT_AMOUNT = int(os.getenv("MINT_PAYMENT_AMOUNT", "0"))

# Gas ceilings handed to the widget
MARKETPLACE_GAS_LIMIT = 300000
MINT_GAS_LIMIT = 200000
