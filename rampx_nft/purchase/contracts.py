# Minimal ABIs for the calls handed to the funding widget

# Seaport item types for offer/consideration
ITEM_TYPE = {
    "NATIVE": 0,
    "ERC20": 1,
    "ERC721": 2,
    "ERC1155": 3,
}

# BasicOrderRouteType, indexed by (consideration item type, offer item type)
BASIC_ORDER_ROUTE = {
    (ITEM_TYPE["NATIVE"], ITEM_TYPE["ERC721"]): 0,   # ETH_TO_ERC721
    (ITEM_TYPE["NATIVE"], ITEM_TYPE["ERC1155"]): 1,  # ETH_TO_ERC1155
    (ITEM_TYPE["ERC20"], ITEM_TYPE["ERC721"]): 2,    # ERC20_TO_ERC721
    (ITEM_TYPE["ERC20"], ITEM_TYPE["ERC1155"]): 3,   # ERC20_TO_ERC1155
}

ZERO_BYTES32 = b"\x00" * 32

FULFILL_BASIC_ORDER_ABI = {
    "type": "function", "stateMutability": "payable",
    "outputs": [{"name": "fulfilled", "type": "bool"}],
    "name": "fulfillBasicOrder",
    "inputs": [{"name": "parameters", "type": "tuple", "components": [
        {"name": "considerationToken", "type": "address"},
        {"name": "considerationIdentifier", "type": "uint256"},
        {"name": "considerationAmount", "type": "uint256"},
        {"name": "offerer", "type": "address"},
        {"name": "zone", "type": "address"},
        {"name": "offerToken", "type": "address"},
        {"name": "offerIdentifier", "type": "uint256"},
        {"name": "offerAmount", "type": "uint256"},
        {"name": "basicOrderType", "type": "uint8"},
        {"name": "startTime", "type": "uint256"},
        {"name": "endTime", "type": "uint256"},
        {"name": "zoneHash", "type": "bytes32"},
        {"name": "salt", "type": "uint256"},
        {"name": "offererConduitKey", "type": "bytes32"},
        {"name": "fulfillerConduitKey", "type": "bytes32"},
        {"name": "totalOriginalAdditionalRecipients", "type": "uint256"},
        {"name": "additionalRecipients", "type": "tuple[]", "components": [
            {"name": "amount", "type": "uint256"},
            {"name": "recipient", "type": "address"}
        ]},
        {"name": "signature", "type": "bytes"}
    ]}]
}

MINT_TO_ABI = {
    "type": "function", "stateMutability": "payable",
    "outputs": [],
    "name": "mintTo",
    "inputs": [
        {"name": "recipient", "type": "address"},
        {"name": "quantity", "type": "uint256"}
    ]
}

MINT_WITH_TOKEN_ABI = {
    "type": "function", "stateMutability": "nonpayable",
    "outputs": [],
    "name": "mintWithToken",
    "inputs": [
        {"name": "recipient", "type": "address"},
        {"name": "token", "type": "address"},
        {"name": "amount", "type": "uint256"}
    ]
}
