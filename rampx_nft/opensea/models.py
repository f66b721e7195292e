from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class NFTTrait:
    trait_type: str
    value: Any
    display_type: Optional[str] = None
    max_value: Optional[str] = None

    @classmethod
    def from_response(cls, data: Dict) -> 'NFTTrait':
        return cls(
            trait_type=data.get('trait_type', ''),
            value=data.get('value', ''),
            display_type=data.get('display_type'),
            max_value=data.get('max_value'),
        )

    def to_dict(self) -> Dict:
        return {
            'trait_type': self.trait_type,
            'value': self.value,
            'display_type': self.display_type,
            'max_value': self.max_value,
        }


@dataclass(frozen=True)
class OfferItem:
    item_type: int
    token: str
    identifier_or_criteria: str
    start_amount: str
    end_amount: str

    @classmethod
    def from_response(cls, data: Dict) -> 'OfferItem':
        return cls(
            item_type=int(data.get('itemType', 0)),
            token=data.get('token', ''),
            identifier_or_criteria=str(data.get('identifierOrCriteria', '0')),
            start_amount=str(data.get('startAmount', '0')),
            end_amount=str(data.get('endAmount', '0')),
        )

    def to_dict(self) -> Dict:
        return {
            'itemType': self.item_type,
            'token': self.token,
            'identifierOrCriteria': self.identifier_or_criteria,
            'startAmount': self.start_amount,
            'endAmount': self.end_amount,
        }


@dataclass(frozen=True)
class ConsiderationItem(OfferItem):
    recipient: str = ''

    @classmethod
    def from_response(cls, data: Dict) -> 'ConsiderationItem':
        item = OfferItem.from_response(data)
        return cls(
            item_type=item.item_type,
            token=item.token,
            identifier_or_criteria=item.identifier_or_criteria,
            start_amount=item.start_amount,
            end_amount=item.end_amount,
            recipient=data.get('recipient', ''),
        )

    def to_dict(self) -> Dict:
        data = super().to_dict()
        data['recipient'] = self.recipient
        return data


@dataclass(frozen=True)
class ListingPrice:
    value: str
    decimals: int
    currency: str = 'ETH'


@dataclass(frozen=True)
class Listing:
    """A signed Seaport order offering one NFT, as returned by OpenSea."""

    order_hash: str
    price: ListingPrice
    offerer: str
    zone: str
    offer: Tuple[OfferItem, ...]
    consideration: Tuple[ConsiderationItem, ...]
    start_time: str
    end_time: str
    zone_hash: str
    salt: str
    conduit_key: str
    signature: str
    order_type: int = 0
    counter: str = '0'
    protocol_address: str = ''

    @classmethod
    def from_response(cls, data: Dict) -> 'Listing':
        """Create a Listing from an OpenSea v2 listing object."""
        current = (data.get('price') or {}).get('current') or {}
        protocol_data = data.get('protocol_data') or {}
        params = protocol_data.get('parameters') or {}

        # Older payloads carry the signature inside the parameters
        signature = params.get('signature') or protocol_data.get('signature') or '0x'

        return cls(
            order_hash=data.get('order_hash', ''),
            price=ListingPrice(
                value=str(current.get('value', '0')),
                decimals=int(current.get('decimals', 18)),
                currency=current.get('currency', 'ETH'),
            ),
            offerer=params.get('offerer', ''),
            zone=params.get('zone', ''),
            offer=tuple(OfferItem.from_response(item) for item in params.get('offer') or []),
            consideration=tuple(
                ConsiderationItem.from_response(item) for item in params.get('consideration') or []
            ),
            start_time=str(params.get('startTime', '0')),
            end_time=str(params.get('endTime', '0')),
            zone_hash=params.get('zoneHash', ''),
            salt=str(params.get('salt', '0')),
            conduit_key=params.get('conduitKey', ''),
            signature=signature,
            order_type=int(params.get('orderType', 0)),
            counter=str(params.get('counter', '0')),
            protocol_address=data.get('protocol_address', ''),
        )

    @property
    def token_id(self) -> Optional[str]:
        """Identifier of the NFT on offer, taken from the first offer item."""
        if not self.offer:
            return None
        return self.offer[0].identifier_or_criteria

    @property
    def token_contract(self) -> Optional[str]:
        if not self.offer:
            return None
        return self.offer[0].token

    def to_dict(self) -> Dict:
        return {
            'order_hash': self.order_hash,
            'price': {
                'current': {
                    'value': self.price.value,
                    'decimals': self.price.decimals,
                    'currency': self.price.currency,
                },
            },
            'protocol_data': {
                'parameters': {
                    'offerer': self.offerer,
                    'zone': self.zone,
                    'offer': [item.to_dict() for item in self.offer],
                    'consideration': [item.to_dict() for item in self.consideration],
                    'orderType': self.order_type,
                    'startTime': self.start_time,
                    'endTime': self.end_time,
                    'zoneHash': self.zone_hash,
                    'salt': self.salt,
                    'conduitKey': self.conduit_key,
                    'counter': self.counter,
                },
                'signature': self.signature,
            },
            'protocol_address': self.protocol_address,
        }


@dataclass(frozen=True)
class NFT:
    identifier: str
    collection: str
    contract: str
    token_standard: str
    name: str
    description: str
    creator: str
    updated_at: str = ''
    image_url: Optional[str] = None
    display_image_url: Optional[str] = None
    display_animation_url: Optional[str] = None
    animation_url: Optional[str] = None
    metadata_url: Optional[str] = None
    opensea_url: Optional[str] = None
    is_disabled: bool = False
    is_nsfw: bool = False
    is_suspicious: bool = False
    traits: Tuple[NFTTrait, ...] = field(default_factory=tuple)
    listing: Optional[Listing] = None

    @classmethod
    def from_response(cls, data: Dict, listing: Optional[Listing] = None) -> 'NFT':
        """Create an NFT from an OpenSea ``nft`` object.

        ``listing`` is attached when given; otherwise a ``listing`` key in
        ``data`` (as written by ``to_dict``) is parsed.
        """
        traits = tuple(
            NFTTrait.from_response(trait)
            for trait in data.get('traits') or []
            if isinstance(trait, dict)
        )

        if listing is None and data.get('listing'):
            listing = Listing.from_response(data['listing'])

        return cls(
            identifier=str(data['identifier']),
            collection=data.get('collection', ''),
            contract=data.get('contract', ''),
            token_standard=data.get('token_standard', ''),
            name=data.get('name') or '',
            description=data.get('description') or '',
            creator=data.get('creator') or '',
            updated_at=data.get('updated_at', ''),
            image_url=data.get('image_url'),
            display_image_url=data.get('display_image_url'),
            display_animation_url=data.get('display_animation_url'),
            animation_url=data.get('animation_url'),
            metadata_url=data.get('metadata_url'),
            opensea_url=data.get('opensea_url'),
            is_disabled=bool(data.get('is_disabled', False)),
            is_nsfw=bool(data.get('is_nsfw', False)),
            is_suspicious=bool(data.get('is_suspicious', False)),
            traits=traits,
            listing=listing,
        )

    @property
    def image(self) -> Optional[str]:
        return self.display_image_url or self.image_url

    def to_dict(self) -> Dict:
        return {
            'identifier': self.identifier,
            'collection': self.collection,
            'contract': self.contract,
            'token_standard': self.token_standard,
            'name': self.name,
            'description': self.description,
            'creator': self.creator,
            'updated_at': self.updated_at,
            'image_url': self.image_url,
            'display_image_url': self.display_image_url,
            'display_animation_url': self.display_animation_url,
            'animation_url': self.animation_url,
            'metadata_url': self.metadata_url,
            'opensea_url': self.opensea_url,
            'is_disabled': self.is_disabled,
            'is_nsfw': self.is_nsfw,
            'is_suspicious': self.is_suspicious,
            'traits': [trait.to_dict() for trait in self.traits],
            'listing': self.listing.to_dict() if self.listing else None,
        }
