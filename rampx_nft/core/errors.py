"""Exceptions raised by the listing and purchase pipeline."""


class RampXError(Exception):
    """Base error for this package."""


class OpenSeaAPIError(RampXError):
    def __init__(self, status: int, url: str, message: str = "") -> None:
        self.status = status
        self.url = url
        super().__init__(message or f"OpenSea request failed with status {status}: {url}")


class ListingFetchError(RampXError):
    """The listings request for a collection failed; nothing was fetched."""


class PayloadConstructionError(RampXError):
    """A listing or mint target could not be turned into call data."""
