"""Protocol interfaces for the external collaborators of the lending core."""
from .asset_transfer import AssetTransfer
from .authenticator import Authenticator
from .price_source import PriceSource
from .storage import KeyValueStore

__all__ = ["AssetTransfer", "Authenticator", "KeyValueStore", "PriceSource"]
