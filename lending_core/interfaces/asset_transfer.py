"""Asset transfer protocol: fungible token movement abstraction."""
from typing import Protocol


class AssetTransfer(Protocol):
    """Moves ``amount`` of ``asset_ref`` between two identities or raises."""

    def transfer(self, asset_ref: str, sender: str, recipient: str, amount: int) -> None: ...
