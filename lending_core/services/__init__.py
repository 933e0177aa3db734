"""Service modules"""
from .ledger import PositionLedger
from .protocol import LendingProtocol

__all__ = ["PositionLedger", "LendingProtocol"]
