"""Core data models for the prediction-market options chain."""

from .chain import ChainCell, OptionsChain
from .expiration import Expiration
from .order import OrderDirection, OrderValuation, SelectedContract
from .quote import CONTRACT_SIDES, ContractQuote, ContractSide

__all__ = [
    "Expiration",
    "ContractQuote",
    "ContractSide",
    "CONTRACT_SIDES",
    "ChainCell",
    "OptionsChain",
    "SelectedContract",
    "OrderValuation",
    "OrderDirection",
]
