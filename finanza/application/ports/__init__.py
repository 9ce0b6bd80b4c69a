"""Application ports package."""

from .asset_prices import AssetPricePort, AssetQuote
from .database import DatabaseEnginePort
from .exchange_rate import ExchangeRatePort, ExchangeRateQuote
from .snapshot_repository import SnapshotRepositoryPort

__all__ = [
    "AssetPricePort",
    "AssetQuote",
    "DatabaseEnginePort",
    "ExchangeRatePort",
    "ExchangeRateQuote",
    "SnapshotRepositoryPort",
]
