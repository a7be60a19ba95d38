"""Market data: conventions, currency pairs and delta smile surfaces."""

from .base import NodeMetadata, Smile, SmileTermStructure
from .conventions import DayCountConvention, year_fraction
from .currency import CurrencyPair
from .interpolation import linear_interpolation, total_variance_interpolation
from .smile import ATM_DELTA, SmileSlice
from .surface import SmileSurface
from .provider import FxSmileVolatilityProvider

__all__ = [
    # Base protocols
    "NodeMetadata",
    "Smile",
    "SmileTermStructure",
    # Conventions
    "DayCountConvention",
    "year_fraction",
    "CurrencyPair",
    # Interpolation
    "linear_interpolation",
    "total_variance_interpolation",
    # Smiles
    "ATM_DELTA",
    "SmileSlice",
    "SmileSurface",
    # Provider
    "FxSmileVolatilityProvider",
]
