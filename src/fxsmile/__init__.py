"""fxsmile: FX volatility smiles by delta, with node-level vega projection.

The main entry points are re-exported here, so you can write, for example:

    from fxsmile import SmileSurface, FxSmileVolatilityProvider
"""

from __future__ import annotations

import jax

# Strike inversion and finite differences need double precision
jax.config.update("jax_enable_x64", True)

from .errors import DomainError, FxSmileError, InvalidInputError  # noqa: E402
from .market import (  # noqa: E402
    CurrencyPair,
    DayCountConvention,
    FxSmileVolatilityProvider,
    NodeMetadata,
    SmileSlice,
    SmileSurface,
    year_fraction,
)
from .risk import FxOptionSensitivity, NodeSensitivity, SensitivityProjector  # noqa: E402
from .schemas import SensitivitySettings  # noqa: E402

__all__ = [
    # Errors
    "FxSmileError",
    "InvalidInputError",
    "DomainError",
    # Market
    "CurrencyPair",
    "DayCountConvention",
    "year_fraction",
    "NodeMetadata",
    "SmileSlice",
    "SmileSurface",
    "FxSmileVolatilityProvider",
    # Risk
    "FxOptionSensitivity",
    "NodeSensitivity",
    "SensitivityProjector",
    "SensitivitySettings",
]

__version__ = "0.1.0"
