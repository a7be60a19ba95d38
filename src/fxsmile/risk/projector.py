"""Projection of point volatility sensitivities onto smile surface nodes.

Bump-and-revalue with a central finite difference, corrected for the
strike channel. Bumping a node's volatility moves the implied volatility
at the query point in two ways:

- Directly, through the volatility grid of the smile at the query expiry
- Indirectly, because the same bump moves the strike that the node's
  delta maps to at a fixed forward

Only the direct effect is attributed to the node:

    node = S * (dV/dN - dV/dK_j * dK_j/dN)

where ``dV/dN`` is the total finite-difference derivative, ``dV/dK_j`` the
derivative of the interpolated volatility with respect to the strike of
wing position ``j`` at a fixed volatility grid, and ``dK_j/dN`` the
derivative of that strike with respect to the node.

References:
    - Clark, I. (2011). Foreign Exchange Option Pricing: A Practitioner's Guide
"""
from __future__ import annotations

import logging
from typing import Optional

import jax.numpy as jnp
from jax import Array

from fxsmile.errors import DomainError
from fxsmile.market.base import SmileTermStructure
from fxsmile.risk.sensitivity import NodeSensitivity
from fxsmile.schemas import SensitivitySettings

logger = logging.getLogger(__name__)


class SensitivityProjector:
    """Maps a point sensitivity dValue/dVol onto every node of a surface.

    Args:
        settings: Bump size for the finite differences (default: 1e-7 in vol units)

    Example:
        >>> projector = SensitivityProjector()
        >>> nodes = projector.project(surface, 1.33, 1.45, 1.39, sensitivity=1.0, currency="GBP")
        >>> total = nodes.total()
    """

    def __init__(self, settings: Optional[SensitivitySettings] = None):
        self.settings = settings if settings is not None else SensitivitySettings()

    @property
    def bump_size(self) -> float:
        return self.settings.bump_size

    def node_values(
        self,
        surface: SmileTermStructure,
        expiry_time: float,
        strike: float,
        forward: float,
    ) -> Array:
        """Derivative of the volatility at one point with respect to each node.

        Args:
            surface: Smile surface
            expiry_time: Time to expiry in years
            strike: Strike of the point
            forward: Forward of the point

        Returns:
            One value per node, canonical order
        """
        if not strike > 0.0:
            raise DomainError(f"Strike must be positive, got {strike}")
        eps = self.bump_size

        smile = surface.slice_at_time(expiry_time)
        strikes = smile.strikes_for(forward)

        # Strike channel: move each wing strike at a fixed volatility grid
        strike_slopes = []
        for position in range(surface.wing_count):
            vol_up = smile.interpolate(strike, strikes.at[position].add(eps))
            vol_dw = smile.interpolate(strike, strikes.at[position].add(-eps))
            strike_slopes.append(0.5 * (vol_up - vol_dw) / eps)

        values = []
        for pillar_index, wing_position in surface.nodes():
            smile_up = surface.with_bumped_node(pillar_index, wing_position, eps).slice_at_time(expiry_time)
            smile_dw = surface.with_bumped_node(pillar_index, wing_position, -eps).slice_at_time(expiry_time)
            strikes_up = smile_up.strikes_for(forward)
            strikes_dw = smile_dw.strikes_for(forward)

            total = 0.5 * (smile_up.interpolate(strike, strikes_up) - smile_dw.interpolate(strike, strikes_dw)) / eps
            strike_shift = 0.5 * float(strikes_up[wing_position] - strikes_dw[wing_position]) / eps
            values.append(total - strike_slopes[wing_position] * strike_shift)

        return jnp.asarray(values, dtype=float)

    def project(
        self,
        surface: SmileTermStructure,
        expiry_time: float,
        strike: float,
        forward: float,
        sensitivity: float,
        currency: str,
    ) -> NodeSensitivity:
        """Project ``sensitivity`` (dValue/dVol at the point) onto the surface nodes.

        Args:
            surface: Smile surface
            expiry_time: Time to expiry in years
            strike: Strike of the point
            forward: Forward of the point
            sensitivity: dValue/dVol at the point
            currency: Currency of the sensitivity

        Returns:
            NodeSensitivity with one value per node
        """
        logger.debug(
            "Projecting sensitivity %.6g at t=%.6f K=%.6f F=%.6f onto %s",
            sensitivity, expiry_time, strike, forward, surface.name,
        )
        values = self.node_values(surface, expiry_time, strike, forward)
        return NodeSensitivity(
            surface_name=surface.name,
            currency=currency,
            metadata=tuple(surface.node_metadata()),
            values=sensitivity * values,
        )


__all__ = ["SensitivityProjector"]
