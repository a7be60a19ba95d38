"""
Smile term structure: delta smiles across expiry.

The surface stores one :class:`~fxsmile.market.smile.SmileSlice` per expiry
pillar and answers volatility queries at arbitrary (expiry, strike, forward):

1. Synthesise the smile at the query expiry (linear in total variance
   between pillars, flat in volatility outside the pillar range)
2. Place the synthesised smile in strike space for the forward
3. Interpolate linearly in strike, flat beyond the wings
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, replace
from typing import Iterator, Sequence

import jax.numpy as jnp
from jax import Array

from fxsmile.errors import DomainError, InvalidInputError
from fxsmile.market.base import NodeMetadata
from fxsmile.market.interpolation import total_variance_interpolation
from fxsmile.market.smile import SmileSlice

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmileSurface:
    """
    Term structure of delta smiles with strike interpolation.

    Nodes are indexed by ``(pillar_index, wing_position)``; the flat
    parameter index is ``pillar_index * wing_count + wing_position``, in
    ascending pillar time and put wing -> ATM -> call wing order.

    Attributes:
        name: Surface identifier
        slices: Smiles at strictly increasing pillar times
        time_tolerance: Tolerance used to match a query time to a pillar

    Example:
        >>> surface = SmileSurface.from_quotes(
        ...     name="smileEurUsd",
        ...     times=[0.25, 1.0],
        ...     deltas=[0.10, 0.25],
        ...     atm=[0.185, 0.17],
        ...     risk_reversal=[[-0.011, -0.006], [-0.013, -0.008]],
        ...     strangle=[[0.031, 0.011], [0.033, 0.013]],
        ... )
        >>> vol = surface.volatility(0.5, 1.45, 1.39)
    """

    name: str
    slices: tuple[SmileSlice, ...]
    time_tolerance: float = 1e-12

    def __post_init__(self):
        """Validate pillar ordering and delta grids."""
        slices = tuple(self.slices)
        if not slices:
            raise InvalidInputError("A smile surface needs at least one pillar")
        for smile in slices:
            if not isinstance(smile, SmileSlice):
                raise InvalidInputError(f"Expected SmileSlice pillars, got {type(smile).__name__}")
        for lower, upper in zip(slices, slices[1:]):
            if upper.time <= lower.time:
                raise InvalidInputError(
                    f"Pillar times must be strictly increasing: {lower.time} then {upper.time}"
                )
        cardinality = len(slices[0].deltas)
        for smile in slices[1:]:
            if len(smile.deltas) != cardinality:
                raise InvalidInputError(
                    f"All pillars must share the delta grid size {cardinality}, "
                    f"pillar at {smile.time} has {len(smile.deltas)}"
                )
        object.__setattr__(self, "slices", slices)

    @classmethod
    def from_quotes(
        cls,
        name: str,
        times: Sequence[float] | Array,
        deltas: Sequence[float] | Array,
        atm: Sequence[float] | Array,
        risk_reversal: Sequence[Sequence[float]] | Array,
        strangle: Sequence[Sequence[float]] | Array,
        time_tolerance: float = 1e-12,
    ) -> "SmileSurface":
        """
        Build a surface from market quotes.

        Args:
            name: Surface identifier
            times: Pillar times in years, strictly increasing
            deltas: Delta pillars shared by every expiry
            atm: ATM volatility per pillar
            risk_reversal: Matrix (pillars x deltas) of risk reversals
            strangle: Matrix (pillars x deltas) of strangles
            time_tolerance: Tolerance used to match a query time to a pillar

        Returns:
            SmileSurface
        """
        times_arr = jnp.asarray(times, dtype=float)
        atm_arr = jnp.asarray(atm, dtype=float)
        rr = jnp.asarray(risk_reversal, dtype=float)
        strangle_arr = jnp.asarray(strangle, dtype=float)
        deltas = tuple(float(d) for d in deltas)

        expected_shape = (times_arr.shape[0], len(deltas))
        if atm_arr.shape != times_arr.shape:
            raise InvalidInputError(
                f"atm shape {atm_arr.shape} doesn't match times shape {times_arr.shape}"
            )
        if rr.shape != expected_shape or strangle_arr.shape != expected_shape:
            raise InvalidInputError(
                f"risk_reversal {rr.shape} and strangle {strangle_arr.shape} must both "
                f"have shape {expected_shape} (pillars x deltas)"
            )

        slices = tuple(
            SmileSlice.from_quotes(
                time=float(times_arr[i]),
                deltas=deltas,
                atm=atm_arr[i],
                risk_reversal=rr[i],
                strangle=strangle_arr[i],
            )
            for i in range(times_arr.shape[0])
        )
        logger.debug("Built smile surface %s with %d pillars and deltas %s", name, len(slices), deltas)
        return cls(name=name, slices=slices, time_tolerance=time_tolerance)

    @property
    def times(self) -> tuple[float, ...]:
        return tuple(smile.time for smile in self.slices)

    @property
    def pillar_count(self) -> int:
        return len(self.slices)

    @property
    def wing_count(self) -> int:
        return self.slices[0].wing_count

    def slice_at_time(self, expiry_time: float) -> SmileSlice:
        """
        Smile at an arbitrary expiry.

        A time matching a pillar returns that pillar unchanged. Between
        pillars each wing position is interpolated linearly in total
        variance; outside the pillar range the nearest pillar's
        volatilities are used.

        Args:
            expiry_time: Time to expiry in years

        Returns:
            SmileSlice at ``expiry_time``
        """
        t = float(expiry_time)
        if not t > 0.0:
            raise DomainError(f"Expiry time must be positive, got {t}")

        times = self.times
        index = bisect.bisect_left(times, t)
        for candidate in (index - 1, index):
            if 0 <= candidate < len(times) and abs(times[candidate] - t) <= self.time_tolerance:
                return self.slices[candidate]

        if index == 0:
            return self.slices[0].with_time(t)
        if index == len(times):
            return self.slices[-1].with_time(t)

        lower = self.slices[index - 1]
        upper = self.slices[index]
        vols = total_variance_interpolation(
            t, lower.time, upper.time, lower.volatilities, upper.volatilities
        )
        return SmileSlice(time=t, deltas=lower.deltas, volatilities=vols)

    def volatility(self, expiry_time: float, strike: float, forward: float) -> float:
        """
        Implied volatility at an arbitrary point.

        Args:
            expiry_time: Time to expiry in years
            strike: Strike
            forward: Forward rate for the expiry

        Returns:
            Implied volatility
        """
        return self.slice_at_time(expiry_time).volatility_at(strike, forward)

    def with_bumped_node(self, pillar_index: int, wing_position: int, epsilon: float) -> "SmileSurface":
        """Copy of the surface with one node's volatility shifted by ``epsilon``."""
        if not 0 <= pillar_index < self.pillar_count:
            raise InvalidInputError(
                f"Pillar index {pillar_index} out of range for {self.pillar_count} pillars"
            )
        slices = list(self.slices)
        slices[pillar_index] = slices[pillar_index].with_shifted_volatility(wing_position, epsilon)
        return replace(self, slices=tuple(slices))

    # Flat parameter view

    @property
    def parameter_count(self) -> int:
        return self.pillar_count * self.wing_count

    def _locate(self, parameter_index: int) -> tuple[int, int]:
        if not 0 <= parameter_index < self.parameter_count:
            raise InvalidInputError(
                f"Parameter index {parameter_index} out of range for {self.parameter_count} parameters"
            )
        return divmod(parameter_index, self.wing_count)

    def parameter(self, parameter_index: int) -> float:
        pillar_index, wing_position = self._locate(parameter_index)
        return float(self.slices[pillar_index].volatilities[wing_position])

    def with_parameter(self, parameter_index: int, value: float) -> "SmileSurface":
        """Copy of the surface with one node's volatility replaced by ``value``."""
        pillar_index, wing_position = self._locate(parameter_index)
        smile = self.slices[pillar_index]
        slices = list(self.slices)
        slices[pillar_index] = smile.with_volatilities(smile.volatilities.at[wing_position].set(value))
        return replace(self, slices=tuple(slices))

    def parameter_metadata(self, parameter_index: int) -> NodeMetadata:
        pillar_index, wing_position = self._locate(parameter_index)
        smile = self.slices[pillar_index]
        return NodeMetadata(year_fraction=smile.time, label=float(smile.delta_labels[wing_position]))

    def node_metadata(self) -> tuple[NodeMetadata, ...]:
        """Metadata of every node, in canonical order."""
        return tuple(
            NodeMetadata(year_fraction=smile.time, label=label)
            for smile in self.slices
            for label in smile.delta_labels.tolist()
        )

    def nodes(self) -> Iterator[tuple[int, int]]:
        """``(pillar_index, wing_position)`` of every node, in canonical order."""
        for pillar_index in range(self.pillar_count):
            for wing_position in range(self.wing_count):
                yield pillar_index, wing_position

    def __repr__(self) -> str:
        return (
            f"SmileSurface({self.name!r}, {self.pillar_count} pillars, "
            f"times={[round(t, 6) for t in self.times]})"
        )


__all__ = ["SmileSurface"]
