"""
Delta-parametrised FX volatility smiles.

FX option smiles are quoted per expiry in delta space:
- ATM (At-The-Money) volatility
- Risk Reversal (RR) at each delta pillar: vol_call - vol_put
- Strangle (STR) at each delta pillar: (vol_call + vol_put)/2 - vol_ATM

A :class:`SmileSlice` stores the resulting wing volatilities for one expiry
and places them in strike space for a given forward.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Sequence

import jax.numpy as jnp
from jax import Array
from jax.scipy.stats import norm

from fxsmile.errors import DomainError, InvalidInputError
from fxsmile.market.interpolation import linear_interpolation

ATM_DELTA = 0.5


def _as_deltas(deltas: Sequence[float]) -> tuple[float, ...]:
    values = tuple(float(d) for d in deltas)
    if not values:
        raise InvalidInputError("At least one delta pillar is required")
    for delta in values:
        if not 0.0 < delta < ATM_DELTA:
            raise InvalidInputError(f"Deltas must lie in (0, 0.5), got {delta}")
    for lower, upper in zip(values, values[1:]):
        if upper <= lower:
            raise InvalidInputError(f"Deltas must be strictly increasing, got {list(values)}")
    return values


@dataclass(frozen=True, eq=False)
class SmileSlice:
    """
    Volatility smile for a single expiry, parametrised by delta.

    Wing layout for ``n`` deltas ``d_0 < ... < d_{n-1}``: position ``j < n``
    holds the put at delta ``d_j``, position ``n`` holds ATM, position
    ``2n - j`` holds the call at delta ``d_j``. Strikes therefore increase
    with the position.

    Attributes:
        time: Time to expiry in years
        deltas: Delta pillars, strictly increasing in (0, 0.5)
        volatilities: ``2n + 1`` volatilities in wing layout

    Example:
        >>> smile = SmileSlice.from_quotes(
        ...     time=1.0, deltas=[0.10, 0.25], atm=0.17,
        ...     risk_reversal=[-0.013, -0.008], strangle=[0.033, 0.013],
        ... )
        >>> strikes = smile.strikes_for(1.39)
        >>> vol = smile.volatility_at(1.45, 1.39)
    """

    time: float
    deltas: tuple[float, ...]
    volatilities: Array

    def __post_init__(self):
        """Validate inputs."""
        time = float(self.time)
        if not time > 0.0:
            raise DomainError(f"Smile time must be positive, got {time}")
        deltas = _as_deltas(self.deltas)
        vols = jnp.asarray(self.volatilities, dtype=float)
        if vols.ndim != 1 or vols.shape[0] != 2 * len(deltas) + 1:
            raise InvalidInputError(
                f"Expected {2 * len(deltas) + 1} volatilities for {len(deltas)} deltas, "
                f"got shape {vols.shape}"
            )
        if not bool(jnp.all(jnp.isfinite(vols))):
            raise InvalidInputError("Volatilities must be finite")
        object.__setattr__(self, "time", time)
        object.__setattr__(self, "deltas", deltas)
        object.__setattr__(self, "volatilities", vols)

    @classmethod
    def from_quotes(
        cls,
        time: float,
        deltas: Sequence[float],
        atm: float,
        risk_reversal: Sequence[float],
        strangle: Sequence[float],
    ) -> "SmileSlice":
        """
        Build a smile from ATM, risk reversal and strangle quotes.

        For each delta pillar:
        - vol_put = ATM + STR - RR/2
        - vol_call = ATM + STR + RR/2

        Args:
            time: Time to expiry in years
            deltas: Delta pillars, one RR and one STR quote per pillar
            atm: ATM volatility
            risk_reversal: Risk reversal per delta pillar
            strangle: Strangle per delta pillar

        Returns:
            SmileSlice in wing layout
        """
        rr = jnp.asarray(risk_reversal, dtype=float)
        strangle_arr = jnp.asarray(strangle, dtype=float)
        n = len(tuple(deltas))
        if rr.shape != (n,) or strangle_arr.shape != (n,):
            raise InvalidInputError(
                f"Expected {n} risk reversal and strangle quotes, "
                f"got shapes {rr.shape} and {strangle_arr.shape}"
            )
        puts = atm + strangle_arr - rr / 2.0
        calls = atm + strangle_arr + rr / 2.0
        vols = jnp.concatenate([puts, jnp.asarray([atm], dtype=float), calls[::-1]])
        return cls(time=time, deltas=deltas, volatilities=vols)

    @property
    def wing_count(self) -> int:
        """Number of volatilities, ``2 * len(deltas) + 1``."""
        return 2 * len(self.deltas) + 1

    @property
    def atm_volatility(self) -> float:
        return float(self.volatilities[len(self.deltas)])

    @cached_property
    def delta_labels(self) -> Array:
        """Call delta of each wing position: ``1 - d`` for puts, 0.5 ATM, ``d`` for calls."""
        deltas = jnp.asarray(self.deltas, dtype=float)
        return jnp.concatenate([1.0 - deltas, jnp.asarray([ATM_DELTA]), deltas[::-1]])

    @cached_property
    def _d1(self) -> Array:
        return norm.ppf(self.delta_labels)

    def strikes_for(self, forward: float) -> Array:
        """
        Strikes of the wing positions for a given forward.

        Inverts the undiscounted Black forward delta ``N(d1)`` for each
        position: ``K = F * exp(-sigma*sqrt(T)*d1 + sigma^2*T/2)`` with
        ``d1 = N^-1(call delta)``. The ATM position has ``d1 = 0``
        (delta-neutral straddle).

        Args:
            forward: Forward FX rate for the expiry

        Returns:
            Strictly increasing strikes, one per volatility

        Raises:
            DomainError: If the forward is not positive or the inversion
                yields strikes that are not positive and increasing
        """
        if not forward > 0.0:
            raise DomainError(f"Forward must be positive, got {forward}")
        sigma_sqrt_t = self.volatilities * jnp.sqrt(self.time)
        strikes = forward * jnp.exp(-sigma_sqrt_t * self._d1 + 0.5 * sigma_sqrt_t**2)
        if not bool(jnp.all(jnp.isfinite(strikes) & (strikes > 0.0))):
            raise DomainError(
                f"Delta inversion produced invalid strikes {strikes.tolist()} "
                f"(time={self.time}, forward={forward})"
            )
        if not bool(jnp.all(jnp.diff(strikes) > 0.0)):
            raise DomainError(
                f"Delta inversion produced non-increasing strikes {strikes.tolist()} "
                f"(time={self.time}, forward={forward})"
            )
        return strikes

    def interpolate(self, strike: float, strikes: Array) -> float:
        """Volatility at ``strike``, with this smile's vols placed on ``strikes``."""
        return float(linear_interpolation(jnp.asarray(strikes, dtype=float), self.volatilities, strike))

    def volatility_at(self, strike: float, forward: float) -> float:
        """
        Implied volatility at a strike.

        Linear in strike between the wing strikes, flat beyond them.

        Args:
            strike: Option strike
            forward: Forward FX rate for the expiry

        Returns:
            Implied volatility
        """
        if not strike > 0.0:
            raise DomainError(f"Strike must be positive, got {strike}")
        return self.interpolate(strike, self.strikes_for(forward))

    def with_volatilities(self, volatilities: Array | Sequence[float]) -> "SmileSlice":
        return SmileSlice(time=self.time, deltas=self.deltas, volatilities=volatilities)

    def with_time(self, time: float) -> "SmileSlice":
        return SmileSlice(time=time, deltas=self.deltas, volatilities=self.volatilities)

    def with_shifted_volatility(self, position: int, shift: float) -> "SmileSlice":
        """Copy of the smile with the volatility at ``position`` shifted by ``shift``."""
        if not 0 <= position < self.wing_count:
            raise InvalidInputError(
                f"Wing position {position} out of range for {self.wing_count} volatilities"
            )
        return self.with_volatilities(self.volatilities.at[position].add(shift))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SmileSlice):
            return NotImplemented
        return (
            self.time == other.time
            and self.deltas == other.deltas
            and bool(jnp.array_equal(self.volatilities, other.volatilities))
        )

    def __hash__(self) -> int:
        return hash((self.time, self.deltas, tuple(self.volatilities.tolist())))

    def __repr__(self) -> str:
        vols = ", ".join(f"{v * 100:.2f}%" for v in self.volatilities.tolist())
        return f"SmileSlice(time={self.time:.4f}y, deltas={list(self.deltas)}, vols=[{vols}])"


__all__ = ["ATM_DELTA", "SmileSlice"]
