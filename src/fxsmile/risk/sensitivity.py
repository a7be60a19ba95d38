"""Point and node-level volatility sensitivities.

A :class:`FxOptionSensitivity` is the derivative of some value with respect
to the implied volatility at one (expiry, strike, forward). Projecting it
onto a smile surface gives a :class:`NodeSensitivity`, one value per
surface node.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterator, Sequence

import jax.numpy as jnp
from jax import Array

from fxsmile.errors import DomainError, InvalidInputError
from fxsmile.market.base import NodeMetadata
from fxsmile.market.currency import CurrencyPair, validate_currency_code


@dataclass(frozen=True)
class FxOptionSensitivity:
    """Sensitivity of a value to the implied volatility at one point.

    Args:
        currency_pair: Pair the strike and forward are quoted in
        expiry: Option expiry, timezone-aware
        strike: Option strike
        forward: Forward rate to the expiry
        currency: Currency the sensitivity is expressed in
        sensitivity: dValue/dVol at the point
    """

    currency_pair: CurrencyPair
    expiry: datetime
    strike: float
    forward: float
    currency: str
    sensitivity: float

    def __post_init__(self):
        object.__setattr__(self, "currency_pair", CurrencyPair.of(self.currency_pair))
        validate_currency_code(self.currency)
        if not self.strike > 0.0:
            raise DomainError(f"Strike must be positive, got {self.strike}")
        if not self.forward > 0.0:
            raise DomainError(f"Forward must be positive, got {self.forward}")

    def inverted(self) -> "FxOptionSensitivity":
        """The same point restated in the inverse pair."""
        return replace(
            self,
            currency_pair=self.currency_pair.inverse(),
            strike=1.0 / self.strike,
            forward=1.0 / self.forward,
        )

    def multiplied_by(self, factor: float) -> "FxOptionSensitivity":
        return replace(self, sensitivity=self.sensitivity * factor)


@dataclass(frozen=True, eq=False)
class NodeSensitivity:
    """Sensitivity to each node of a smile surface.

    Iterating yields ``(year_fraction, label, value)`` triples in the
    surface's canonical node order; the object can be traversed any number
    of times.

    Args:
        surface_name: Name of the surface the nodes belong to
        currency: Currency the values are expressed in
        metadata: Node identities, canonical order
        values: One sensitivity per node
    """

    surface_name: str
    currency: str
    metadata: tuple[NodeMetadata, ...]
    values: Array

    def __post_init__(self):
        metadata = tuple(self.metadata)
        values = jnp.asarray(self.values, dtype=float)
        if values.shape != (len(metadata),):
            raise InvalidInputError(
                f"values shape {values.shape} doesn't match {len(metadata)} nodes"
            )
        object.__setattr__(self, "metadata", metadata)
        object.__setattr__(self, "values", values)

    @classmethod
    def of(
        cls,
        surface_name: str,
        currency: str,
        metadata: Sequence[NodeMetadata],
        values: Sequence[float] | Array,
    ) -> "NodeSensitivity":
        return cls(surface_name=surface_name, currency=currency, metadata=tuple(metadata), values=values)

    def __len__(self) -> int:
        return len(self.metadata)

    def __iter__(self) -> Iterator[tuple[float, float, float]]:
        for meta, value in zip(self.metadata, self.values.tolist()):
            yield meta.year_fraction, meta.label, value

    def to_triples(self) -> tuple[tuple[float, float, float], ...]:
        return tuple(self)

    def total(self) -> float:
        """Sum over all nodes."""
        return float(jnp.sum(self.values))

    def multiplied_by(self, factor: float) -> "NodeSensitivity":
        return replace(self, values=self.values * factor)

    def plus(self, other: "NodeSensitivity") -> "NodeSensitivity":
        """Node-by-node sum with a sensitivity on the same surface nodes."""
        if (
            other.surface_name != self.surface_name
            or other.currency != self.currency
            or other.metadata != self.metadata
        ):
            raise InvalidInputError(
                f"Cannot combine sensitivities to {self.surface_name}/{self.currency} "
                f"and {other.surface_name}/{other.currency} with different nodes"
            )
        return replace(self, values=self.values + other.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeSensitivity):
            return NotImplemented
        return (
            self.surface_name == other.surface_name
            and self.currency == other.currency
            and self.metadata == other.metadata
            and bool(jnp.array_equal(self.values, other.values))
        )

    def __hash__(self) -> int:
        return hash((self.surface_name, self.currency, self.metadata, tuple(self.values.tolist())))


__all__ = ["FxOptionSensitivity", "NodeSensitivity"]
