"""
Base protocols for smile-based volatility surfaces.

This module defines the abstractions the provider and the sensitivity
projector are written against:
- Smile: a single-expiry smile that can place itself in strike space
- SmileTermStructure: a collection of smiles across expiry with discrete nodes
- NodeMetadata: the (time, delta) identity of a surface node
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol, Sequence, runtime_checkable

from jax import Array


@dataclass(frozen=True)
class NodeMetadata:
    """
    Identity of a surface node.

    Attributes:
        year_fraction: Pillar time of the node, in years
        label: Call delta of the node's wing position (0.5 at the money)
    """

    year_fraction: float
    label: float

    def __iter__(self):
        yield self.year_fraction
        yield self.label


@runtime_checkable
class Smile(Protocol):
    """
    Protocol for a single-expiry volatility smile.

    A smile holds one volatility per wing position and maps each position
    to a strike once a forward is known.
    """

    @property
    def time(self) -> float:
        """Time to expiry in years."""
        ...

    @property
    def volatilities(self) -> Array:
        """Volatility per wing position, lowest strike first."""
        ...

    def strikes_for(self, forward: float) -> Array:
        """Strike per wing position at ``forward``, increasing."""
        ...

    def volatility_at(self, strike: float, forward: float) -> float:
        """Implied volatility at ``strike`` given ``forward``."""
        ...

    def interpolate(self, strike: float, strikes: Array) -> float:
        """Volatility at ``strike`` with the smile's vols placed on ``strikes``."""
        ...


@runtime_checkable
class SmileTermStructure(Protocol):
    """
    Protocol for volatility surfaces built from discrete smile nodes.

    All concrete implementations must provide:
    - volatility(t, strike, forward): Evaluate the surface
    - slice_at_time(t): The smile at an arbitrary expiry
    - node_metadata(): Node identities in canonical order
    - nodes(): Node indices in canonical order
    - with_bumped_node(pillar, wing, epsilon): A copy with one node shifted
    """

    name: str

    @property
    def pillar_count(self) -> int:
        ...

    @property
    def wing_count(self) -> int:
        ...

    def volatility(self, expiry_time: float, strike: float, forward: float) -> float:
        """
        Implied volatility at an arbitrary point.

        Args:
            expiry_time: Time to expiry in years
            strike: Strike
            forward: Forward rate for the expiry

        Returns:
            Implied volatility (annualized, e.g., 0.10 for 10%)
        """
        ...

    def slice_at_time(self, expiry_time: float) -> Smile:
        ...

    def node_metadata(self) -> Sequence[NodeMetadata]:
        ...

    def nodes(self) -> Iterator[tuple[int, int]]:
        """``(pillar_index, wing_position)`` of every node, canonical order."""
        ...

    def with_bumped_node(
        self, pillar_index: int, wing_position: int, epsilon: float
    ) -> "SmileTermStructure":
        ...


__all__ = ["NodeMetadata", "Smile", "SmileTermStructure"]
