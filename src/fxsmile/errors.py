"""Exception hierarchy for smile construction and volatility queries."""

from __future__ import annotations


class FxSmileError(Exception):
    """Base class for all errors raised by :mod:`fxsmile`."""


class InvalidInputError(FxSmileError, ValueError):
    """Raised when structural inputs are inconsistent.

    Examples are non-increasing pillar times, delta grids of different sizes
    across pillars, volatility arrays whose length does not match the delta
    grid, or a currency pair the provider does not quote.
    """


class DomainError(FxSmileError, ValueError):
    """Raised when a numeric argument lies outside its mathematical domain.

    Covers non-positive forwards, strikes and expiry times, strikes that come
    out non-positive (or non-finite) from the delta inversion, and expiries
    preceding the valuation date.
    """


__all__ = ["FxSmileError", "InvalidInputError", "DomainError"]
